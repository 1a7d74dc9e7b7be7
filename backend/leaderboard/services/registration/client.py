import logging
import re
from dataclasses import dataclass
from typing import Dict, Optional

import httpx

from .form import RegistrationForm

# Hidden one-time token on the registration page
TOKEN_PATTERN = re.compile(r'<input type="hidden" name="zz_id" value="(.{5,10})">')
DEFAULT_EVENT_ID = 4062
# How much of the remote answer ends up in the log
LOGGED_BODY_CHARS = 2000


class SubmissionError(Exception):
    """Base class for failures talking to the registration form."""


class TokenFetchFailed(SubmissionError):
    def __init__(self, cause: Exception):
        super().__init__(
            f"Couldn't fetch access token from the registration page. Are we blocked? Internal Error: {cause}"
        )
        self.cause = cause


class TokenExtractFailed(SubmissionError):
    def __init__(self):
        super().__init__("Couldn't extract token from the registration page. Did the layout change?")


class SubmitFailed(SubmissionError):
    def __init__(self, cause: Exception):
        super().__init__(
            "Couldn't submit data to the registration page. Are we blocked, was the format changed "
            f"or did the user enter something malformed? Internal Error: {cause}"
        )
        self.cause = cause


@dataclass
class RegistrationReceipt:
    token: str
    status_code: int


class RegistrationClient:
    """Posts raffle entries to a third-party HTML form.

    The form expects a one-time ``zz_id`` token scraped from the page, so a
    submission is always GET page -> extract token -> POST form. Tokens are
    never reused and nothing is retried.
    """

    def __init__(self, url: str, event_id: int = DEFAULT_EVENT_ID, timeout: float = 10.0,
                 transport: Optional[httpx.BaseTransport] = None, logger=None):
        self.url = url
        self.event_id = event_id
        self.timeout = timeout
        self.transport = transport
        self.logger = logger or logging.getLogger(__name__)

    @classmethod
    def from_app(cls, app) -> 'RegistrationClient':
        cfg = app.config
        return cls(
            url=cfg['REGISTRATION_URL'],
            event_id=int(cfg.get('REGISTRATION_EVENT_ID', DEFAULT_EVENT_ID)),
            timeout=float(cfg.get('REGISTRATION_TIMEOUT_SEC', 10)),
            transport=cfg.get('REGISTRATION_TRANSPORT'),
            logger=app.logger,
        )

    def _client(self) -> httpx.Client:
        return httpx.Client(timeout=self.timeout, transport=self.transport, follow_redirects=True)

    def fetch_form_token(self, client: httpx.Client) -> str:
        try:
            response = client.get(self.url)
            response.raise_for_status()
        except httpx.HTTPError as exc:
            raise TokenFetchFailed(exc) from exc
        match = TOKEN_PATTERN.search(response.text)
        if not match:
            raise TokenExtractFailed()
        return match.group(1)

    def post_form(self, client: httpx.Client, payload: Dict[str, str]) -> httpx.Response:
        try:
            response = client.post(self.url, data=payload)
            response.raise_for_status()
        except httpx.HTTPError as exc:
            raise SubmitFailed(exc) from exc
        return response

    def submit(self, form: RegistrationForm) -> RegistrationReceipt:
        with self._client() as client:
            token = self.fetch_form_token(client)
            response = self.post_form(client, form.to_payload(token, self.event_id))
        # A 200 can still be an error page, keep the answer for operators
        self.logger.info(
            f"[registration] submitted status={response.status_code} "
            f"body={response.text[:LOGGED_BODY_CHARS]!r}"
        )
        return RegistrationReceipt(token=token, status_code=response.status_code)
