from typing import Optional, Tuple

from leaderboard.errors import InvalidScore, MalformedColor, MissingAuth, WrongAuth
from leaderboard.helpers import slow_equals

MAX_SCORE = 2 ** 31 - 1
HEX_DIGITS = set('0123456789abcdefABCDEF')


def check_token(authorization: Optional[str], secret: str) -> None:
    """Reject the request unless the Authorization header carries the secret.

    Both the raw token and ``Bearer <token>`` are accepted.
    """
    if not authorization:
        raise MissingAuth()
    token = authorization
    if token[:7].lower() == 'bearer ':
        token = token[7:].strip()
    # An unset secret must not let an empty token through
    if not secret or not slow_equals(token.encode('utf-8'), secret.encode('utf-8')):
        raise WrongAuth()


def validate_color(color) -> str:
    if not isinstance(color, str) or len(color) != 7:
        raise MalformedColor()
    if not color.startswith('#'):
        raise MalformedColor()
    if sum(1 for c in color if c in HEX_DIGITS) != 6:
        raise MalformedColor()
    return color


def validate_score(score) -> int:
    # bool is an int subclass, JSON true must not count as 1
    if isinstance(score, bool) or not isinstance(score, int):
        raise InvalidScore()
    if score < 0 or score > MAX_SCORE:
        raise InvalidScore()
    return score


def validate_payload(payload) -> Tuple[int, str]:
    if not isinstance(payload, dict):
        raise InvalidScore()
    return validate_score(payload.get('score')), validate_color(payload.get('color'))


def accept_score(authorization: Optional[str], payload, secret: str, ledger) -> str:
    """Authenticate and validate a game client submission, then store it.

    Nothing is written unless every check passes. Returns the new score id.
    """
    check_token(authorization, secret)
    score, color = validate_payload(payload)
    return ledger.insert_unclaimed(score, color)
