import threading
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Callable, Dict, Mapping, Optional

from flask import current_app

from leaderboard import socketio
from leaderboard.errors import (
    IncompleteSubmission,
    ScoreNotFound,
    StaleClaim,
    TransmitError,
    UnknownClaim,
)
from leaderboard.helpers import parse_flag, sanitize_name
from leaderboard.services.registration import (
    RegistrationClient,
    RegistrationForm,
    RegistrationReceipt,
    SubmissionError,
)
from .ledger import ScoreLedger

# Per score id locks, runtime-only
_locks_guard = threading.Lock()
_claim_locks: Dict[str, threading.Lock] = {}
_claim_waiters: Dict[str, int] = {}


@contextmanager
def claim_lock(score_id: str):
    """Hold the exclusive settlement lock for one score id."""
    with _locks_guard:
        lock = _claim_locks.setdefault(score_id, threading.Lock())
        _claim_waiters[score_id] = _claim_waiters.get(score_id, 0) + 1
    lock.acquire()
    try:
        yield
    finally:
        lock.release()
        with _locks_guard:
            _claim_waiters[score_id] -= 1
            if _claim_waiters[score_id] == 0:
                del _claim_waiters[score_id]
                del _claim_locks[score_id]


@dataclass
class ClaimDecision:
    wants_leaderboard: Optional[bool] = None
    wants_raffle: Optional[bool] = None
    nickname: str = ''
    email: str = ''
    firstname: str = ''
    lastname: str = ''
    newsletter: bool = False
    data_protection: Optional[bool] = None
    occupation: str = ''

    @classmethod
    def from_form(cls, form: Mapping) -> 'ClaimDecision':
        return cls(
            wants_leaderboard=parse_flag(form.get('wants_leaderboard')),
            wants_raffle=parse_flag(form.get('wants_raffle')),
            nickname=form.get('nickname', ''),
            email=form.get('email', ''),
            firstname=form.get('firstname', ''),
            lastname=form.get('lastname', ''),
            newsletter=bool(parse_flag(form.get('newsletter'))),
            data_protection=parse_flag(form.get('data_protection')),
            occupation=form.get('occupation', ''),
        )


@dataclass
class SettlementResult:
    score_id: str
    score: int
    leaderboard_entry: Optional[str] = None
    registration: Optional[RegistrationReceipt] = None

    @property
    def stages(self):
        ran = ['delete']
        if self.leaderboard_entry is not None:
            ran.append('leaderboard')
        if self.registration is not None:
            ran.append('registration')
        return ran


def _stage_nickname(decision: ClaimDecision) -> Optional[str]:
    if decision.wants_leaderboard is not True:
        return None
    nickname = decision.nickname.rstrip()
    if not nickname:
        raise IncompleteSubmission('nickname')
    return sanitize_name(nickname)


def _stage_registration(decision: ClaimDecision) -> Optional[RegistrationForm]:
    if decision.wants_raffle is not True:
        return None
    for field in ('email', 'firstname', 'lastname'):
        if not getattr(decision, field).rstrip():
            raise IncompleteSubmission(field)
    if not decision.data_protection:
        raise IncompleteSubmission('data_protection')
    return RegistrationForm.from_decision(decision)


def _default_submit(form: RegistrationForm) -> RegistrationReceipt:
    return RegistrationClient.from_app(current_app).submit(form)


def settle_claim(score_id: str, decision: ClaimDecision, ledger: Optional[ScoreLedger] = None,
                 submit: Optional[Callable[[RegistrationForm], RegistrationReceipt]] = None) -> SettlementResult:
    """Turn one unclaimed score into its leaderboard entry and/or raffle entry.

    The unclaimed score is consumed whenever validation passes, even if the
    claimant opted into nothing. Fetch, validation, delete and insert run
    under the per-id lock in one transaction, so a second claim for the same
    id only ever sees ``UnknownClaim``. The raffle submission runs after the
    commit; if it fails, ``TransmitError`` carries the applied result.
    """
    ledger = ledger or ScoreLedger()
    submit = submit or _default_submit

    with claim_lock(score_id):
        with ledger.transaction('settle claim'):
            try:
                unclaimed = ledger.fetch_unclaimed(score_id)
            except ScoreNotFound as exc:
                raise UnknownClaim(score_id) from exc

            nickname = _stage_nickname(decision)
            registration = _stage_registration(decision)
            score = unclaimed.score

            try:
                ledger.delete_unclaimed(score_id)
            except StaleClaim as exc:
                # Another process settled it between our fetch and delete
                raise UnknownClaim(score_id) from exc
            if nickname is not None:
                ledger.insert_leaderboard_entry(nickname, score)

    result = SettlementResult(score_id=score_id, score=score, leaderboard_entry=nickname)
    current_app.logger.info(
        f"[claim] settled id={score_id} score={score} stages={','.join(result.stages)}"
    )
    socketio.emit('unclaimed_update', {'id': score_id, 'claimed': True}, to='claims', namespace='/ws')
    if nickname is not None:
        socketio.emit('leaderboard_update', {'nickname': nickname, 'score': score}, to='leaderboard', namespace='/ws')

    if registration is not None:
        try:
            result.registration = submit(registration)
        except SubmissionError as exc:
            current_app.logger.warning(f"[claim] registration failed id={score_id}: {exc}")
            raise TransmitError(exc, result) from exc
    return result
