from contextlib import contextmanager
from typing import List, Optional, Tuple

from sqlalchemy import delete
from sqlalchemy.exc import SQLAlchemyError

from leaderboard import db
from leaderboard.errors import ScoreNotFound, StaleClaim, StorageFailure
from leaderboard.models import LeaderboardEntry, UnclaimedScore, generate_score_id


class ScoreLedger:
    """Storage for unclaimed scores and finalized leaderboard entries.

    ``insert_unclaimed`` commits on its own. ``delete_unclaimed`` and
    ``insert_leaderboard_entry`` only stage their change; callers group them
    with ``transaction()``.
    """

    def __init__(self, session=None):
        self.session = session if session is not None else db.session

    def insert_unclaimed(self, score: int, color: str) -> str:
        score_id = generate_score_id()
        try:
            self.session.add(UnclaimedScore(id=score_id, score=score, color=color))
            self.session.commit()
        except SQLAlchemyError as exc:
            self.session.rollback()
            raise StorageFailure('insert unclaimed score', str(exc)) from exc
        return score_id

    def fetch_unclaimed(self, score_id: str) -> UnclaimedScore:
        try:
            row = self.session.get(UnclaimedScore, score_id)
        except SQLAlchemyError as exc:
            raise StorageFailure('fetch unclaimed score', str(exc)) from exc
        if row is None:
            raise ScoreNotFound(score_id)
        return row

    def delete_unclaimed(self, score_id: str) -> None:
        """Delete exactly one unclaimed score; a missing row is an error."""
        try:
            result = self.session.execute(
                delete(UnclaimedScore)
                .where(UnclaimedScore.id == score_id)
                .execution_options(synchronize_session='evaluate')
            )
        except SQLAlchemyError as exc:
            raise StorageFailure('delete unclaimed score', str(exc)) from exc
        if result.rowcount != 1:
            raise StaleClaim(score_id)

    def insert_leaderboard_entry(self, nickname: str, score: int) -> LeaderboardEntry:
        entry = LeaderboardEntry(nickname=nickname, score=score)
        try:
            self.session.add(entry)
            self.session.flush()
        except SQLAlchemyError as exc:
            raise StorageFailure('insert leaderboard entry', str(exc)) from exc
        return entry

    def scan_leaderboard(self) -> List[Tuple[str, int]]:
        try:
            rows = (
                self.session.query(LeaderboardEntry)
                .order_by(LeaderboardEntry.score.desc(), LeaderboardEntry.id.asc())
                .all()
            )
        except SQLAlchemyError as exc:
            raise StorageFailure('fetch leaderboard', str(exc)) from exc
        return [(row.nickname, row.score) for row in rows]

    def scan_unclaimed(self) -> List[UnclaimedScore]:
        try:
            return self.session.query(UnclaimedScore).order_by(UnclaimedScore.created_at.desc()).all()
        except SQLAlchemyError as exc:
            raise StorageFailure('fetch unclaimed scores', str(exc)) from exc

    @contextmanager
    def transaction(self, operation: Optional[str] = None):
        """Commit everything staged inside the block, or roll it all back."""
        try:
            yield self
            self.session.commit()
        except SQLAlchemyError as exc:
            self.session.rollback()
            raise StorageFailure(operation or 'commit', str(exc)) from exc
        except Exception:
            self.session.rollback()
            raise
