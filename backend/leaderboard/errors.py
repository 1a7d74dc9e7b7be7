"""
Exceptions for the leaderboard service with client-facing messages.

Every error carries an HTTP status and a ``user_message``. Client errors
(4xx) show their message as-is; server errors (5xx) are logged in full and
only show the detail when ``EXPOSE_ERROR_DETAILS`` is enabled.
"""

from flask import jsonify


class LeaderboardError(Exception):
    """Base exception for leaderboard-related errors."""
    status_code = 500

    def __init__(self, message: str, user_message: str = None):
        super().__init__(message)
        self.user_message = user_message or message


class MissingAuth(LeaderboardError):
    status_code = 401

    def __init__(self):
        super().__init__("You didn't provide a authorization token!")


class WrongAuth(LeaderboardError):
    status_code = 401

    def __init__(self):
        super().__init__("You didn't provide a valid authorization token!")


class InvalidId(LeaderboardError):
    status_code = 400

    def __init__(self, raw_id: str = None):
        super().__init__(
            f"Malformed score id {raw_id!r}",
            "The given id is malformed! Where did you get it from?"
        )


class InvalidScore(LeaderboardError):
    status_code = 400

    def __init__(self):
        super().__init__("Invalid score")


class MalformedColor(LeaderboardError):
    status_code = 400

    def __init__(self):
        super().__init__("Malformed color")


class UnknownClaim(LeaderboardError):
    """The id is well-formed but no unclaimed score exists for it (anymore)."""
    status_code = 400

    def __init__(self, score_id: str):
        super().__init__(
            f"No unclaimed score with id {score_id}",
            "This score does not exist or was already claimed."
        )
        self.score_id = score_id


class IncompleteSubmission(LeaderboardError):
    status_code = 400

    def __init__(self, field: str):
        super().__init__(
            f"You didn't provide all necessary data points! ({field})",
            "Du hast nicht alle notwendigen Felder ausgefüllt."
        )
        self.field = field


class ScoreNotFound(LeaderboardError):
    status_code = 404

    def __init__(self, score_id: str):
        super().__init__(f"Unclaimed score {score_id} not found", "Score not found")
        self.score_id = score_id


class StorageFailure(LeaderboardError):
    """Raised when a ledger read or write fails."""

    def __init__(self, operation: str, details: str = None):
        super().__init__(
            f"Database error during {operation}: {details}",
            "Internal server error"
        )
        self.operation = operation


class StaleClaim(StorageFailure):
    """The unclaimed score row vanished before it could be deleted."""

    def __init__(self, score_id: str):
        super().__init__('delete', f"no unclaimed score with id {score_id}")
        self.score_id = score_id


class TransmitError(LeaderboardError):
    """The external registration failed after the claim was committed.

    ``result`` holds the settlement that was already applied.
    """

    def __init__(self, cause: Exception, result=None):
        super().__init__(
            f"Couldn't transmit data to the registration server! Reason: {cause}",
            "Wir konnten dich leider nicht in das Gewinnspiel-Formular eintragen. "
            "Bitte frage einen der anwesenden Standbetreuenden um Hilfe!"
        )
        self.cause = cause
        self.result = result


def register_error_handlers(app) -> None:
    @app.errorhandler(LeaderboardError)
    def handle_leaderboard_error(exc):
        if exc.status_code >= 500:
            app.logger.error(f"[error] {type(exc).__name__}: {exc}", exc_info=exc)
            message = str(exc) if app.config.get('EXPOSE_ERROR_DETAILS') else exc.user_message
        else:
            message = exc.user_message
        return jsonify({'error': message}), exc.status_code
