from __future__ import annotations


class ChallengeError(Exception):
    """Base class for expected, recoverable outcomes surfaced to callers."""

    default_message = "Challenge request rejected"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class OutOfWindowError(ChallengeError):
    default_message = "Date is outside the challenge window"


class StaleEditError(ChallengeError):
    default_message = "You can only edit logs for the current date."


class ConflictError(ChallengeError):
    default_message = "A log for this participant and date was written concurrently"


class DuplicateUsernameError(ChallengeError):
    default_message = "Username already taken"


class ValidationError(ChallengeError):
    default_message = "Invalid daily log"


class ParticipantNotFoundError(ChallengeError):
    default_message = "Join the challenge before logging"
