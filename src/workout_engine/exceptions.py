"""Custom exception hierarchy for the workout engine."""

from __future__ import annotations


class WorkoutEngineError(Exception):
    """Base exception for all workout_engine errors."""


class RecordParseError(WorkoutEngineError):
    """A file or payload could not be read as a workout record."""


class TokenDecodeError(WorkoutEngineError):
    """An authoring token did not match any known grammar."""

    def __init__(self, token: str, reason: str = "unrecognized token") -> None:
        super().__init__(f"{reason}: {token!r}")
        self.token = token
        self.reason = reason
