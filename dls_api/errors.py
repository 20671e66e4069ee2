# dls_api/errors.py
from __future__ import annotations


class DLSError(Exception):
    """
    Base for every failure the calculator reports.

    `kind` is the stable machine-readable name surfaced to callers
    (HTTP detail, CLI output); the message is for humans.
    """
    kind = "DLSError"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict:
        return {"kind": self.kind, "message": self.message}


class InvalidMatchSetupError(DLSError):
    """Starting overs non-positive, fractional or beyond 50; unknown category; bad G50."""
    kind = "InvalidMatchSetupError"


class InvalidInterruptionError(DLSError):
    """Interruption inconsistent with the innings' current allocation."""
    kind = "InvalidInterruptionError"


class OutOfRangeError(DLSError):
    """Resource table lookup outside its domain (negative overs, wickets > 9)."""
    kind = "OutOfRangeError"


class InvalidScoreError(DLSError):
    kind = "InvalidScoreError"


class InvalidResourceError(DLSError):
    kind = "InvalidResourceError"


class MatchNotFoundError(DLSError):
    kind = "MatchNotFoundError"
