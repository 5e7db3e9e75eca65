"""
uuid7_core/errors.py — Error taxonomy for the UUID v7 codec.

Every error carries the stage that produced it, so a caller composing
several steps (from_string does parse → extract → construct) can tell
which one failed from the exception class and `.stage` alone.

Each concrete error also derives from the built-in exception a caller
would naturally catch (ValueError for bad input, RuntimeError for a
platform failure).
"""

from __future__ import annotations

from typing import Optional


# ---------------------------------------------------------------------------
# Stage labels
# ---------------------------------------------------------------------------

STAGE_CHECK_VERSION = "checking uuid version"
STAGE_ENTROPY = "generating random bytes"
STAGE_PARSE = "parsing input string uuid"
STAGE_EXTRACT = "getting uuid v7 timestamp"
STAGE_CONSTRUCT = "creating uuid v7 from timestamp"
STAGE_CONVERT = "converting timestamp to datetime"


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------

class UUID7Error(Exception):
    """Base exception for all uuid7_core errors."""

    def __init__(self, message: str, stage: Optional[str] = None) -> None:
        super().__init__(message)
        self.message = message
        self.stage = stage

    def __str__(self) -> str:
        if self.stage:
            return f"{self.stage}: {self.message}"
        return self.message


class InvalidVersionError(UUID7Error, ValueError):
    """The identifier's version nibble is not 7."""

    def __init__(self, version: int, stage: Optional[str] = STAGE_CHECK_VERSION) -> None:
        super().__init__(
            f"invalid uuid version: expected 7, got {version}",
            stage=stage,
        )
        self.version = version


class MalformedInputError(UUID7Error, ValueError):
    """Text could not be parsed as a UUID of any version."""

    def __init__(self, text: object, detail: str, stage: Optional[str] = STAGE_PARSE) -> None:
        super().__init__(f"malformed uuid {text!r}: {detail}", stage=stage)
        self.text = text
        self.detail = detail


class EntropySourceError(UUID7Error, RuntimeError):
    """The platform's secure random source produced no usable output.

    There is no fallback to a weaker generator.
    """

    def __init__(self, detail: str, stage: Optional[str] = STAGE_ENTROPY) -> None:
        super().__init__(f"secure random source failed: {detail}", stage=stage)
        self.detail = detail


class TimestampRangeError(UUID7Error, OverflowError):
    """A 48-bit timestamp that `datetime` cannot represent (past year 9999)."""

    def __init__(self, unix_ts_ms: int, stage: Optional[str] = STAGE_CONVERT) -> None:
        super().__init__(
            f"timestamp {unix_ts_ms} ms is beyond datetime range; "
            f"use get_timestamp_ms()",
            stage=stage,
        )
        self.unix_ts_ms = unix_ts_ms
