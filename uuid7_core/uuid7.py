"""
uuid7_core/uuid7.py — UUID v7 timestamp codec (RFC 9562).

Reads and writes the 48-bit millisecond timestamp of a UUID v7:

    get_timestamp / get_timestamp_ms   UUID v7 → instant
    from_timestamp / from_unix_ns      instant → new UUID v7
    from_string                        v7 text → new UUID v7, same ms

Randomness comes from the OS CSPRNG (entropy.random_bytes); the field
layout is handled by layout.UUID7Fields. Everything here is stateless
and safe to call from any thread.
"""

from __future__ import annotations

import logging
import time
import uuid
from datetime import datetime, timedelta, timezone
from typing import Union

from .entropy import random_bytes
from .errors import (
    STAGE_CONSTRUCT,
    STAGE_EXTRACT,
    EntropySourceError,
    InvalidVersionError,
    MalformedInputError,
    TimestampRangeError,
)
from .layout import (
    MAX_UNIX_TS_MS,
    RAND_A_MASK,
    TIMESTAMP_MASK,
    UUID_SIZE_BYTES,
    VARIANT_RFC9562,
    VERSION_7,
    VERSION_MASK,
    UUID7Fields,
)

logger = logging.getLogger(__name__)

UUIDLike = Union[uuid.UUID, bytes, bytearray]

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
NS_PER_MS = 1_000_000

# The sub-millisecond remainder (0..999_999 ns) shifted right by 8 fits
# in the 12-bit rand_a field (max 3906).
SEQ_SHIFT = 8


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _as_bytes(u: UUIDLike) -> bytes:
    if isinstance(u, uuid.UUID):
        return u.bytes
    if isinstance(u, (bytes, bytearray)):
        if len(u) != UUID_SIZE_BYTES:
            raise ValueError(
                f"UUID must be {UUID_SIZE_BYTES} bytes, got {len(u)}"
            )
        return bytes(u)
    raise TypeError(f"Expected uuid.UUID or 16 bytes, got {type(u).__name__}")


def _version_of(data: bytes) -> int:
    return (data[6] >> 4) & VERSION_MASK


def _datetime_to_unix_ns(ts: datetime) -> int:
    """Exact integer nanoseconds since the epoch. Naive datetimes are UTC."""
    if ts.tzinfo is None:
        ts = ts.replace(tzinfo=timezone.utc)
    delta = ts - EPOCH
    seconds = delta.days * 86_400 + delta.seconds
    return seconds * 1_000_000_000 + delta.microseconds * 1_000


# ---------------------------------------------------------------------------
# Reading
# ---------------------------------------------------------------------------

def is_uuid7(u: UUIDLike) -> bool:
    """True if the version nibble of byte 6 is 7."""
    return _version_of(_as_bytes(u)) == VERSION_7


def get_timestamp_ms(u: UUIDLike) -> int:
    """Return the 48-bit unix_ts_ms field of a UUID v7.

    Bytes 6-7 are looked at only for the version check; the
    sub-millisecond fraction is not part of the result.

    Raises:
        InvalidVersionError: If the version nibble is not 7.
    """
    data = _as_bytes(u)
    version = _version_of(data)
    if version != VERSION_7:
        raise InvalidVersionError(version)
    return int.from_bytes(data[0:6], byteorder="big")


def get_timestamp(u: UUIDLike) -> datetime:
    """Return the embedded timestamp as an aware UTC datetime.

    Raises:
        InvalidVersionError: If the version nibble is not 7.
        TimestampRangeError: If the timestamp is past datetime.max
                             (a 48-bit field reaches year ~10889).
    """
    millis = get_timestamp_ms(u)
    try:
        return EPOCH + timedelta(milliseconds=millis)
    except OverflowError as exc:
        raise TimestampRangeError(millis) from exc


# ---------------------------------------------------------------------------
# Writing
# ---------------------------------------------------------------------------

def stamp(baseline: UUIDLike, unix_ts_ms: int, seq: int = 0) -> uuid.UUID:
    """Write timestamp, version 7, seq and variant into existing bytes.

    The low 62 bits of bytes 8-15 are kept from `baseline`; everything
    else is overwritten. unix_ts_ms is masked to 48 bits and seq to
    12 bits.
    """
    fields = UUID7Fields.unpack(_as_bytes(baseline))
    stamped = UUID7Fields(
        unix_ts_ms=unix_ts_ms & TIMESTAMP_MASK,
        version=VERSION_7,
        rand_a=seq & RAND_A_MASK,
        variant=VARIANT_RFC9562,
        rand_b=fields.rand_b,
    )
    return stamped.to_uuid()


def from_unix_ns(ns: int) -> uuid.UUID:
    """Create a UUID v7 for an instant given in nanoseconds since the epoch.

    unix_ts_ms = floor(ns / 1e6). rand_a carries the sub-millisecond
    remainder >> 8; it is not a counter, so two calls in the same
    millisecond may share it. The 62 rand_b bits are fresh randomness.

    Milliseconds outside [0, 2**48) lose their high bits silently
    (logged as a warning).

    Raises:
        EntropySourceError: If the secure random source fails.
    """
    millis = ns // NS_PER_MS
    if not 0 <= millis <= MAX_UNIX_TS_MS:
        logger.warning(
            "Timestamp %d ms does not fit in 48 bits; truncating to %d",
            millis, millis & TIMESTAMP_MASK,
        )
    seq = (ns - millis * NS_PER_MS) >> SEQ_SHIFT

    baseline = random_bytes(UUID_SIZE_BYTES)
    result = stamp(baseline, millis, seq)
    logger.debug("Created UUID v7 %s for unix_ts_ms=%d", result, millis)
    return result


def from_timestamp(ts: datetime) -> uuid.UUID:
    """Create a UUID v7 pinned to `ts` with fresh random bits.

    Microsecond precision of `ts` feeds the 12-bit sub-millisecond
    field. Naive datetimes are interpreted as UTC.

    Raises:
        EntropySourceError: If the secure random source fails.
    """
    if not isinstance(ts, datetime):
        raise TypeError(f"Expected datetime, got {type(ts).__name__}")
    return from_unix_ns(_datetime_to_unix_ns(ts))


def from_string(text: str) -> uuid.UUID:
    """Re-stamp a UUID v7 given as text: same millisecond, new randomness.

    Only version 7 input is accepted; the timestamp must come from
    somewhere.

    Raises:
        MalformedInputError: Text does not parse as a UUID.
        InvalidVersionError: Parsed UUID is not version 7
                             (stage "getting uuid v7 timestamp").
        EntropySourceError:  Secure random source failed
                             (stage "creating uuid v7 from timestamp").
    """
    if not isinstance(text, str):
        raise MalformedInputError(text, f"expected str, got {type(text).__name__}")
    try:
        parsed = uuid.UUID(text)
    except ValueError as exc:
        raise MalformedInputError(text, str(exc)) from exc

    try:
        millis = get_timestamp_ms(parsed)
    except InvalidVersionError as exc:
        raise InvalidVersionError(exc.version, stage=STAGE_EXTRACT) from exc

    try:
        result = from_unix_ns(millis * NS_PER_MS)
    except EntropySourceError as exc:
        raise EntropySourceError(exc.detail, stage=STAGE_CONSTRUCT) from exc

    logger.debug("Re-stamped %s as %s", parsed, result)
    return result


def uuid7() -> uuid.UUID:
    """Generate a UUID v7 for the current time."""
    return from_unix_ns(time.time_ns())
