"""
uuid7_core — UUID v7 timestamp codec.

Extract the millisecond timestamp of a UUID v7, mint a UUID v7 for an
arbitrary instant, or re-stamp an existing one with fresh randomness.
"""

__version__ = "0.1.0"

from .errors import (
    UUID7Error,
    InvalidVersionError,
    MalformedInputError,
    EntropySourceError,
    TimestampRangeError,
    STAGE_CHECK_VERSION,
    STAGE_ENTROPY,
    STAGE_PARSE,
    STAGE_EXTRACT,
    STAGE_CONSTRUCT,
    STAGE_CONVERT,
)
from .layout import (
    UUID7Fields,
    MAX_UNIX_TS_MS,
    VERSION_7,
    VARIANT_RFC9562,
)
from .entropy import random_bytes
from .uuid7 import (
    get_timestamp,
    get_timestamp_ms,
    from_timestamp,
    from_unix_ns,
    from_string,
    stamp,
    is_uuid7,
    uuid7,
)
