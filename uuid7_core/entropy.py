"""
uuid7_core/entropy.py — Secure random bytes

Thin wrapper over the platform CSPRNG (os.urandom). Failures surface as
EntropySourceError; there is no fallback to the `random` module.
"""

from __future__ import annotations

import logging
import os

from .errors import EntropySourceError

logger = logging.getLogger(__name__)


def random_bytes(n: int) -> bytes:
    """Return n bytes from the operating system's secure random source.

    Raises:
        EntropySourceError: If the platform has no usable source or
                            returns fewer bytes than requested.
    """
    try:
        data = os.urandom(n)
    except (OSError, NotImplementedError) as exc:
        logger.error("os.urandom(%d) failed: %s", n, exc)
        raise EntropySourceError(str(exc) or type(exc).__name__) from exc

    if len(data) != n:
        logger.error("os.urandom(%d) returned %d bytes", n, len(data))
        raise EntropySourceError(f"expected {n} bytes, got {len(data)}")
    return data
