"""
uuid7_core/layout.py — UUID v7 128-bit layout

Named-field view of the 16 identifier bytes with explicit pack/unpack,
so the bit arithmetic lives in one place instead of at every call site.

     0                   1                   2                   3
     0 1 2 3 4 5 6 7 8 9 0 1 2 3 4 5 6 7 8 9 0 1 2 3 4 5 6 7 8 9 0 1
    +-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+
    |                           unix_ts_ms                          |
    +-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+
    |          unix_ts_ms           |  ver  |        rand_a         |
    +-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+
    |var|                        rand_b                             |
    +-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+
    |                            rand_b                             |
    +-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+

Reference: RFC 9562 §5.7
"""

import uuid

from pydantic import BaseModel, ConfigDict, Field


# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

UUID_SIZE_BYTES = 16

TIMESTAMP_BITS = 48
VERSION_BITS = 4
RAND_A_BITS = 12
VARIANT_BITS = 2
RAND_B_BITS = 62

TIMESTAMP_MASK = (1 << TIMESTAMP_BITS) - 1
VERSION_MASK = (1 << VERSION_BITS) - 1
RAND_A_MASK = (1 << RAND_A_BITS) - 1
VARIANT_MASK = (1 << VARIANT_BITS) - 1
RAND_B_MASK = (1 << RAND_B_BITS) - 1

# Bit offsets from the least significant end of the 128-bit integer.
TIMESTAMP_SHIFT = 80
VERSION_SHIFT = 76
RAND_A_SHIFT = 64
VARIANT_SHIFT = 62

VERSION_7 = 7
VARIANT_RFC9562 = 0b10

# Largest millisecond value the timestamp field can hold (~ year 10889).
MAX_UNIX_TS_MS = TIMESTAMP_MASK


# ---------------------------------------------------------------------------
# Field model
# ---------------------------------------------------------------------------

class UUID7Fields(BaseModel):
    """The five fields of a UUID in v7 layout.

    Any 16 bytes unpack into this model; whether the version is actually
    7 is checked by the codec, not here.
    """

    model_config = ConfigDict(frozen=True)

    unix_ts_ms: int = Field(
        ...,
        description="Milliseconds since the Unix epoch (48-bit, big-endian).",
        ge=0,
        le=TIMESTAMP_MASK,
    )
    version: int = Field(
        default=VERSION_7,
        description="High nibble of byte 6.",
        ge=0,
        le=VERSION_MASK,
    )
    rand_a: int = Field(
        default=0,
        description="12-bit sub-millisecond fraction (bytes 6-7).",
        ge=0,
        le=RAND_A_MASK,
    )
    variant: int = Field(
        default=VARIANT_RFC9562,
        description="Top two bits of byte 8.",
        ge=0,
        le=VARIANT_MASK,
    )
    rand_b: int = Field(
        default=0,
        description="62 random bits (rest of bytes 8-15).",
        ge=0,
        le=RAND_B_MASK,
    )

    @classmethod
    def unpack(cls, data: bytes) -> "UUID7Fields":
        """Split 16 raw bytes into fields.

        Raises:
            ValueError: If data is not exactly 16 bytes.
        """
        if len(data) != UUID_SIZE_BYTES:
            raise ValueError(
                f"UUID must be {UUID_SIZE_BYTES} bytes, got {len(data)}"
            )
        value = int.from_bytes(data, byteorder="big")
        return cls(
            unix_ts_ms=(value >> TIMESTAMP_SHIFT) & TIMESTAMP_MASK,
            version=(value >> VERSION_SHIFT) & VERSION_MASK,
            rand_a=(value >> RAND_A_SHIFT) & RAND_A_MASK,
            variant=(value >> VARIANT_SHIFT) & VARIANT_MASK,
            rand_b=value & RAND_B_MASK,
        )

    @classmethod
    def from_uuid(cls, u: uuid.UUID) -> "UUID7Fields":
        return cls.unpack(u.bytes)

    def pack(self) -> bytes:
        """Join the fields back into 16 big-endian bytes."""
        value = (
            (self.unix_ts_ms & TIMESTAMP_MASK) << TIMESTAMP_SHIFT
            | (self.version & VERSION_MASK) << VERSION_SHIFT
            | (self.rand_a & RAND_A_MASK) << RAND_A_SHIFT
            | (self.variant & VARIANT_MASK) << VARIANT_SHIFT
            | (self.rand_b & RAND_B_MASK)
        )
        return value.to_bytes(UUID_SIZE_BYTES, byteorder="big")

    def to_uuid(self) -> uuid.UUID:
        return uuid.UUID(bytes=self.pack())
