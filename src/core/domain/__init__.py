"""
Domain models and value objects.

Contains the BigInt value type and its free operations.
"""

from src.core.domain.bigint import (
    INT64_MAX,
    INT64_MIN,
    BigInt,
    big_divmod,
    compare,
)
from src.core.math.hex_codec import HexCodecConfig, InvalidFormat
from src.core.math.limb_arithmetic import BigIntError, DivisionByZero

__all__ = [
    # BigInt model
    "BigInt",
    "INT64_MIN",
    "INT64_MAX",
    "compare",
    "big_divmod",
    # Errors
    "BigIntError",
    "InvalidFormat",
    "DivisionByZero",
    # Config
    "HexCodecConfig",
]
