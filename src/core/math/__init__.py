"""
Core math modules

Magnitude-level арифметика над 64-битными limbs и hex-кодек.
"""

# Limb Arithmetic
from src.core.math.limb_arithmetic import (
    # Limb constants
    LIMB_BASE,
    LIMB_BITS,
    LIMB_MASK,
    ZERO_MAGNITUDE,
    # Exceptions
    BigIntError,
    DivisionByZero,
    # Types
    Magnitude,
    # Normalization
    is_zero_magnitude,
    normalize,
    normalize_limbs,
    validate_limb,
    # Bit-length / comparison
    bit_length_of,
    compare_magnitudes,
    count_leading_zeros,
    # Shifts
    shift_left_magnitude,
    shift_right_magnitude,
    # Arithmetic
    add_magnitudes,
    divmod_magnitudes,
    mul_magnitudes,
    sub_magnitudes,
)

# Hex Codec
from src.core.math.hex_codec import (
    HEX_ALPHABET,
    HEX_DIGIT_BITS,
    HEX_DIGITS_PER_LIMB,
    HexCodecConfig,
    InvalidFormat,
    format_hex_magnitude,
    hex_digit_value,
    parse_hex_magnitude,
    parse_little_endian_hex_magnitude,
)

__all__ = [
    # Limb Arithmetic — Constants
    "LIMB_BASE",
    "LIMB_BITS",
    "LIMB_MASK",
    "ZERO_MAGNITUDE",
    # Limb Arithmetic — Exceptions
    "BigIntError",
    "DivisionByZero",
    # Limb Arithmetic — Types
    "Magnitude",
    # Limb Arithmetic — Normalization
    "is_zero_magnitude",
    "normalize",
    "normalize_limbs",
    "validate_limb",
    # Limb Arithmetic — Bit-length / comparison
    "bit_length_of",
    "compare_magnitudes",
    "count_leading_zeros",
    # Limb Arithmetic — Shifts
    "shift_left_magnitude",
    "shift_right_magnitude",
    # Limb Arithmetic — Arithmetic
    "add_magnitudes",
    "divmod_magnitudes",
    "mul_magnitudes",
    "sub_magnitudes",
    # Hex Codec — Constants
    "HEX_ALPHABET",
    "HEX_DIGIT_BITS",
    "HEX_DIGITS_PER_LIMB",
    # Hex Codec — Config
    "HexCodecConfig",
    # Hex Codec — Exceptions
    "InvalidFormat",
    # Hex Codec — Functions
    "format_hex_magnitude",
    "hex_digit_value",
    "parse_hex_magnitude",
    "parse_little_endian_hex_magnitude",
]
