"""
Hex Codec — Конверсия hex-текста ↔ magnitude (64-битные limbs)

Формат ввода:
- ASCII hex, big-endian (старшая цифра первой), без знака и без префикса
- Алфавит: 0123456789abcdefABCDEF (регистр не важен)
- Пустая строка → ноль

Формат вывода:
- Опциональный ведущий '-'
- Старший limb без ведущих нулей
- Каждый следующий limb: ровно 16 hex-цифр, zero-padded, lowercase
- Ноль → "0"

Парсинг идёт от последнего символа к первому: каждые 4 бита упаковываются
в текущий limb, 16 символов = один limb, готовые limbs добавляются
в порядке возрастания значимости.
"""

from dataclasses import dataclass
from typing import Final, Iterable, Sequence

from src.core.math.limb_arithmetic import (
    LIMB_BITS,
    BigIntError,
    Magnitude,
    is_zero_magnitude,
    normalize_limbs,
)

# =============================================================================
# CONSTANTS
# =============================================================================

# Бит на одну hex-цифру
HEX_DIGIT_BITS: Final[int] = 4

# Hex-цифр на один 64-битный limb
HEX_DIGITS_PER_LIMB: Final[int] = LIMB_BITS // HEX_DIGIT_BITS

# Допустимый алфавит ввода
HEX_ALPHABET: Final[str] = "0123456789abcdefABCDEF"

HEX_PREFIXES: Final[tuple[str, ...]] = ("0x", "0X")


# =============================================================================
# EXCEPTIONS
# =============================================================================


class InvalidFormat(BigIntError, ValueError):
    """
    Некорректный hex-ввод при парсинге.

    Символ вне алфавита [0-9a-fA-F] или ввод длиннее
    HexCodecConfig.max_digits.
    """

    pass


# =============================================================================
# CONFIG
# =============================================================================


@dataclass(frozen=True)
class HexCodecConfig:
    """Конфигурация hex-кодека.

    Значения по умолчанию дают канонический формат: без префикса,
    lowercase, без ограничения длины.
    """

    allow_prefix: bool = False  # Принимать ведущий "0x"/"0X" (только big-endian ввод)
    uppercase: bool = False  # Выводить A-F вместо a-f
    max_digits: int | None = None  # Максимум hex-цифр на вводе (None = без лимита)


# =============================================================================
# ПАРСИНГ
# =============================================================================


def hex_digit_value(char: str, position: int = 0) -> int:
    """
    Значение одной hex-цифры.

    Принимаются только ASCII-цифры; юникодные цифры других письменностей
    отвергаются.

    Args:
        char: Один символ
        position: Индекс символа во входной строке (для сообщения об ошибке)

    Returns:
        Значение 0..15

    Raises:
        InvalidFormat: Если символ вне [0-9a-fA-F]
    """
    if "0" <= char <= "9":
        return ord(char) - ord("0")
    if "a" <= char <= "f":
        return ord(char) - ord("a") + 10
    if "A" <= char <= "F":
        return ord(char) - ord("A") + 10

    raise InvalidFormat(f"Invalid hex character {char!r} at position {position}")


def _check_length(digits: str, config: HexCodecConfig) -> None:
    if config.max_digits is None:
        return

    if config.max_digits <= 0:
        raise ValueError(f"max_digits must be positive, got {config.max_digits}")

    if len(digits) > config.max_digits:
        raise InvalidFormat(
            f"Hex input has {len(digits)} digits, exceeds max_digits={config.max_digits}"
        )


def _pack_hex_digits(indexed_digits: Iterable[tuple[int, str]]) -> Magnitude:
    """Упаковка цифр (от младшей к старшей) в limbs по 16 штук."""
    limbs = []
    current = 0
    count = 0

    for position, char in indexed_digits:
        current |= hex_digit_value(char, position) << (count * HEX_DIGIT_BITS)
        count += 1
        if count == HEX_DIGITS_PER_LIMB:
            limbs.append(current)
            current = 0
            count = 0

    if count > 0:
        limbs.append(current)

    return normalize_limbs(limbs)


def parse_hex_magnitude(text: str, config: HexCodecConfig | None = None) -> Magnitude:
    """
    Парсинг big-endian hex-строки в magnitude.

    Args:
        text: Hex-строка, старшая цифра первой
        config: Конфигурация кодека (опционально, используется default)

    Returns:
        Нормализованная magnitude; пустая строка → (0,)

    Raises:
        InvalidFormat: Символ вне алфавита или превышен max_digits

    Examples:
        >>> parse_hex_magnitude("ff")
        (255,)
        >>> parse_hex_magnitude("10000000000000000")
        (0, 1)
    """
    config = config or HexCodecConfig()

    offset = 0
    if config.allow_prefix and text.startswith(HEX_PREFIXES):
        offset = len(HEX_PREFIXES[0])
    digits = text[offset:]

    _check_length(digits, config)

    return _pack_hex_digits(
        (offset + i, digits[i]) for i in range(len(digits) - 1, -1, -1)
    )


def parse_little_endian_hex_magnitude(
    text: str,
    config: HexCodecConfig | None = None,
) -> Magnitude:
    """
    Парсинг hex-строки, записанной младшей цифрой вперёд.

    Эквивалентно parse_hex_magnitude(text[::-1]), но позиции в ошибках
    указывают на исходную строку. Префикс "0x" здесь не распознаётся.

    Examples:
        >>> parse_little_endian_hex_magnitude("01")
        (16,)
    """
    config = config or HexCodecConfig()
    _check_length(text, config)
    return _pack_hex_digits(enumerate(text))


# =============================================================================
# ФОРМАТИРОВАНИЕ
# =============================================================================


def format_hex_magnitude(
    limbs: Sequence[int],
    negative: bool = False,
    config: HexCodecConfig | None = None,
) -> str:
    """
    Форматирование magnitude (и знака) в hex-строку.

    Args:
        limbs: Нормализованная magnitude
        negative: Флаг знака (игнорируется для нуля)
        config: Конфигурация кодека (опционально, используется default)

    Returns:
        Hex-строка: [-]<старший limb без padding><остальные limbs по 16 цифр>

    Examples:
        >>> format_hex_magnitude((0, 1))
        '10000000000000000'
        >>> format_hex_magnitude((255,), negative=True)
        '-ff'
    """
    config = config or HexCodecConfig()

    text = f"{limbs[-1]:x}" + "".join(
        f"{limb:0{HEX_DIGITS_PER_LIMB}x}" for limb in reversed(limbs[:-1])
    )

    if config.uppercase:
        text = text.upper()

    if negative and not is_zero_magnitude(limbs):
        return "-" + text

    return text
