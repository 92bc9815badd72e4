"""
BigInt — Знаковое целое неограниченной точности

Immutable Pydantic модель: magnitude хранится как tuple 64-битных limbs
(little-endian, limbs[0]: младший) плюс флаг знака.

Нормализованная форма (гарантируется валидаторами при каждом создании):
- Нет старших нулевых limbs, кроме случая ровно нуля: limbs == (0,)
- sign == True только для строго ненулевых отрицательных значений

Все операторы возвращают новый экземпляр; существующие значения никогда
не меняются. Деление усекает к нулю: остаток имеет знак делимого.
"""

from typing import Final

from pydantic import BaseModel, Field, field_validator

from src.core.math.hex_codec import (
    HexCodecConfig,
    format_hex_magnitude,
    parse_hex_magnitude,
    parse_little_endian_hex_magnitude,
)
from src.core.math.limb_arithmetic import (
    LIMB_BITS,
    ZERO_MAGNITUDE,
    add_magnitudes,
    bit_length_of,
    compare_magnitudes,
    divmod_magnitudes,
    is_zero_magnitude,
    mul_magnitudes,
    normalize_limbs,
    shift_left_magnitude,
    shift_right_magnitude,
    sub_magnitudes,
    validate_limb,
)

# =============================================================================
# CONSTANTS
# =============================================================================

# Диапазон знакового 64-битного машинного целого для from_int
INT64_MIN: Final[int] = -(1 << 63)
INT64_MAX: Final[int] = (1 << 63) - 1


# =============================================================================
# BIGINT MODEL
# =============================================================================


class BigInt(BaseModel):
    """
    Знаковое целое произвольной точности.

    Immutable модель (frozen=True): все операции создают новый экземпляр.

    Создание:
        BigInt() / BigInt.zero():          аддитивная единица (ноль)
        BigInt.from_int(v):                из знакового 64-битного целого
        BigInt.from_hex("ff"):             из big-endian hex (беззнаковый)
        BigInt.from_little_endian_hex(...): из hex младшей цифрой вперёд
    """

    limbs: tuple[int, ...] = Field(
        default=ZERO_MAGNITUDE,
        min_length=1,
        description="Magnitude: 64-битные limbs, младший первым",
    )
    sign: bool = Field(
        default=False,
        description="True только для ненулевых отрицательных значений",
    )

    model_config = {"frozen": True}  # Immutable

    @field_validator("limbs")
    @classmethod
    def validate_limbs(cls, v: tuple[int, ...]) -> tuple[int, ...]:
        """Проверка диапазона limbs и удаление старших нулей."""
        for i, limb in enumerate(v):
            validate_limb(limb, name=f"limbs[{i}]")
        return normalize_limbs(v)

    @field_validator("sign")
    @classmethod
    def validate_sign(cls, v: bool, info) -> bool:
        """Отрицательного нуля нет: для нулевой magnitude знак сбрасывается."""
        if "limbs" in info.data and is_zero_magnitude(info.data["limbs"]):
            return False
        return v

    # -------------------------------------------------------------------------
    # Конструкторы
    # -------------------------------------------------------------------------

    @classmethod
    def zero(cls) -> "BigInt":
        """Аддитивная единица."""
        return cls()

    @classmethod
    def from_int(cls, value: int) -> "BigInt":
        """
        Создание из знакового 64-битного целого.

        Magnitude хранится одним limb. INT64_MIN обрабатывается корректно:
        его magnitude 2**63 помещается в беззнаковый limb.

        Args:
            value: Целое в диапазоне [INT64_MIN, INT64_MAX]

        Raises:
            TypeError: Если value не int
            OverflowError: Если value вне диапазона int64
        """
        if isinstance(value, bool) or not isinstance(value, int):
            raise TypeError(f"value must be an int, got {type(value).__name__}")

        if value < INT64_MIN or value > INT64_MAX:
            raise OverflowError(f"value {value} does not fit a signed 64-bit integer")

        return cls(limbs=(abs(value),), sign=value < 0)

    @classmethod
    def from_hex(cls, text: str, config: HexCodecConfig | None = None) -> "BigInt":
        """
        Создание из big-endian hex-строки (всегда non-negative).

        Raises:
            InvalidFormat: Символ вне [0-9a-fA-F]
        """
        return cls(limbs=parse_hex_magnitude(text, config))

    @classmethod
    def from_little_endian_hex(
        cls,
        text: str,
        config: HexCodecConfig | None = None,
    ) -> "BigInt":
        """
        Создание из hex-строки, записанной младшей цифрой вперёд.

        Raises:
            InvalidFormat: Символ вне [0-9a-fA-F]
        """
        return cls(limbs=parse_little_endian_hex_magnitude(text, config))

    # -------------------------------------------------------------------------
    # Форматирование и запросы
    # -------------------------------------------------------------------------

    def to_hex(self, config: HexCodecConfig | None = None) -> str:
        """Hex-представление: [-]<старший limb><остальные по 16 цифр>."""
        return format_hex_magnitude(self.limbs, self.sign, config)

    def __str__(self) -> str:
        return self.to_hex()

    def bit_length(self) -> int:
        """Число бит magnitude (0 для нуля)."""
        return bit_length_of(self.limbs)

    def is_zero(self) -> bool:
        return is_zero_magnitude(self.limbs)

    def is_even(self) -> bool:
        return self.limbs[0] & 1 == 0

    def is_negative(self) -> bool:
        return self.sign

    def with_sign(self, negative: bool) -> "BigInt":
        """Та же magnitude с заданным знаком (ноль остаётся non-negative)."""
        return BigInt(limbs=self.limbs, sign=negative)

    def __bool__(self) -> bool:
        return not self.is_zero()

    def __int__(self) -> int:
        value = 0
        for limb in reversed(self.limbs):
            value = (value << LIMB_BITS) | limb
        return -value if self.sign else value

    def __hash__(self) -> int:
        return hash((self.limbs, self.sign))

    # -------------------------------------------------------------------------
    # Сравнение
    # -------------------------------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, BigInt):
            return NotImplemented
        return self.limbs == other.limbs and self.sign == other.sign

    def __lt__(self, other: "BigInt") -> bool:
        if not isinstance(other, BigInt):
            return NotImplemented
        return compare(self, other) < 0

    def __le__(self, other: "BigInt") -> bool:
        if not isinstance(other, BigInt):
            return NotImplemented
        return compare(self, other) <= 0

    def __gt__(self, other: "BigInt") -> bool:
        if not isinstance(other, BigInt):
            return NotImplemented
        return compare(self, other) > 0

    def __ge__(self, other: "BigInt") -> bool:
        if not isinstance(other, BigInt):
            return NotImplemented
        return compare(self, other) >= 0

    # -------------------------------------------------------------------------
    # Унарные операции
    # -------------------------------------------------------------------------

    def __neg__(self) -> "BigInt":
        return self.with_sign(not self.sign)

    def __pos__(self) -> "BigInt":
        return self

    def __abs__(self) -> "BigInt":
        return self.with_sign(False)

    # -------------------------------------------------------------------------
    # Сдвиги (только magnitude, знак сохраняется)
    # -------------------------------------------------------------------------

    def __lshift__(self, shift_bits: int) -> "BigInt":
        if not isinstance(shift_bits, int):
            return NotImplemented
        return BigInt(limbs=shift_left_magnitude(self.limbs, shift_bits), sign=self.sign)

    def __rshift__(self, shift_bits: int) -> "BigInt":
        if not isinstance(shift_bits, int):
            return NotImplemented
        return BigInt(limbs=shift_right_magnitude(self.limbs, shift_bits), sign=self.sign)

    # -------------------------------------------------------------------------
    # Арифметика
    # -------------------------------------------------------------------------

    def __add__(self, other: "BigInt") -> "BigInt":
        """
        Сложение с учётом знаков.

        Одинаковые знаки: сложение magnitudes, знак общий.
        Разные знаки: |большее| - |меньшее|, знак операнда с большей
        magnitude; равные magnitudes дают ноль.
        """
        if not isinstance(other, BigInt):
            return NotImplemented

        if self.sign == other.sign:
            return BigInt(limbs=add_magnitudes(self.limbs, other.limbs), sign=self.sign)

        order = compare_magnitudes(self.limbs, other.limbs)
        if order == 0:
            return BigInt()
        if order > 0:
            return BigInt(limbs=sub_magnitudes(self.limbs, other.limbs), sign=self.sign)
        return BigInt(limbs=sub_magnitudes(other.limbs, self.limbs), sign=other.sign)

    def __sub__(self, other: "BigInt") -> "BigInt":
        if not isinstance(other, BigInt):
            return NotImplemented
        return self + (-other)

    def __mul__(self, other: "BigInt") -> "BigInt":
        if not isinstance(other, BigInt):
            return NotImplemented
        return BigInt(
            limbs=mul_magnitudes(self.limbs, other.limbs),
            sign=self.sign != other.sign,
        )

    def __divmod__(self, other: "BigInt") -> tuple["BigInt", "BigInt"]:
        if not isinstance(other, BigInt):
            return NotImplemented
        return big_divmod(self, other)

    def __floordiv__(self, other: "BigInt") -> "BigInt":
        """Частное с усечением к нулю (НЕ floor, в отличие от int)."""
        if not isinstance(other, BigInt):
            return NotImplemented
        return big_divmod(self, other)[0]

    def __mod__(self, other: "BigInt") -> "BigInt":
        """Остаток со знаком делимого (НЕ делителя, в отличие от int)."""
        if not isinstance(other, BigInt):
            return NotImplemented
        return big_divmod(self, other)[1]


# =============================================================================
# FREE FUNCTIONS
# =============================================================================


def compare(a: BigInt, b: BigInt) -> int:
    """
    Полный порядок над знаковыми значениями.

    Разные знаки: non-negative больше. Одинаковые знаки: сравнение
    magnitudes; для двух отрицательных большая magnitude даёт меньшее значение.

    Returns:
        -1 если a < b, 0 если a == b, +1 если a > b
    """
    if a.sign != b.sign:
        return -1 if a.sign else 1

    order = compare_magnitudes(a.limbs, b.limbs)
    return -order if a.sign else order


def big_divmod(dividend: BigInt, divisor: BigInt) -> tuple[BigInt, BigInt]:
    """
    Деление с усечением к нулю: (quotient, remainder).

    Инвариант: dividend == quotient * divisor + remainder,
    |remainder| < |divisor|, знак remainder совпадает со знаком dividend
    (или remainder == 0).

    Examples:
        -9 / 2 → (-4, -1)
         9 / -2 → (-4, 1)

    Raises:
        DivisionByZero: Если divisor == 0
    """
    q_limbs, r_limbs = divmod_magnitudes(dividend.limbs, divisor.limbs)

    quotient = BigInt(limbs=q_limbs, sign=dividend.sign != divisor.sign)
    remainder = BigInt(limbs=r_limbs, sign=dividend.sign)

    return quotient, remainder
