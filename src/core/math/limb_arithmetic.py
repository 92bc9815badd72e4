"""
Limb Arithmetic — Magnitude-level примитивы над 64-битными limbs

Модуль реализует беззнаковую арифметику над magnitude, представленной как
tuple 64-битных слов (limbs) в порядке little-endian (limbs[0]: младший):
- Нормализация (удаление старших нулевых limbs)
- Сравнение magnitudes и bit_length
- Логические сдвиги влево/вправо с переносом между limbs
- Сложение с carry и вычитание с borrow
- Schoolbook умножение (O(n·m))
- Restoring binary long division (бит за битом)

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Каждый limb лежит в диапазоне [0, 2**64)
2. Magnitude всегда содержит хотя бы один limb; ноль представлен как (0,)
3. Все функции возвращают нормализованный tuple (нет старших нулей)
4. Входы никогда не мутируются, результат всегда новый tuple

Знак здесь не хранится: знаковая семантика живёт в src.core.domain.bigint.
"""

from typing import Final, Sequence

# =============================================================================
# LIMB-ПАРАМЕТРЫ
# =============================================================================

# Ширина одного limb в битах
LIMB_BITS: Final[int] = 64

# Основание позиционной системы (2**64)
LIMB_BASE: Final[int] = 1 << LIMB_BITS

# Маска младших 64 бит
LIMB_MASK: Final[int] = LIMB_BASE - 1

# Нормализованное представление нуля
ZERO_MAGNITUDE: Final[tuple[int, ...]] = (0,)

Magnitude = tuple[int, ...]


# =============================================================================
# EXCEPTIONS
# =============================================================================


class BigIntError(Exception):
    """Базовая ошибка arbitrary-precision арифметики."""

    pass


class DivisionByZero(BigIntError, ZeroDivisionError):
    """
    Деление (или взятие остатка) на ноль.

    Возникает в divmod при нулевой magnitude делителя. Ошибка recoverable:
    вызывающий код сам решает, как её обработать.
    """

    pass


# =============================================================================
# ВАЛИДАЦИЯ И НОРМАЛИЗАЦИЯ
# =============================================================================


def validate_limb(value: int, name: str = "limb") -> int:
    """
    Проверка, что значение является корректным 64-битным limb.

    Args:
        value: Проверяемое значение
        name: Имя параметра (для сообщения об ошибке)

    Returns:
        value без изменений

    Raises:
        ValueError: Если value не int или вне диапазона [0, 2**64)
    """
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{name} must be an int, got {type(value).__name__}")

    if value < 0 or value > LIMB_MASK:
        raise ValueError(f"{name} must be in [0, 2**64), got {value}")

    return value


def normalize_limbs(limbs: Sequence[int]) -> Magnitude:
    """
    Удаление старших нулевых limbs (минимум один limb остаётся).

    Args:
        limbs: Limbs в порядке little-endian (может быть пустым)

    Returns:
        Нормализованный tuple; пустой вход и все нули → (0,)

    Examples:
        >>> normalize_limbs([5, 0, 0])
        (5,)
        >>> normalize_limbs([])
        (0,)
    """
    end = len(limbs)
    while end > 1 and limbs[end - 1] == 0:
        end -= 1

    if end == 0:
        return ZERO_MAGNITUDE

    return tuple(limbs[:end])


def normalize(limbs: Sequence[int], negative: bool = False) -> tuple[Magnitude, bool]:
    """
    Нормализация пары (magnitude, sign).

    Отрицательного нуля не существует: при нулевой magnitude знак
    принудительно сбрасывается в non-negative.

    Args:
        limbs: Limbs в порядке little-endian
        negative: Флаг отрицательного значения

    Returns:
        (нормализованные limbs, нормализованный флаг знака)
    """
    trimmed = normalize_limbs(limbs)
    return trimmed, negative and not is_zero_magnitude(trimmed)


def is_zero_magnitude(limbs: Sequence[int]) -> bool:
    """True если нормализованная magnitude равна нулю."""
    return len(limbs) == 1 and limbs[0] == 0


# =============================================================================
# BIT-LENGTH И СРАВНЕНИЕ
# =============================================================================


def count_leading_zeros(limb: int) -> int:
    """
    Количество ведущих нулевых бит в 64-битном limb.

    Examples:
        >>> count_leading_zeros(1)
        63
        >>> count_leading_zeros(0)
        64
    """
    return LIMB_BITS - limb.bit_length()


def bit_length_of(limbs: Sequence[int]) -> int:
    """
    Количество бит, необходимое для magnitude.

    Формула: (len(limbs) - 1) * 64 + (64 - clz(старший limb)); для нуля: 0.

    Args:
        limbs: Нормализованная magnitude

    Returns:
        Битовая длина (0 для нуля)
    """
    if is_zero_magnitude(limbs):
        return 0

    top = limbs[-1]
    return (len(limbs) - 1) * LIMB_BITS + (LIMB_BITS - count_leading_zeros(top))


def compare_magnitudes(a: Sequence[int], b: Sequence[int]) -> int:
    """
    Сравнение двух нормализованных magnitudes.

    Более короткая последовательность limbs меньше; при равной длине
    решает первое различие, начиная со старшего limb.

    Returns:
        -1 если a < b, 0 если a == b, +1 если a > b
    """
    if len(a) != len(b):
        return -1 if len(a) < len(b) else 1

    for i in range(len(a) - 1, -1, -1):
        if a[i] != b[i]:
            return -1 if a[i] < b[i] else 1

    return 0


# =============================================================================
# СДВИГИ (логические, без sign-extension)
# =============================================================================


def shift_left_magnitude(limbs: Sequence[int], shift_bits: int) -> Magnitude:
    """
    Логический сдвиг magnitude влево на shift_bits бит.

    Сдвиг раскладывается на целые limbs (shift_bits // 64, нули добавляются
    в младшие позиции) и под-limb сдвиг (shift_bits % 64) с переносом
    вытолкнутых старших бит в следующий limb. Финальный перенос
    добавляет новый старший limb.

    Raises:
        ValueError: Если shift_bits < 0
    """
    if shift_bits < 0:
        raise ValueError("negative shift count")

    shift_limbs, inner_shift = divmod(shift_bits, LIMB_BITS)
    shifted = list(limbs)

    if inner_shift > 0:
        carry = 0
        for i, limb in enumerate(shifted):
            next_carry = limb >> (LIMB_BITS - inner_shift)
            shifted[i] = ((limb << inner_shift) & LIMB_MASK) | carry
            carry = next_carry
        if carry > 0:
            shifted.append(carry)

    if shift_limbs > 0:
        shifted = [0] * shift_limbs + shifted

    return normalize_limbs(shifted)


def shift_right_magnitude(limbs: Sequence[int], shift_bits: int) -> Magnitude:
    """
    Логический сдвиг magnitude вправо на shift_bits бит.

    Сначала отбрасываются shift_bits // 64 младших limbs (если их больше,
    чем есть, результат равен нулю), затем оставшиеся limbs сдвигаются на
    shift_bits % 64 бит с borrow от старших limbs к младшим.

    Raises:
        ValueError: Если shift_bits < 0
    """
    if shift_bits < 0:
        raise ValueError("negative shift count")

    shift_limbs, inner_shift = divmod(shift_bits, LIMB_BITS)

    if shift_limbs >= len(limbs):
        return ZERO_MAGNITUDE

    shifted = list(limbs[shift_limbs:])

    if inner_shift > 0:
        borrow = 0
        for i in range(len(shifted) - 1, -1, -1):
            limb = shifted[i]
            next_borrow = (limb << (LIMB_BITS - inner_shift)) & LIMB_MASK
            shifted[i] = (limb >> inner_shift) | borrow
            borrow = next_borrow

    return normalize_limbs(shifted)


# =============================================================================
# СЛОЖЕНИЕ / ВЫЧИТАНИЕ
# =============================================================================


def add_magnitudes(a: Sequence[int], b: Sequence[int]) -> Magnitude:
    """
    Сложение magnitudes с переносом между limbs.

    Сумма каждой пары limbs считается в широком int, младшие 64 бита
    записываются в результат, старшие уходят в carry. Carry из старшего
    limb добавляет новый limb.

    Examples:
        >>> add_magnitudes((LIMB_MASK,), (1,))
        (0, 1)
    """
    n = max(len(a), len(b))
    result = []
    carry = 0

    for i in range(n):
        a_limb = a[i] if i < len(a) else 0
        b_limb = b[i] if i < len(b) else 0
        total = a_limb + b_limb + carry
        result.append(total & LIMB_MASK)
        carry = total >> LIMB_BITS

    if carry > 0:
        result.append(carry)

    return normalize_limbs(result)


def sub_magnitudes(larger: Sequence[int], smaller: Sequence[int]) -> Magnitude:
    """
    Вычитание magnitudes с заёмом: larger - smaller.

    Args:
        larger: Уменьшаемое (должно быть >= smaller)
        smaller: Вычитаемое

    Returns:
        Нормализованная разность

    Raises:
        ValueError: Если larger < smaller (результат был бы отрицательным)
    """
    if compare_magnitudes(larger, smaller) < 0:
        raise ValueError("sub_magnitudes requires larger >= smaller")

    result = []
    borrow = 0

    for i, large_limb in enumerate(larger):
        small_limb = smaller[i] if i < len(smaller) else 0
        diff = large_limb - small_limb - borrow
        if diff < 0:
            diff += LIMB_BASE
            borrow = 1
        else:
            borrow = 0
        result.append(diff)

    return normalize_limbs(result)


# =============================================================================
# УМНОЖЕНИЕ
# =============================================================================


def mul_magnitudes(a: Sequence[int], b: Sequence[int]) -> Magnitude:
    """
    Schoolbook умножение magnitudes.

    Для каждой пары (i, j): 128-битное произведение a[i] * b[j] плюс
    накопленное значение result[i + j] плюс carry. Младшие 64 бита
    пишутся в result[i + j], старшие 64 бита уходят в carry. После
    внутреннего цикла остаток carry кладётся в result[i + len(b)].

    Сложность O(n·m) по числу limbs.
    """
    if is_zero_magnitude(a) or is_zero_magnitude(b):
        return ZERO_MAGNITUDE

    result = [0] * (len(a) + len(b))

    for i, a_limb in enumerate(a):
        carry = 0
        for j, b_limb in enumerate(b):
            # (2**64 - 1)**2 + 2 * (2**64 - 1) < 2**128: carry всегда влезает в limb
            product = a_limb * b_limb + result[i + j] + carry
            result[i + j] = product & LIMB_MASK
            carry = product >> LIMB_BITS
        if carry > 0:
            result[i + len(b)] += carry

    return normalize_limbs(result)


# =============================================================================
# ДЕЛЕНИЕ
# =============================================================================


def divmod_magnitudes(u: Sequence[int], v: Sequence[int]) -> tuple[Magnitude, Magnitude]:
    """
    Restoring binary long division: (u // v, u % v) для magnitudes.

    Алгоритм:
        1. Если u < v → (0, u) (fast path)
        2. shift = bit_length(u) - bit_length(v); shifted = v << shift
        3. Для каждой позиции бита от shift до 0:
           если remainder >= shifted → remainder -= shifted, бит частного = 1;
           затем shifted >>= 1

    Args:
        u: Делимое (magnitude)
        v: Делитель (magnitude)

    Returns:
        (quotient, remainder), оба нормализованы

    Raises:
        DivisionByZero: Если v == 0
    """
    if is_zero_magnitude(v):
        raise DivisionByZero("Division by zero")

    if compare_magnitudes(u, v) < 0:
        return ZERO_MAGNITUDE, normalize_limbs(u)

    shift = bit_length_of(u) - bit_length_of(v)
    quotient = [0] * (shift // LIMB_BITS + 1)
    remainder = normalize_limbs(u)
    shifted = shift_left_magnitude(v, shift)

    for bit in range(shift, -1, -1):
        if compare_magnitudes(remainder, shifted) >= 0:
            remainder = sub_magnitudes(remainder, shifted)
            quotient[bit // LIMB_BITS] |= 1 << (bit % LIMB_BITS)
        shifted = shift_right_magnitude(shifted, 1)

    return normalize_limbs(quotient), remainder
