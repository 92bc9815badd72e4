"""
Тесты для модуля Limb Arithmetic

Проверяет:
1. Нормализацию и валидацию limbs
2. bit_length и сравнение magnitudes
3. Логические сдвиги с переносом между limbs
4. Сложение с carry и вычитание с borrow
5. Schoolbook умножение
6. Binary long division и деление на ноль
7. Согласованность с int на псевдослучайных выборках
"""

import random

import pytest

from src.core.math.limb_arithmetic import (
    LIMB_BASE,
    LIMB_BITS,
    LIMB_MASK,
    ZERO_MAGNITUDE,
    BigIntError,
    DivisionByZero,
    add_magnitudes,
    bit_length_of,
    compare_magnitudes,
    count_leading_zeros,
    divmod_magnitudes,
    is_zero_magnitude,
    mul_magnitudes,
    normalize,
    normalize_limbs,
    shift_left_magnitude,
    shift_right_magnitude,
    sub_magnitudes,
    validate_limb,
)


def to_limbs(value: int) -> tuple[int, ...]:
    """Non-negative int → нормализованные limbs (oracle для тестов)."""
    limbs = []
    while value:
        limbs.append(value & LIMB_MASK)
        value >>= LIMB_BITS
    return normalize_limbs(limbs)


def from_limbs(limbs: tuple[int, ...]) -> int:
    return sum(limb << (LIMB_BITS * i) for i, limb in enumerate(limbs))


def random_magnitudes(seed: int, count: int = 200, max_bits: int = 400) -> list[int]:
    rng = random.Random(seed)
    return [rng.getrandbits(rng.randint(1, max_bits)) for _ in range(count)]


# =============================================================================
# НОРМАЛИЗАЦИЯ И ВАЛИДАЦИЯ
# =============================================================================


class TestNormalizeLimbs:
    """Тесты для normalize_limbs / normalize"""

    def test_trailing_zeros_dropped(self) -> None:
        """Старшие нулевые limbs удаляются"""
        assert normalize_limbs([5, 0, 0]) == (5,)
        assert normalize_limbs([0, 1, 0]) == (0, 1)

    def test_zero_keeps_single_limb(self) -> None:
        """Ноль: ровно один нулевой limb"""
        assert normalize_limbs([0, 0, 0]) == ZERO_MAGNITUDE
        assert normalize_limbs([0]) == (0,)

    def test_empty_is_zero(self) -> None:
        """Пустая последовательность → ноль"""
        assert normalize_limbs([]) == (0,)

    def test_already_normalized_unchanged(self) -> None:
        """Нормализованный вход не меняется"""
        assert normalize_limbs((1, 2, 3)) == (1, 2, 3)

    def test_normalize_clears_negative_zero(self) -> None:
        """Отрицательного нуля нет"""
        assert normalize([0, 0], negative=True) == ((0,), False)

    def test_normalize_keeps_sign_of_nonzero(self) -> None:
        """Знак ненулевого значения сохраняется"""
        assert normalize([1, 0], negative=True) == ((1,), True)
        assert normalize([1, 0]) == ((1,), False)

    def test_is_zero_magnitude(self) -> None:
        """Детекция нуля"""
        assert is_zero_magnitude((0,))
        assert not is_zero_magnitude((1,))
        assert not is_zero_magnitude((0, 1))


class TestValidateLimb:
    """Тесты для validate_limb"""

    def test_valid_limbs_pass(self) -> None:
        """Граничные значения диапазона допустимы"""
        assert validate_limb(0) == 0
        assert validate_limb(LIMB_MASK) == LIMB_MASK

    def test_negative_raises(self) -> None:
        """Отрицательный limb запрещён"""
        with pytest.raises(ValueError, match=r"must be in \[0, 2\*\*64\)"):
            validate_limb(-1)

    def test_overflow_raises(self) -> None:
        """limb >= 2**64 запрещён"""
        with pytest.raises(ValueError, match="must be in"):
            validate_limb(LIMB_BASE)

    def test_non_int_raises(self) -> None:
        """bool и float не являются limbs"""
        with pytest.raises(ValueError, match="must be an int"):
            validate_limb(True)

        with pytest.raises(ValueError, match="must be an int"):
            validate_limb(1.0)

    def test_name_in_message(self) -> None:
        """Имя параметра попадает в сообщение"""
        with pytest.raises(ValueError, match="limbs\\[3\\]"):
            validate_limb(-5, name="limbs[3]")


# =============================================================================
# BIT-LENGTH И СРАВНЕНИЕ
# =============================================================================


class TestBitLength:
    """Тесты для count_leading_zeros / bit_length_of"""

    def test_count_leading_zeros(self) -> None:
        """Ведущие нули 64-битного слова"""
        assert count_leading_zeros(0) == 64
        assert count_leading_zeros(1) == 63
        assert count_leading_zeros(1 << 63) == 0
        assert count_leading_zeros(LIMB_MASK) == 0

    def test_zero_has_no_bits(self) -> None:
        """bit_length(0) == 0"""
        assert bit_length_of((0,)) == 0

    def test_single_limb(self) -> None:
        """Однолимбовые значения"""
        assert bit_length_of((1,)) == 1
        assert bit_length_of((255,)) == 8
        assert bit_length_of((LIMB_MASK,)) == 64

    def test_multi_limb(self) -> None:
        """(limb_count - 1) * 64 + битов в старшем limb"""
        assert bit_length_of((0, 1)) == 65
        assert bit_length_of((LIMB_MASK, LIMB_MASK, 3)) == 130

    def test_matches_int_bit_length(self) -> None:
        """Совпадение с int.bit_length на выборке"""
        for value in random_magnitudes(seed=1):
            assert bit_length_of(to_limbs(value)) == value.bit_length()


class TestCompareMagnitudes:
    """Тесты для compare_magnitudes"""

    def test_shorter_is_smaller(self) -> None:
        """Меньше limbs → меньше значение"""
        assert compare_magnitudes((LIMB_MASK,), (0, 1)) == -1
        assert compare_magnitudes((0, 1), (LIMB_MASK,)) == 1

    def test_most_significant_difference_decides(self) -> None:
        """Решает первое различие со старшего limb"""
        assert compare_magnitudes((0, 2), (LIMB_MASK, 1)) == 1
        assert compare_magnitudes((9, 1), (3, 1)) == 1
        assert compare_magnitudes((3, 1), (9, 1)) == -1

    def test_equal(self) -> None:
        """Равные magnitudes"""
        assert compare_magnitudes((1, 2, 3), (1, 2, 3)) == 0
        assert compare_magnitudes((0,), (0,)) == 0


# =============================================================================
# СДВИГИ
# =============================================================================


class TestShiftLeft:
    """Тесты для shift_left_magnitude"""

    def test_whole_limb_shift(self) -> None:
        """Сдвиг на 64 бита добавляет нулевой младший limb"""
        assert shift_left_magnitude((1,), 64) == (0, 1)
        assert shift_left_magnitude((7, 9), 128) == (0, 0, 7, 9)

    def test_bit_crosses_limb_boundary(self) -> None:
        """Старший бит переходит в новый limb"""
        assert shift_left_magnitude((1 << 63,), 1) == (0, 1)

    def test_partial_shift_carry(self) -> None:
        """Вытолкнутые биты становятся младшими битами следующего limb"""
        assert shift_left_magnitude((LIMB_MASK,), 4) == (LIMB_MASK - 15, 0xF)

    def test_combined_shift(self) -> None:
        """Целые limbs + под-limb сдвиг"""
        assert shift_left_magnitude((1 << 63,), 65) == (0, 0, 1)

    def test_zero_stays_zero(self) -> None:
        """Сдвиг нуля даёт нормализованный ноль"""
        assert shift_left_magnitude((0,), 100) == (0,)

    def test_shift_by_zero(self) -> None:
        """Сдвиг на 0: тождество"""
        assert shift_left_magnitude((5, 6), 0) == (5, 6)

    def test_negative_shift_raises(self) -> None:
        """Отрицательный сдвиг запрещён"""
        with pytest.raises(ValueError, match="negative shift count"):
            shift_left_magnitude((1,), -1)

    def test_matches_int(self) -> None:
        """Совпадение с int << n"""
        rng = random.Random(2)
        for value in random_magnitudes(seed=3):
            n = rng.randint(0, 200)
            assert from_limbs(shift_left_magnitude(to_limbs(value), n)) == value << n


class TestShiftRight:
    """Тесты для shift_right_magnitude"""

    def test_whole_limb_shift(self) -> None:
        """Сдвиг на 64 бита отбрасывает младший limb"""
        assert shift_right_magnitude((0, 1), 64) == (1,)

    def test_bit_crosses_limb_boundary(self) -> None:
        """Младший бит старшего limb переходит в младший limb"""
        assert shift_right_magnitude((0, 1), 1) == (1 << 63,)

    def test_partial_shift_borrow(self) -> None:
        """Обратная операция к partial shift left"""
        assert shift_right_magnitude((LIMB_MASK - 15, 0xF), 4) == (LIMB_MASK,)

    def test_shift_past_all_limbs_is_zero(self) -> None:
        """Сдвиг дальше длины magnitude → ноль"""
        assert shift_right_magnitude((5,), 64) == (0,)
        assert shift_right_magnitude((5, 6), 1000) == (0,)
        assert shift_right_magnitude((1,), 1) == (0,)

    def test_negative_shift_raises(self) -> None:
        """Отрицательный сдвиг запрещён"""
        with pytest.raises(ValueError, match="negative shift count"):
            shift_right_magnitude((1,), -3)

    def test_inverse_of_shift_left(self) -> None:
        """(a << n) >> n == a"""
        rng = random.Random(4)
        for value in random_magnitudes(seed=5):
            n = rng.randint(0, 300)
            limbs = to_limbs(value)
            assert shift_right_magnitude(shift_left_magnitude(limbs, n), n) == limbs

    def test_matches_int(self) -> None:
        """Совпадение с int >> n"""
        rng = random.Random(6)
        for value in random_magnitudes(seed=7):
            n = rng.randint(0, 450)
            assert from_limbs(shift_right_magnitude(to_limbs(value), n)) == value >> n


# =============================================================================
# СЛОЖЕНИЕ / ВЫЧИТАНИЕ
# =============================================================================


class TestAddMagnitudes:
    """Тесты для add_magnitudes"""

    def test_carry_appends_limb(self) -> None:
        """Carry из старшего limb добавляет новый limb"""
        assert add_magnitudes((LIMB_MASK,), (1,)) == (0, 1)

    def test_carry_ripples(self) -> None:
        """Carry распространяется через несколько limbs"""
        assert add_magnitudes((LIMB_MASK, LIMB_MASK), (1,)) == (0, 0, 1)

    def test_different_lengths(self) -> None:
        """Операнды разной длины"""
        assert add_magnitudes((1, 2), (3,)) == (4, 2)
        assert add_magnitudes((3,), (1, 2)) == (4, 2)

    def test_zero_identity(self) -> None:
        """a + 0 == a"""
        assert add_magnitudes((7, 8), (0,)) == (7, 8)

    def test_matches_int(self) -> None:
        """Совпадение с int +"""
        values = random_magnitudes(seed=8)
        for a, b in zip(values, reversed(values)):
            assert from_limbs(add_magnitudes(to_limbs(a), to_limbs(b))) == a + b


class TestSubMagnitudes:
    """Тесты для sub_magnitudes"""

    def test_borrow_across_limb(self) -> None:
        """Заём из старшего limb"""
        assert sub_magnitudes((0, 1), (1,)) == (LIMB_MASK,)

    def test_equal_is_zero(self) -> None:
        """a - a == 0"""
        assert sub_magnitudes((5, 9), (5, 9)) == (0,)

    def test_result_normalized(self) -> None:
        """Старшие нули результата удаляются"""
        assert sub_magnitudes((3, 7), (1, 7)) == (2,)

    def test_smaller_minuend_raises(self) -> None:
        """larger < smaller: ошибка вызывающего кода"""
        with pytest.raises(ValueError, match="larger >= smaller"):
            sub_magnitudes((1,), (2,))

    def test_matches_int(self) -> None:
        """Совпадение с int -"""
        values = random_magnitudes(seed=9)
        for a, b in zip(values, reversed(values)):
            larger, smaller = max(a, b), min(a, b)
            result = sub_magnitudes(to_limbs(larger), to_limbs(smaller))
            assert from_limbs(result) == larger - smaller


# =============================================================================
# УМНОЖЕНИЕ
# =============================================================================


class TestMulMagnitudes:
    """Тесты для mul_magnitudes"""

    def test_max_limb_squared(self) -> None:
        """(2**64 - 1)**2 = 2**128 - 2**65 + 1"""
        assert mul_magnitudes((LIMB_MASK,), (LIMB_MASK,)) == (1, LIMB_MASK - 1)

    def test_zero_operand(self) -> None:
        """Умножение на ноль даёт ноль"""
        assert mul_magnitudes((0,), (LIMB_MASK,)) == (0,)
        assert mul_magnitudes((1, 2, 3), (0,)) == (0,)

    def test_limb_positions(self) -> None:
        """2**64 * 2**64 = 2**128"""
        assert mul_magnitudes((0, 1), (0, 1)) == (0, 0, 1)

    def test_one_identity(self) -> None:
        """a * 1 == a"""
        assert mul_magnitudes((4, 5, 6), (1,)) == (4, 5, 6)

    def test_all_ones_multi_limb(self) -> None:
        """Максимальные limbs с carry на каждой позиции"""
        a = (LIMB_MASK, LIMB_MASK, LIMB_MASK)
        b = (LIMB_MASK, LIMB_MASK)
        assert from_limbs(mul_magnitudes(a, b)) == from_limbs(a) * from_limbs(b)

    def test_matches_int(self) -> None:
        """Совпадение с int *"""
        values = random_magnitudes(seed=10, count=100)
        for a, b in zip(values, reversed(values)):
            assert from_limbs(mul_magnitudes(to_limbs(a), to_limbs(b))) == a * b


# =============================================================================
# ДЕЛЕНИЕ
# =============================================================================


class TestDivmodMagnitudes:
    """Тесты для divmod_magnitudes"""

    def test_exact_division(self) -> None:
        """100 / 10 = 10, остаток 0"""
        assert divmod_magnitudes((100,), (10,)) == ((10,), (0,))

    def test_dividend_smaller_than_divisor(self) -> None:
        """Fast path: u < v → (0, u)"""
        assert divmod_magnitudes((3,), (7,)) == ((0,), (3,))
        assert divmod_magnitudes((5,), (0, 1)) == ((0,), (5,))

    def test_multi_limb_dividend(self) -> None:
        """2**64 / 2 = 2**63"""
        assert divmod_magnitudes((0, 1), (2,)) == ((1 << 63,), (0,))

    def test_divide_by_one(self) -> None:
        """a / 1 == a"""
        assert divmod_magnitudes((9, 8, 7), (1,)) == ((9, 8, 7), (0,))

    def test_zero_dividend(self) -> None:
        """0 / v == 0"""
        assert divmod_magnitudes((0,), (5,)) == ((0,), (0,))

    def test_division_by_zero_raises(self) -> None:
        """Деление на ноль → DivisionByZero"""
        with pytest.raises(DivisionByZero, match="Division by zero"):
            divmod_magnitudes((1,), (0,))

    def test_division_by_zero_is_zero_division_error(self) -> None:
        """DivisionByZero совместим с ZeroDivisionError и BigIntError"""
        with pytest.raises(ZeroDivisionError):
            divmod_magnitudes((0,), (0,))

        with pytest.raises(BigIntError):
            divmod_magnitudes((0, 1), (0,))

    def test_matches_int(self) -> None:
        """Совпадение с int divmod на non-negative выборке"""
        dividends = random_magnitudes(seed=11, count=100, max_bits=300)
        divisors = random_magnitudes(seed=12, count=100, max_bits=150)
        for u, v in zip(dividends, divisors):
            if v == 0:
                continue
            q, r = divmod_magnitudes(to_limbs(u), to_limbs(v))
            assert (from_limbs(q), from_limbs(r)) == divmod(u, v)
