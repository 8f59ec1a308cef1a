"""
test_decimal_matcher.py
=======================
Tests unitarios del parseo exacto y de DecimalNumberMatcher.
Ejecutar con: pytest -v
"""
from __future__ import annotations

import threading
from decimal import Decimal

import numpy as np
import pytest

from core.decimal_number import InvalidNumeral, ParsedDecimal, parse_decimal
from core.matcher import (
    DecimalNumberMatcher,
    ERROR_CATALOG,
    INVALID_DECIMAL,
    MAX_DECIMAL_PLACES_EXCEEDED,
    MAX_DIGITS_EXCEEDED,
)
from core.models import MatcherConfig, ValidationResult

E001 = "doubleNumber.e001"
E002 = "doubleNumber.e002"
E003 = "doubleNumber.e003"


# ===========================================================================
# Fixtures
# ===========================================================================

@pytest.fixture
def default_matcher() -> DecimalNumberMatcher:
    return DecimalNumberMatcher()


@pytest.fixture
def digits_matcher() -> DecimalNumberMatcher:
    """Un parámetro: máximo 5 dígitos, sin límite de decimales."""
    return DecimalNumberMatcher.from_params(5)


@pytest.fixture
def full_matcher() -> DecimalNumberMatcher:
    """Dos parámetros: máximo 6 dígitos y 2 decimales."""
    return DecimalNumberMatcher.from_params(6, 2)


# ===========================================================================
# 1. Tests parse_decimal
# ===========================================================================

class TestParseDecimal:

    @pytest.mark.parametrize("text,digits,places", [
        ("0",             1, 0),
        ("-0",            1, 0),
        ("0.000",         1, 0),
        ("7",             1, 0),
        ("-123.45",       5, 2),
        ("+123.45",       5, 2),
        ("000123",        3, 0),
        ("1.2300",        3, 2),    # ceros finales decimales no cuentan
        ("987000",        6, 0),    # ceros finales enteros sí cuentan
        ("0.0015",        2, 4),
        (".5",            1, 1),
        ("5.",            1, 0),
        ("1e5",           6, 0),
        ("1.5E-3",        2, 4),
        ("12345678901",  11, 0),
        ("1234.5678901", 11, 7),
    ])
    def test_counts_parametrized(self, text, digits, places):
        parsed = parse_decimal(text)
        assert isinstance(parsed, ParsedDecimal)
        assert parsed.total_digits == digits
        assert parsed.decimal_places == places

    @pytest.mark.parametrize("text", [
        "", "abc", "1.2.3", "1,5", " 1", "1 ", "1_000", "--1", "+-1",
        "1e", "e5", "1e+", ".", "-", "NaN", "Infinity", "inf", "0x1F", "١٢٣",
    ])
    def test_invalid_numerals(self, text):
        outcome = parse_decimal(text)
        assert isinstance(outcome, InvalidNumeral)
        assert outcome.raw == text

    def test_float_uses_shortest_repr(self):
        parsed = parse_decimal(0.1)
        assert isinstance(parsed, ParsedDecimal)
        assert parsed.value == Decimal("0.1")
        assert parsed.total_digits == 1
        assert parsed.decimal_places == 1

    def test_float_sum_keeps_binary_noise(self):
        # 0.1 + 0.2 no es 0.3 en binario: str() expone los 17 dígitos reales
        parsed = parse_decimal(0.1 + 0.2)
        assert parsed.decimal_places == 17

    def test_int_and_decimal(self):
        assert parse_decimal(123456).total_digits == 6
        assert parse_decimal(Decimal("12.50")).decimal_places == 1

    @pytest.mark.parametrize("value,digits,places", [
        (np.float32(1.5),  2, 1),
        (np.float32(0.1),  1, 1),
        (np.float16(2.25), 3, 2),
        (np.float64(0.1),  1, 1),
        (np.int64(1234),   4, 0),
    ])
    def test_numpy_scalars(self, value, digits, places):
        parsed = parse_decimal(value)
        assert isinstance(parsed, ParsedDecimal)
        assert parsed.total_digits == digits
        assert parsed.decimal_places == places

    def test_numpy_non_finite(self):
        assert isinstance(parse_decimal(np.float32("nan")), InvalidNumeral)
        assert isinstance(parse_decimal(np.float64("inf")), InvalidNumeral)

    def test_exponent_beyond_decimal_range(self):
        # Sintaxis válida, pero Decimal no puede representar el exponente
        outcome = parse_decimal("1e9999999999999999999")
        assert isinstance(outcome, InvalidNumeral)
        assert outcome.reason == "numeral decimal no representable"

    @pytest.mark.parametrize("value", [
        True, False, float("nan"), float("inf"), Decimal("NaN"), Decimal("-Infinity"), [1], object(),
    ])
    def test_non_numeric_types(self, value):
        assert isinstance(parse_decimal(value), InvalidNumeral)

    def test_many_digits_exact(self):
        """Más dígitos que la precisión por defecto del contexto decimal (28)."""
        text = "1234567890.12345678901234567890123456789"
        parsed = parse_decimal(text)
        assert parsed.total_digits == 39
        assert parsed.decimal_places == 29

    def test_huge_exponent_counts_without_expanding(self):
        assert parse_decimal("1e100").total_digits == 101
        assert parse_decimal("1e-100").decimal_places == 100


# ===========================================================================
# 2. Tests MatcherConfig
# ===========================================================================

class TestMatcherConfig:

    def test_no_params(self):
        config = MatcherConfig.from_params()
        assert config.max_total_digits == 11
        assert config.max_decimal_places is None
        assert not config.checks_decimal_places

    def test_one_param(self):
        config = MatcherConfig.from_params(5)
        assert config.max_total_digits == 5
        assert not config.checks_decimal_places

    def test_two_params(self):
        config = MatcherConfig.from_params(6, 2)
        assert config == MatcherConfig(max_total_digits=6, max_decimal_places=2)
        assert config.checks_decimal_places

    def test_too_many_params(self):
        with pytest.raises(ValueError, match="como máximo 2"):
            MatcherConfig.from_params(1, 2, 3)

    def test_is_immutable(self):
        config = MatcherConfig()
        with pytest.raises(AttributeError):
            config.max_total_digits = 3


# ===========================================================================
# 3. Tests ValidationResult
# ===========================================================================

class TestValidationResult:

    def test_starts_valid(self):
        result = ValidationResult()
        assert result.is_valid
        assert result.codes == []

    def test_add_error_keeps_order(self):
        result = ValidationResult()
        result.add_error("b", "segundo")
        result.add_error("a", "primero")
        assert not result.is_valid
        assert result.codes == ["b", "a"]
        assert result.messages == ["segundo", "primero"]


# ===========================================================================
# 4. Tests DecimalNumberMatcher
# ===========================================================================

class TestDecimalNumberMatcher:

    @pytest.mark.parametrize("params", [(), (5,), (6, 2), (0, 0)])
    def test_none_is_valid(self, params):
        assert DecimalNumberMatcher.from_params(*params).match(None).is_valid

    @pytest.mark.parametrize("value", ["abc", "1.2.3", "", "1,5", "NaN"])
    def test_invalid_string_yields_only_e001(self, full_matcher, value):
        assert full_matcher.match(value).codes == [E001]

    def test_invalid_short_circuits(self):
        # Con límites 0/0 cualquier número fallaría; el inválido solo da e001
        matcher = DecimalNumberMatcher.from_params(0, 0)
        assert matcher.match("x1.234").codes == [E001]

    def test_default_eleven_digits(self, default_matcher):
        assert default_matcher.match("12345678901").is_valid
        assert default_matcher.match("123456789012").codes == [E002]

    def test_default_has_no_decimal_check(self, default_matcher):
        assert default_matcher.match("0.1234567891").is_valid

    def test_one_param(self, digits_matcher):
        assert digits_matcher.match("12345").is_valid
        assert digits_matcher.match("123456").codes == [E002]

    def test_one_param_never_checks_decimals(self, digits_matcher):
        assert digits_matcher.match("1234.5678901").codes == [E002]
        assert digits_matcher.match("0.0001").is_valid

    @pytest.mark.parametrize("value,expected", [
        ("123.45",    []),
        ("12345.67",  [E002]),
        ("1234.56",   []),      # 6 dígitos: dentro del límite
        ("12.345",    [E003]),
        ("123456.78", [E002, E003]),
        ("-123.45",   []),
        ("123.450",   []),
    ])
    def test_two_params(self, full_matcher, value, expected):
        assert full_matcher.match(value).codes == expected

    def test_messages_match_catalog(self, full_matcher):
        result = full_matcher.match("123456.78")
        assert result.errors == [MAX_DIGITS_EXCEEDED, MAX_DECIMAL_PLACES_EXCEEDED]
        assert full_matcher.match("abc").errors == [INVALID_DECIMAL]

    def test_catalog_codes(self):
        assert [e.code for e in ERROR_CATALOG] == [E001, E002, E003]

    def test_numeric_input(self, full_matcher):
        assert full_matcher.match(123.45).is_valid
        assert full_matcher.match(12.345).codes == [E003]
        assert full_matcher.match(1234567).codes == [E002]
        assert full_matcher.match(np.float32(1.5)).is_valid
        assert full_matcher.match(np.float32(1.125)).codes == [E003]

    def test_float_exactness(self):
        matcher = DecimalNumberMatcher.from_params(2, 1)
        assert matcher.match(0.1).is_valid
        assert matcher.match("0.1").is_valid

    def test_idempotent(self, full_matcher):
        first = full_matcher.match("123456.78")
        second = full_matcher.match("123456.78")
        assert first.codes == second.codes
        assert first is not second

    def test_negative_limits_compare_naturally(self):
        matcher = DecimalNumberMatcher(MatcherConfig(max_total_digits=-1, max_decimal_places=-1))
        assert matcher.match("0").codes == [E002, E003]

    def test_concurrent_reuse(self, full_matcher):
        values = ["123.45", "1234.56", "12.345", "123456.78", "abc", None] * 50
        expected = [full_matcher.match(v).codes for v in values]
        results: dict[int, list] = {}

        def worker(idx: int) -> None:
            results[idx] = [full_matcher.match(v).codes for v in values]

        threads = [threading.Thread(target=worker, args=(i,)) for i in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()
        assert all(r == expected for r in results.values())

    def test_repr(self, full_matcher):
        assert repr(full_matcher) == "DecimalNumberMatcher(max_total_digits=6, max_decimal_places=2)"
