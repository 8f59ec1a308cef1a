"""
core/matcher.py
===============
DecimalNumberMatcher: valida que un valor sea un número decimal (o esté ausente)
y que cumpla los límites de dígitos configurados.

El separador decimal es siempre ".". Los errores se devuelven como datos en un
ValidationResult; match() no lanza excepciones por fallos de validación.
"""
from __future__ import annotations

import logging
from typing import Optional

from core.decimal_number import InvalidNumeral, ParsedDecimal, parse_decimal
from core.models import MatcherConfig, ValidationError, ValidationResult

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Catálogo de errores (códigos estables)
# ---------------------------------------------------------------------------

INVALID_DECIMAL = ValidationError(
    code="doubleNumber.e001",
    message="The value is not a valid decimal number.",
)
MAX_DIGITS_EXCEEDED = ValidationError(
    code="doubleNumber.e002",
    message="The value exceeded maximum number of digits.",
)
MAX_DECIMAL_PLACES_EXCEEDED = ValidationError(
    code="doubleNumber.e003",
    message="The value exceeded maximum number of decimal places.",
)

ERROR_CATALOG: tuple[ValidationError, ...] = (
    INVALID_DECIMAL,
    MAX_DIGITS_EXCEEDED,
    MAX_DECIMAL_PLACES_EXCEEDED,
)


class DecimalNumberMatcher:
    """Matcher de números decimales con límite de dígitos y, opcionalmente, de decimales.

    La configuración es inmutable; la instancia puede reutilizarse entre hilos.
    """

    def __init__(self, config: Optional[MatcherConfig] = None) -> None:
        self._config = config or MatcherConfig()

    @classmethod
    def from_params(cls, *params: int) -> "DecimalNumberMatcher":
        """Equivalente posicional: 0, 1 o 2 parámetros (ver MatcherConfig.from_params)."""
        return cls(MatcherConfig.from_params(*params))

    @property
    def config(self) -> MatcherConfig:
        return self._config

    def match(self, value: object) -> ValidationResult:
        result = ValidationResult()
        if value is None:
            return result

        parsed = parse_decimal(value)
        if isinstance(parsed, InvalidNumeral):
            logger.debug("Numeral inválido (%s)", parsed.reason)
            _append(result, INVALID_DECIMAL)
            return result

        self._check_total_digits(parsed, result)
        if self._config.checks_decimal_places:
            self._check_decimal_places(parsed, result)
        return result

    def _check_total_digits(self, number: ParsedDecimal, result: ValidationResult) -> None:
        if number.total_digits > self._config.max_total_digits:
            _append(result, MAX_DIGITS_EXCEEDED)

    def _check_decimal_places(self, number: ParsedDecimal, result: ValidationResult) -> None:
        if number.decimal_places > self._config.max_decimal_places:
            _append(result, MAX_DECIMAL_PLACES_EXCEEDED)

    def __repr__(self) -> str:
        return (
            f"DecimalNumberMatcher(max_total_digits={self._config.max_total_digits}, "
            f"max_decimal_places={self._config.max_decimal_places})"
        )


def _append(result: ValidationResult, error: ValidationError) -> None:
    result.add_error(error.code, error.message)
