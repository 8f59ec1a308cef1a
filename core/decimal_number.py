"""
core/decimal_number.py
======================
Parseo exacto de numerales decimales (sin pasar por float binario).

parse_decimal() nunca lanza: devuelve ParsedDecimal si el valor es un numeral
decimal válido o InvalidNumeral en caso contrario.
"""
from __future__ import annotations

import numbers
import re
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Union

# Signo opcional, dígitos ASCII con '.' como único separador, exponente opcional.
_NUMERAL_RE = re.compile(r"^[+-]?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:[eE][+-]?[0-9]+)?$")


@dataclass(frozen=True)
class ParsedDecimal:
    """Valor decimal exacto con consultas de precisión."""
    value: Decimal

    def _stripped(self) -> tuple[tuple[int, ...], int]:
        # Quita ceros no significativos sin usar el contexto (normalize() redondea a 28 dígitos)
        _sign, digits, exp = self.value.as_tuple()
        digits = list(digits)
        while len(digits) > 1 and digits[0] == 0:
            digits.pop(0)
        if digits == [0]:
            return (0,), 0
        while digits[-1] == 0:
            digits.pop()
            exp += 1
        return tuple(digits), exp

    @property
    def total_digits(self) -> int:
        """Dígitos significativos; los ceros finales de la parte entera cuentan."""
        digits, exp = self._stripped()
        return len(digits) + max(exp, 0)

    @property
    def decimal_places(self) -> int:
        """Dígitos tras el punto en la forma normalizada no exponencial."""
        _digits, exp = self._stripped()
        return max(-exp, 0)


@dataclass(frozen=True)
class InvalidNumeral:
    """Resultado de parseo fallido."""
    raw: object
    reason: str


ParseOutcome = Union[ParsedDecimal, InvalidNumeral]


def _from_text(raw: object, text: str) -> ParseOutcome:
    if not _NUMERAL_RE.match(text):
        return InvalidNumeral(raw, "sintaxis de numeral decimal inválida")
    try:
        return ParsedDecimal(Decimal(text))
    except InvalidOperation:
        return InvalidNumeral(raw, "numeral decimal no representable")


def parse_decimal(value: object) -> ParseOutcome:
    """Parsea un str, entero, real (float, numpy) o Decimal a un decimal exacto.

    Los reales se convierten vía str() (representación más corta), de modo que
    0.1 cuenta como un único decimal. NaN, infinito y bool son inválidos.
    """
    if isinstance(value, bool):
        return InvalidNumeral(value, "bool no es un número")
    if isinstance(value, str):
        return _from_text(value, value)
    if isinstance(value, numbers.Integral):
        return ParsedDecimal(Decimal(int(value)))
    if isinstance(value, numbers.Real):
        # str() de float y de numpy.float16/32/64 es la representación más corta
        return _from_text(value, str(value))
    if isinstance(value, Decimal):
        if not value.is_finite():
            return InvalidNumeral(value, "valor no finito")
        return ParsedDecimal(value)
    return InvalidNumeral(value, f"tipo no soportado: {type(value).__name__}")
