"""
core/models.py
==============
Modelos de datos puros para el validador de números decimales.

Sin dependencias de Streamlit ni de validator_core — 100% testeable en
aislamiento. Todos los demás módulos importan desde aquí.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

import pandas as pd

DEFAULT_MAX_TOTAL_DIGITS = 11


# ---------------------------------------------------------------------------
# MatcherConfig
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class MatcherConfig:
    """Límites de dígitos aplicados por DecimalNumberMatcher.

    Attributes:
        max_total_digits:   Máximo de dígitos significativos (sin signo).
        max_decimal_places: Máximo de decimales. None → no se comprueba.
    """
    max_total_digits: int = DEFAULT_MAX_TOTAL_DIGITS
    max_decimal_places: Optional[int] = None

    @classmethod
    def from_params(cls, *params: int) -> "MatcherConfig":
        """Construye la configuración a partir de 0, 1 o 2 parámetros posicionales.

        - sin parámetros: máximo 11 dígitos, sin límite de decimales.
        - un parámetro:   máximo de dígitos.
        - dos parámetros: máximo de dígitos y máximo de decimales.
        """
        if len(params) > 2:
            raise ValueError(
                f"Se admiten como máximo 2 parámetros, recibidos {len(params)}."
            )
        if not params:
            return cls()
        if len(params) == 1:
            return cls(max_total_digits=params[0])
        return cls(max_total_digits=params[0], max_decimal_places=params[1])

    @property
    def checks_decimal_places(self) -> bool:
        return self.max_decimal_places is not None


# ---------------------------------------------------------------------------
# ValidationResult
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ValidationError:
    """Entrada de error: código estable + mensaje fijo."""
    code: str
    message: str


@dataclass
class ValidationResult:
    """Acumulador de errores de una validación. Válido ⇔ sin errores."""
    errors: list[ValidationError] = field(default_factory=list)

    def add_error(self, code: str, message: str) -> None:
        self.errors.append(ValidationError(code=code, message=message))

    @property
    def is_valid(self) -> bool:
        return not self.errors

    @property
    def codes(self) -> list[str]:
        """Códigos de error en orden de inserción."""
        return [e.code for e in self.errors]

    @property
    def messages(self) -> list[str]:
        return [e.message for e in self.errors]


# ---------------------------------------------------------------------------
# BatchReport
# ---------------------------------------------------------------------------

@dataclass
class BatchReport:
    """Resultado completo de validar columnas de un archivo.

    Attributes:
        filename:        Nombre del archivo validado.
        columns:         Columnas validadas con éxito, en orden de petición.
        reports:         columna → DataFrame fila a fila (fila, valor, estado, codigos, mensajes).
        summary:         Resumen por columna (totales, % válidos, conteo por código, estado_global).
        missing_columns: Columnas pedidas que no existen en el archivo.
    """
    filename: str = ""
    columns: list[str] = field(default_factory=list)
    reports: dict[str, pd.DataFrame] = field(default_factory=dict)
    summary: pd.DataFrame = field(default_factory=pd.DataFrame)
    missing_columns: list[str] = field(default_factory=list)

    @property
    def has_results(self) -> bool:
        """True si al menos una columna se validó."""
        return len(self.columns) > 0

    @property
    def total_invalid(self) -> int:
        """Número total de celdas inválidas en todas las columnas."""
        return int(sum((df["estado"] == "INVALIDO").sum() for df in self.reports.values()))
