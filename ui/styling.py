"""
ui/styling.py
=============
Componentes de presentación para Streamlit.

IMPORTANTE: Este módulo SÍ puede importar streamlit.
No debe contener lógica de negocio (parseo, conteo de dígitos).
Solo renderiza datos ya procesados por core/.
"""
from __future__ import annotations

from typing import Optional

import pandas as pd
import streamlit as st

from core.matcher import ERROR_CATALOG
from core.models import BatchReport
from core.validator_core import STATUS_LABELS, STATUS_VALID, STATUS_INVALID

# ---------------------------------------------------------------------------
# Colores CSS para estados (sin usar pd.Styler.applymap — compatible Cloud)
# ---------------------------------------------------------------------------

STATUS_CSS = {
    STATUS_VALID: "background-color: #92D050; color: #1a3a1a; font-weight: bold;",
    STATUS_INVALID: "background-color: #FF6666; color: #3a0000; font-weight: bold;",
}


def _color_for_status_label(val: str) -> str:
    """Devuelve CSS para una celda dado su label con emoji (ej. '🟢 Válido')."""
    for key, label in STATUS_LABELS.items():
        if val == label:
            return STATUS_CSS.get(key, "")
    return ""


# ---------------------------------------------------------------------------
# Componentes de feedback
# ---------------------------------------------------------------------------

def render_missing_columns(report: BatchReport) -> None:
    """Avisa de columnas pedidas que no existen en el archivo."""
    if not report.missing_columns:
        st.success(f"✅ {len(report.columns)} columna(s) validada(s) en `{report.filename}`.")
        return

    st.warning(
        f"⚠️ **{len(report.missing_columns)} columna(s) no encontrada(s):**\n\n"
        + "\n".join(f"- `{c}`" for c in report.missing_columns)
    )


# ---------------------------------------------------------------------------
# Componentes de resultados
# ---------------------------------------------------------------------------

def render_summary(report: BatchReport) -> None:
    """Renderiza la tabla resumen por columna con el estado global."""
    if report.summary.empty:
        st.info("Sin datos de resumen disponibles.")
        return

    st.subheader("📊 Resumen por Columna")

    display = report.summary.copy()
    display["estado_global"] = display["estado_global"].map(
        lambda v: STATUS_LABELS.get(v, v)
    )
    styled = display.style.map(_color_for_status_label, subset=["estado_global"])
    st.dataframe(styled, use_container_width=True, hide_index=True)


def render_column_detail(name: str, df: pd.DataFrame, only_invalid: bool = True) -> None:
    """Detalle fila a fila de una columna; por defecto solo las filas inválidas."""
    n_invalid = int((df["estado"] == STATUS_INVALID).sum())
    with st.expander(f"🔢 Columna: **{name}** — {n_invalid} inválida(s)", expanded=n_invalid > 0):
        display = df[df["estado"] == STATUS_INVALID] if only_invalid else df
        if display.empty:
            st.caption("Todas las celdas cumplen los límites.")
            return
        display = display.copy()
        display["estado"] = display["estado"].map(lambda v: STATUS_LABELS.get(v, v))
        styled = display.style.map(_color_for_status_label, subset=["estado"])
        st.dataframe(styled, use_container_width=True, hide_index=True)


def render_error_legend() -> None:
    with st.expander("📖 Códigos de error", expanded=False):
        st.table(pd.DataFrame(
            [{"código": e.code, "mensaje": e.message} for e in ERROR_CATALOG]
        ))


def render_all_results(report: BatchReport, only_invalid: bool = True) -> None:
    """Renderiza todos los resultados de validación."""
    render_missing_columns(report)

    if not report.has_results:
        st.error("❌ No se pudo validar ninguna columna.")
        return

    render_summary(report)

    st.subheader("🔍 Detalle por Columna")
    for name in report.columns:
        render_column_detail(name, report.reports[name], only_invalid=only_invalid)

    render_error_legend()


# ---------------------------------------------------------------------------
# Sidebar helpers
# ---------------------------------------------------------------------------

def render_limits_editor(
    default_total_digits: int,
    default_decimal_places: Optional[int],
) -> tuple[int, Optional[int]]:
    """Renderiza los límites de dígitos en el sidebar.

    Args:
        default_total_digits: Máximo de dígitos significativos por defecto.
        default_decimal_places: Máximo de decimales por defecto (None → sin límite).

    Returns:
        (max_total_digits, max_decimal_places) con max_decimal_places None si
        el límite de decimales está desactivado.
    """
    max_total_digits = st.number_input(
        "Máximo de dígitos",
        min_value=0,
        max_value=1000,
        value=int(default_total_digits),
        step=1,
        help="Dígitos significativos totales (parte entera + decimales, sin signo).",
    )

    use_decimals = st.checkbox(
        "Limitar decimales",
        value=default_decimal_places is not None,
        help="Si está desactivado solo se comprueba el número total de dígitos.",
    )
    if not use_decimals:
        return int(max_total_digits), None

    max_decimal_places = st.number_input(
        "Máximo de decimales",
        min_value=0,
        max_value=1000,
        value=int(default_decimal_places if default_decimal_places is not None else 2),
        step=1,
    )
    if max_decimal_places > max_total_digits:
        st.error(
            f"⚠️ Los decimales ({max_decimal_places}) no pueden superar "
            f"el máximo de dígitos ({max_total_digits})."
        )
    return int(max_total_digits), int(max_decimal_places)
