"""
app.py — Validador de Números Decimales
=========================================
Entrypoint principal para Streamlit Cloud.

Flujo:
  1. Sidebar: subida de un archivo (Excel/CSV), selección de columnas y límites.
  2. Botón único "Ejecutar Validación".
  3. Área principal: resumen por columna + detalle de celdas inválidas.
  4. Descarga de Excel con formato condicional.
"""
from __future__ import annotations

import io
import logging
from typing import Any, Optional

import streamlit as st

from core.models import DEFAULT_MAX_TOTAL_DIGITS, MatcherConfig
from core.validator_core import (
    build_excel,
    guess_numeric_columns,
    read_file,
    run_validation,
    validate_config,
)
from ui.styling import render_all_results, render_limits_editor

# ---------------------------------------------------------------------------
# Configuración de logging (no verbose, no exponer datos sensibles)
# ---------------------------------------------------------------------------
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    datefmt="%H:%M:%S",
)
logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Configuración de página
# ---------------------------------------------------------------------------
st.set_page_config(
    page_title="Validador de Números Decimales",
    page_icon="🔢",
    layout="wide",
    initial_sidebar_state="expanded",
    menu_items={
        "About": "Validador de números decimales con límites de dígitos.",
        "Report a bug": None,
        "Get help": None,
    },
)

# ---------------------------------------------------------------------------
# Helpers de session_state / secrets
# ---------------------------------------------------------------------------

def _init_state() -> None:
    """Inicializa claves de session_state si no existen."""
    defaults: dict[str, Any] = {
        "file": None,
        "columns_detected": [],
        "numeric_detected": [],
        "report": None,
        "excel_bytes": None,
    }
    for key, val in defaults.items():
        if key not in st.session_state:
            st.session_state[key] = val


def _secret_defaults() -> tuple[int, Optional[int]]:
    """Límites por defecto desde st.secrets['defaults'] (si existen)."""
    try:
        defaults = st.secrets.get("defaults", {})
    except FileNotFoundError:
        defaults = {}
    total = int(defaults.get("max_total_digits", DEFAULT_MAX_TOTAL_DIGITS))
    decimals = defaults.get("max_decimal_places")
    return total, (int(decimals) if decimals is not None else None)


@st.cache_data(show_spinner=False)
def _cached_detect_columns(file_bytes: bytes, filename: str) -> tuple[list[str], list[str]]:
    """Detecta columnas y columnas numéricas del archivo (cacheado por contenido)."""
    try:
        df = read_file(io.BytesIO(file_bytes), filename)
        return [str(c) for c in df.columns], guess_numeric_columns(df)
    except ValueError as e:
        logger.warning("No se pudieron detectar columnas: %s", e)
        return [], []


# ---------------------------------------------------------------------------
# Sidebar
# ---------------------------------------------------------------------------

def render_sidebar() -> tuple[Any, list[str], MatcherConfig, bool]:
    """Renderiza el sidebar completo y devuelve configuración de ejecución."""
    with st.sidebar:
        st.title("🔢 Validador de Decimales")
        st.caption("Comprueba numerales decimales, dígitos totales y decimales")
        st.divider()

        # --- Subida de archivo ---
        st.header("📂 Archivo")
        uploaded = st.file_uploader(
            "Selecciona un archivo",
            type=["xlsx", "xls", "csv"],
            accept_multiple_files=False,
            help="Soporta .xlsx, .xls, .csv. El separador decimal es siempre '.'.",
            key="uploader_file",
        )
        if uploaded is not None:
            st.session_state.file = uploaded
            uploaded.seek(0)
            cols, numeric = _cached_detect_columns(uploaded.read(), uploaded.name)
            uploaded.seek(0)
            st.session_state.columns_detected = cols
            st.session_state.numeric_detected = numeric

        columns = st.multiselect(
            "Columnas a validar",
            options=st.session_state.columns_detected,
            default=st.session_state.numeric_detected,
            help="Por defecto se preseleccionan las columnas que parecen numéricas.",
        )

        st.divider()

        # --- Límites ---
        st.header("⚙️ Límites")
        default_total, default_decimals = _secret_defaults()
        max_total_digits, max_decimal_places = render_limits_editor(
            default_total_digits=default_total,
            default_decimal_places=default_decimals,
        )

        only_invalid = st.checkbox("Mostrar solo celdas inválidas", value=True)

    config = MatcherConfig(
        max_total_digits=max_total_digits,
        max_decimal_places=max_decimal_places,
    )
    return st.session_state.file, columns, config, only_invalid


# ---------------------------------------------------------------------------
# Main
# ---------------------------------------------------------------------------

def main() -> None:
    _init_state()

    uploaded, columns, config, only_invalid = render_sidebar()

    st.title("🔢 Validador de Números Decimales")
    st.caption(
        "Sube un archivo en el sidebar, elige las columnas y los límites "
        "y pulsa **Ejecutar Validación**."
    )

    col_btn, col_info = st.columns([1, 3])
    with col_btn:
        run_btn = st.button(
            "▶ Ejecutar Validación",
            type="primary",
            disabled=(uploaded is None or not columns),
            use_container_width=True,
            help="Requiere un archivo cargado y al menos una columna.",
        )

    with col_info:
        if uploaded is None or not columns:
            st.info("📌 Carga un archivo y selecciona columnas para activar la validación.")

    st.divider()

    if run_btn:
        try:
            validate_config(config)
        except ValueError as e:
            st.error(f"❌ Corrige los límites antes de ejecutar: {e}")
            st.stop()

        with st.spinner("⏳ Procesando validación..."):
            try:
                uploaded.seek(0)
                report = run_validation(
                    buf=io.BytesIO(uploaded.read()),
                    filename=uploaded.name,
                    columns=columns,
                    config=config,
                )
                st.session_state.report = report
                st.session_state.excel_bytes = (
                    build_excel(report, config) if report.has_results else None
                )
            except ValueError as e:
                st.error(f"❌ Error de configuración: {e}")
                logger.warning("ValueError en validación: %s", e)
                st.stop()
            except Exception as e:
                st.error(f"❌ Error inesperado durante la validación: {e}")
                logger.exception("Error inesperado en run_validation")
                st.stop()

    # --- Renderizar resultados (persisten entre reruns gracias a session_state) ---
    if st.session_state.report is not None:
        render_all_results(st.session_state.report, only_invalid=only_invalid)

        if st.session_state.excel_bytes:
            st.divider()
            st.download_button(
                label="📥 Descargar Informe Excel",
                data=st.session_state.excel_bytes,
                file_name="validacion_decimales.xlsx",
                mime="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
                type="primary",
                use_container_width=False,
                help="Informe con resultados por columna, resumen y leyenda de códigos.",
            )


if __name__ == "__main__":
    main()
