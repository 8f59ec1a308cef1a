# core/validator_core.py
# -*- coding: utf-8 -*-
import csv
import io
import logging
import os
from typing import Dict, IO, Iterable, List, Optional

import pandas as pd
from openpyxl import Workbook
from openpyxl.utils.dataframe import dataframe_to_rows
from openpyxl.styles import PatternFill, Font
from openpyxl.formatting.rule import Rule
from openpyxl.styles.differential import DifferentialStyle

from core.matcher import DecimalNumberMatcher, ERROR_CATALOG
from core.models import BatchReport, MatcherConfig

logger = logging.getLogger(__name__)

SUPPORTED_EXTENSIONS = (".xlsx", ".xls", ".csv")

STATUS_VALID = "VALIDO"
STATUS_INVALID = "INVALIDO"

STATUS_LABELS = {
    STATUS_VALID: "🟢 Válido",
    STATUS_INVALID: "🔴 Inválido",
}

REPORT_COLUMNS = ["fila", "valor", "estado", "codigos", "mensajes"]

# ===========
# Logging
# ===========
def setup_logging() -> None:
    logging.basicConfig(
        level=logging.INFO,
        format="%(levelname)s: %(message)s"
    )

# ===========
# Configuración
# ===========
def validate_config(config: MatcherConfig) -> None:
    """Comprueba que los límites tengan sentido antes de lanzar una validación.

    El matcher no valida su configuración; esta comprobación es de la UI.

    Raises:
        ValueError: si algún límite es negativo o los decimales superan el total.
    """
    if config.max_total_digits < 0:
        raise ValueError(
            f"Máximo de dígitos inválido: {config.max_total_digits} (debe ser ≥ 0)."
        )
    if config.max_decimal_places is None:
        return
    if config.max_decimal_places < 0:
        raise ValueError(
            f"Máximo de decimales inválido: {config.max_decimal_places} (debe ser ≥ 0)."
        )
    if config.max_decimal_places > config.max_total_digits:
        raise ValueError(
            f"El máximo de decimales ({config.max_decimal_places}) no puede superar "
            f"el máximo de dígitos ({config.max_total_digits})."
        )

# ===========
# Lectura de tablas
# ===========
def _sniff_separator(text: str) -> str:
    sample = "\n".join(text.splitlines()[:20])
    try:
        return csv.Sniffer().sniff(sample, delimiters=",;").delimiter
    except csv.Error:
        return ","

def read_file(buf: IO[bytes], filename: str) -> pd.DataFrame:
    """Lee un Excel o CSV con todas las celdas como texto.

    Leer como str evita que pandas convierta los números a float binario.
    Las celdas vacías quedan como NaN (valor ausente).
    """
    ext = os.path.splitext(filename)[1].lower()
    if ext not in SUPPORTED_EXTENSIONS:
        raise ValueError(
            f"Formato no soportado: '{ext}'. Usa {', '.join(SUPPORTED_EXTENSIONS)}."
        )
    raw = buf.read()
    try:
        if ext == ".csv":
            text = raw.decode("utf-8-sig")
            sep = _sniff_separator(text)
            df = pd.read_csv(
                io.StringIO(text),
                sep=sep,
                dtype=str,
                keep_default_na=False,
                na_values=[""],
            )
        else:
            engine = "openpyxl" if ext == ".xlsx" else None
            df = pd.read_excel(io.BytesIO(raw), sheet_name=0, dtype=str, engine=engine)
    except Exception as e:
        raise ValueError(f"No se pudo leer {filename}: {e}") from e
    # dtype=str no afecta a las cabeceras: 2024 seguiría siendo int
    df.columns = [str(c) for c in df.columns]
    return df

def guess_numeric_columns(df: pd.DataFrame, sample: int = 50) -> List[str]:
    """Columnas cuyas primeras celdas no vacías parecen numerales decimales."""
    matcher = DecimalNumberMatcher(MatcherConfig(max_total_digits=10**9))
    out = []
    for col in df.columns:
        values = [v for v in df[col].head(sample).tolist() if not pd.isna(v)]
        if values and all(matcher.match(v).is_valid for v in values):
            out.append(str(col))
    return out

# ===========
# Validación
# ===========
def _cell_or_none(x):
    if x is None:
        return None
    try:
        if pd.isna(x):
            return None
    except (TypeError, ValueError):
        pass
    return x

def validate_values(values: Iterable, matcher: DecimalNumberMatcher) -> pd.DataFrame:
    """Aplica el matcher a cada valor y devuelve una fila de informe por valor."""
    rows = []
    for i, raw in enumerate(values, start=1):
        value = _cell_or_none(raw)
        result = matcher.match(value)
        rows.append({
            "fila": i,
            "valor": "" if value is None else str(value),
            "estado": STATUS_VALID if result.is_valid else STATUS_INVALID,
            "codigos": ", ".join(result.codes),
            "mensajes": " | ".join(result.messages),
        })
    return pd.DataFrame(rows, columns=REPORT_COLUMNS)

def validate_column(df: pd.DataFrame, column: str, matcher: DecimalNumberMatcher) -> pd.DataFrame:
    if column not in df.columns:
        raise ValueError(f"Columna '{column}' no encontrada en el archivo.")
    return validate_values(df[column].tolist(), matcher)

def build_summary(reports: Dict[str, pd.DataFrame]) -> pd.DataFrame:
    """Resumen por columna: totales, % válidos, conteo por código de error y estado global."""
    codes = [e.code for e in ERROR_CATALOG]
    cols = ["columna", "total", "validos", "invalidos", "validos_%"] + codes + ["estado_global"]
    data = []
    for name, df in reports.items():
        total = len(df)
        # Conteo por código exacto, no por subcadena
        found = df["codigos"].str.split(", ").explode()
        counts = found[found != ""].value_counts()
        invalid = int((df["estado"] == STATUS_INVALID).sum())
        row = {
            "columna": name,
            "total": total,
            "validos": total - invalid,
            "invalidos": invalid,
            "validos_%": round(100.0 * (total - invalid) / total, 1) if total else 100.0,
        }
        for code in codes:
            row[code] = int(counts.get(code, 0))
        row["estado_global"] = STATUS_VALID if invalid == 0 else STATUS_INVALID
        data.append(row)
    return pd.DataFrame(data, columns=cols)

# ===========
# Excel (formato)
# ===========
def add_conditional_formatting_text(ws, cell_range: str):
    fill_verde = PatternFill(start_color="C6EFCE", end_color="C6EFCE", fill_type="solid")
    fill_rojo = PatternFill(start_color="FFC7CE", end_color="FFC7CE", fill_type="solid")

    dxf_v = DifferentialStyle(fill=fill_verde)
    dxf_r = DifferentialStyle(fill=fill_rojo)

    # INVALIDO contiene "VALIDO": la regla roja va primero y detiene la evaluación
    first = cell_range.split(":")[0]
    rule_r = Rule(
        type="containsText", operator="containsText", text=STATUS_INVALID, dxf=dxf_r,
        formula=[f'NOT(ISERROR(SEARCH("{STATUS_INVALID}",{first})))'], stopIfTrue=True,
    )
    rule_v = Rule(
        type="containsText", operator="containsText", text=STATUS_VALID, dxf=dxf_v,
        formula=[f'NOT(ISERROR(SEARCH("{STATUS_VALID}",{first})))'],
    )

    ws.conditional_formatting.add(cell_range, rule_r)
    ws.conditional_formatting.add(cell_range, rule_v)

def escribir_hoja_df(ws, df: pd.DataFrame):
    for r in dataframe_to_rows(df, index=False, header=True):
        ws.append(r)
    for cell in ws[1]:
        cell.font = Font(bold=True)
    for col in ws.columns:
        max_len = max((len(str(cell.value)) if cell.value is not None else 0) for cell in col)
        ws.column_dimensions[col[0].column_letter].width = min(max(10, max_len + 2), 45)

def _status_range(df: pd.DataFrame, column: str) -> Optional[str]:
    if df.shape[0] == 0 or column not in df.columns:
        return None
    from openpyxl.utils import get_column_letter
    letter = get_column_letter(list(df.columns).index(column) + 1)
    return f"{letter}2:{letter}{df.shape[0] + 1}"

def _sheet_title(name: str, used: set) -> str:
    # Excel: máx. 31 caracteres y sin []:*?/\
    base = "".join("_" if ch in '[]:*?/\\' else ch for ch in str(name))[:31] or "columna"
    title, n = base, 1
    while title.lower() in used:
        suffix = f"_{n}"
        title = base[:31 - len(suffix)] + suffix
        n += 1
    used.add(title.lower())
    return title

def build_excel(report: BatchReport, config: MatcherConfig) -> bytes:
    """Genera el informe Excel: Resumen, una hoja por columna y Leyenda."""
    wb = Workbook()
    ws0 = wb.active
    ws0.title = "Resumen"
    escribir_hoja_df(ws0, report.summary)
    rng = _status_range(report.summary, "estado_global")
    if rng:
        add_conditional_formatting_text(ws0, rng)

    used = {"resumen", "leyenda"}
    for name in report.columns:
        df = report.reports[name]
        ws = wb.create_sheet(title=_sheet_title(name, used))
        escribir_hoja_df(ws, df)
        rng = _status_range(df, "estado")
        if rng:
            add_conditional_formatting_text(ws, rng)

    ws_l = wb.create_sheet(title="Leyenda")
    limits = pd.DataFrame([
        {"parametro": "max_total_digits", "valor": config.max_total_digits},
        {
            "parametro": "max_decimal_places",
            "valor": "-" if config.max_decimal_places is None else config.max_decimal_places,
        },
    ])
    escribir_hoja_df(ws_l, limits)
    ws_l.append([])
    catalog = pd.DataFrame([{"codigo": e.code, "mensaje": e.message} for e in ERROR_CATALOG])
    for r in dataframe_to_rows(catalog, index=False, header=True):
        ws_l.append(r)

    bio = io.BytesIO()
    wb.save(bio)
    bio.seek(0)
    return bio.getvalue()

# ===========
# Motor
# ===========
def run_validation(
    buf: IO[bytes],
    filename: str,
    columns: Iterable[str],
    config: MatcherConfig,
) -> BatchReport:
    """
    Orquesta todo:
    - Lee el archivo (todas las celdas como texto)
    - Valida cada columna pedida con un único matcher
    - Las columnas inexistentes se anotan en missing_columns, no abortan
    - Construye el resumen
    """
    df = read_file(buf, filename)
    matcher = DecimalNumberMatcher(config)
    report = BatchReport(filename=filename)

    for col in columns:
        try:
            report.reports[col] = validate_column(df, col, matcher)
            report.columns.append(col)
        except ValueError as e:
            logger.warning("%s: %s", filename, e)
            report.missing_columns.append(col)

    report.summary = build_summary(report.reports)
    logger.info(
        "Validación de %s: %d columnas, %d celdas inválidas, %d columnas no encontradas (%r)",
        filename,
        len(report.columns),
        report.total_invalid,
        len(report.missing_columns),
        matcher,
    )
    return report
