"""Core: validación de números decimales. Sin dependencias de Streamlit."""
from core.models import MatcherConfig, ValidationError, ValidationResult, BatchReport
from core.decimal_number import ParsedDecimal, InvalidNumeral, parse_decimal
from core.matcher import DecimalNumberMatcher, ERROR_CATALOG
from core.validator_core import (
    read_file,
    guess_numeric_columns,
    validate_values,
    validate_column,
    validate_config,
    build_summary,
    run_validation,
    build_excel,
)

__all__ = [
    "MatcherConfig",
    "ValidationError",
    "ValidationResult",
    "BatchReport",
    "ParsedDecimal",
    "InvalidNumeral",
    "parse_decimal",
    "DecimalNumberMatcher",
    "ERROR_CATALOG",
    "read_file",
    "guess_numeric_columns",
    "validate_values",
    "validate_column",
    "validate_config",
    "build_summary",
    "run_validation",
    "build_excel",
]
