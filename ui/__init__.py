"""UI: componentes de presentación Streamlit. Solo renderiza, no calcula."""
from ui.styling import (
    render_all_results,
    render_missing_columns,
    render_summary,
    render_column_detail,
    render_limits_editor,
)

__all__ = [
    "render_all_results",
    "render_missing_columns",
    "render_summary",
    "render_column_detail",
    "render_limits_editor",
]
