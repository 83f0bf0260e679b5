"""Export strategies for task sequences."""

from __future__ import annotations

from task_tracker.export.base import ExportStrategy
from task_tracker.export.csv_export import CsvExportStrategy
from task_tracker.export.json_export import JsonExportStrategy
from task_tracker.export.markdown_export import MarkdownExportStrategy
from task_tracker.export.service import ExportService

__all__ = [
    "EXPORT_FORMATS",
    "CsvExportStrategy",
    "ExportService",
    "ExportStrategy",
    "JsonExportStrategy",
    "MarkdownExportStrategy",
    "get_export_strategy",
]

EXPORT_FORMATS: dict[str, type[ExportStrategy]] = {
    "csv": CsvExportStrategy,
    "json": JsonExportStrategy,
    "md": MarkdownExportStrategy,
    "markdown": MarkdownExportStrategy,
}


def get_export_strategy(fmt: str) -> ExportStrategy:
    """Return a strategy for a format name (csv, json, md/markdown)."""
    try:
        return EXPORT_FORMATS[fmt.strip().lower()]()
    except KeyError:
        valid = ", ".join(EXPORT_FORMATS)
        raise ValueError(f"Invalid export format '{fmt}'. Must be one of: {valid}")
