"""Tests for export strategies and the export service."""

import csv
import io
import json
from datetime import datetime

import pytest

from task_tracker.cancellation import CancellationToken
from task_tracker.exceptions import ExportError, OperationCancelledError
from task_tracker.export import (
    CsvExportStrategy,
    ExportService,
    JsonExportStrategy,
    MarkdownExportStrategy,
    get_export_strategy,
)
from task_tracker.models import Priority, Task


@pytest.fixture
def task() -> Task:
    return Task(
        title='Review "Q3", plan',
        description="Line one\nline two",
        priority=Priority.HIGH,
        tags=("work", "finance"),
        due_date=datetime(2026, 11, 2, 17, 0),
        created_at=datetime(2026, 10, 1, 8, 15),
    )


class TestCsvExport:
    def test_header_only_for_empty_input(self):
        output = CsvExportStrategy().export([])
        assert output == (
            '"Id","CreatedAt","Title","Description","Tags","DueDate","Priority","IsCompleted"\n'
        )

    def test_row_fields(self, task):
        output = CsvExportStrategy().export([task])
        rows = list(csv.reader(io.StringIO(output)))

        assert len(rows) == 2
        assert rows[1] == [
            str(task.id),
            "2026-10-01",
            'Review "Q3", plan',
            "Line one\nline two",
            "work;finance",
            "2026-11-02",
            "High",
            "True",
        ]

    def test_every_field_quoted(self, task):
        output = CsvExportStrategy().export([task])
        assert '"Review ""Q3"", plan"' in output
        assert '"True"' in output

    def test_missing_values_are_empty(self):
        output = CsvExportStrategy().export([Task(title="Bare")])
        row = list(csv.reader(io.StringIO(output)))[1]
        assert row[3] == ""
        assert row[4] == ""
        assert row[5] == ""
        assert row[6] == "Low"
        assert row[7] == "False"

    def test_keeps_input_order(self, sample_tasks):
        output = CsvExportStrategy().export(sample_tasks)
        rows = list(csv.reader(io.StringIO(output)))[1:]
        assert [row[2] for row in rows] == [t.title for t in sample_tasks]


class TestJsonExport:
    def test_empty(self):
        assert json.loads(JsonExportStrategy().export([])) == []

    def test_objects(self, task):
        data = json.loads(JsonExportStrategy().export([task]))
        assert data == [
            {
                "id": str(task.id),
                "title": 'Review "Q3", plan',
                "description": "Line one\nline two",
                "priority": "HIGH",
                "tags": ["work", "finance"],
                "due_date": "2026-11-02T17:00:00",
                "created_at": "2026-10-01T08:15:00",
                "is_completed": False,
            }
        ]

    def test_indented(self, task):
        assert "\n  " in JsonExportStrategy().export([task])
        assert "\n" not in JsonExportStrategy(indent=None).export([task])


class TestMarkdownExport:
    def test_empty(self):
        assert MarkdownExportStrategy().export([]) == "# Tasks\n\nNo tasks available.\n"

    def test_table(self, task):
        output = MarkdownExportStrategy().export([task])
        lines = output.splitlines()

        assert lines[0] == "# Tasks"
        assert lines[1] == ""
        header = lines[2]
        for column in ["Status", "Title", "Priority", "Due Date", "Tags", "Description"]:
            assert column in header
        assert lines[3].startswith("|-")
        assert len(lines) == 5

    def test_cells_escaped(self):
        output = MarkdownExportStrategy().export(
            [Task(title="a | b", description="first\nsecond")]
        )
        row = output.splitlines()[-1]
        assert "a \\| b" in row
        assert "first second" in row

    def test_completed_and_missing_values(self):
        output = MarkdownExportStrategy().export([Task(title="Done", is_completed=True)])
        row = output.splitlines()[-1]
        assert "✓" in row
        assert "-" in row
        assert "Low" in row


class TestGetExportStrategy:
    @pytest.mark.parametrize(
        ("fmt", "expected"),
        [
            ("csv", CsvExportStrategy),
            ("JSON", JsonExportStrategy),
            ("md", MarkdownExportStrategy),
            ("markdown", MarkdownExportStrategy),
        ],
    )
    def test_known_formats(self, fmt, expected):
        assert isinstance(get_export_strategy(fmt), expected)

    def test_unknown_format(self):
        with pytest.raises(ValueError, match="Invalid export format"):
            get_export_strategy("xml")


class TestExportService:
    def test_writes_file(self, tmp_path, sample_tasks):
        service = ExportService(tmp_path / "out" / "tasks")

        path = service.export_tasks(sample_tasks, CsvExportStrategy())

        assert path == tmp_path / "out" / "tasks.csv"
        assert path.read_text(encoding="utf-8").startswith('"Id"')

    def test_extension_per_strategy(self, tmp_path):
        service = ExportService(tmp_path / "tasks")
        assert service.target_path(JsonExportStrategy()).name == "tasks.json"
        assert service.target_path(MarkdownExportStrategy()).name == "tasks.md"

    def test_cancelled_writes_nothing(self, tmp_path, sample_tasks):
        token = CancellationToken()
        token.cancel()
        service = ExportService(tmp_path / "tasks")

        with pytest.raises(OperationCancelledError):
            service.export_tasks(sample_tasks, JsonExportStrategy(), token)
        assert not (tmp_path / "tasks.json").exists()

    def test_write_failure_raises_export_error(self, tmp_path, sample_tasks):
        blocker = tmp_path / "blocker"
        blocker.write_text("not a directory")
        service = ExportService(blocker / "tasks")

        with pytest.raises(ExportError):
            service.export_tasks(sample_tasks, CsvExportStrategy())
