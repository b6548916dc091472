"""Tests for format_result and the Rich renderers."""

import json

from paractl.output.formatters import OutputSettings, format_result
from paractl.output.renderers import render_quiet, render_result
from paractl.services.result import ServiceResult


def _relocated(**extra: object) -> ServiceResult:
    data = {
        "path": "Inbox/idea.md",
        "new_path": "Resources/Tools/idea.md",
        "tags": ["work", "para/ref/Tools"],
        "tags_synced": True,
    }
    data.update(extra)
    return ServiceResult(ok=True, op="relocate", data=data)


def _batch(success: int, total: int) -> ServiceResult:
    return ServiceResult(
        ok=True,
        op="archive_folder",
        data={
            "folder": "Projects/Alpha",
            "direction": "archive",
            "success_count": success,
            "total": total,
        },
    )


class TestOutputSettings:
    def test_defaults(self) -> None:
        s = OutputSettings()
        assert s.json_output is False
        assert s.quiet is False
        assert s.verbose is False


class TestFormatResult:
    def test_json_wins(self) -> None:
        output = format_result(_relocated(), settings=OutputSettings(json_output=True, quiet=True))
        data = json.loads(output)
        assert data["data"]["new_path"] == "Resources/Tools/idea.md"

    def test_quiet(self) -> None:
        output = format_result(_relocated(), settings=OutputSettings(quiet=True))
        assert output == "Resources/Tools/idea.md"

    def test_default_is_human(self) -> None:
        output = format_result(_relocated())
        assert output.startswith("OK  relocate")


class TestRenderQuiet:
    def test_batch(self) -> None:
        assert render_quiet(_batch(4, 5)) == "4/5"

    def test_folders(self) -> None:
        result = ServiceResult(
            ok=True,
            op="folders",
            data={"items": [{"path": "Areas", "name": "Areas"}, {"path": "Areas/Health"}]},
        )
        assert render_quiet(result) == "Areas\nAreas/Health"

    def test_error(self) -> None:
        result = ServiceResult.failure("archive", "ARCHIVE_DISABLED", "Archive feature is disabled")
        assert render_quiet(result) == "ERROR: archive — Archive feature is disabled"


class TestRenderResult:
    def test_relocation_fields(self) -> None:
        output = render_result(_relocated())
        assert "new_path: Resources/Tools/idea.md" in output
        assert "tags: work, para/ref/Tools" in output
        assert "tags not synced" not in output

    def test_unsynced_tags_flagged(self) -> None:
        output = render_result(_relocated(tags=[], tags_synced=False))
        assert "tags: (none)" in output
        assert "tags not synced" in output

    def test_batch_summary(self) -> None:
        output = render_result(_batch(4, 5))
        assert "folder: Projects/Alpha" in output
        assert "4 of 5 succeeded" in output

    def test_folders_table(self) -> None:
        result = ServiceResult(
            ok=True,
            op="folders",
            data={
                "rule": "project",
                "directory": "Projects",
                "count": 2,
                "items": [
                    {"path": "Projects", "name": "Projects"},
                    {"path": "Projects/Alpha", "name": "Alpha"},
                ],
            },
        )
        output = render_result(result)
        assert "rule: project" in output
        assert "Projects/Alpha" in output

    def test_error_detail_only_when_verbose(self) -> None:
        result = ServiceResult.failure(
            "relocate", "RELOCATION_FAILED", "Could not relocate", reached="moved"
        )
        assert "reached" not in render_result(result)
        verbose = render_result(result, verbose=True)
        assert verbose.startswith("ERROR  relocate")
        assert "reached: moved" in verbose

    def test_telemetry_tree(self) -> None:
        result = _relocated().model_copy(
            update={
                "meta": {
                    "telemetry": {
                        "name": "RelocationService.relocate_one",
                        "duration_ms": 3.5,
                        "children": [{"name": "move", "duration_ms": 1.25}],
                    }
                }
            }
        )
        output = render_result(result, verbose=True)
        assert "RelocationService.relocate_one" in output
        assert "1.25ms" in output

    def test_generic_fallback(self) -> None:
        result = ServiceResult(ok=True, op="other", data={"items_moved": 2})
        assert "items_moved: 2" in render_result(result)
