import json
from unittest.mock import patch

import pytest
from typer.testing import CliRunner

from device_ui.cli import app


runner = CliRunner()

LAYOUT = """
runtime:
  snapshot_interval: 60
components:
  - type: Slider
    id: s1
    min: 0
    max: 100
    value: 50
  - type: Button
    id: b1
"""


class TestCLI:
    @pytest.fixture(autouse=True)
    def clean_env(self, monkeypatch):
        for name in (
            "DEVICE_UI_SNAPSHOT_INTERVAL",
            "DEVICE_UI_MAX_MESSAGE_BYTES",
            "DEVICE_UI_REPORT_UNKNOWN_IDS",
            "LOG_LEVEL",
        ):
            monkeypatch.delenv(name, raising=False)

    @pytest.fixture
    def layout(self, tmp_path):
        path = tmp_path / "layout.yaml"
        path.write_text(LAYOUT)
        return path

    def test_render(self, layout):
        result = runner.invoke(app, ["render", str(layout)])
        assert result.exit_code == 0
        message = json.loads(result.output.strip())
        assert [c["id"] for c in message["components"]] == ["s1", "b1"]

    def test_render_missing_file(self, tmp_path):
        result = runner.invoke(app, ["render", str(tmp_path / "nope.yaml")])
        assert result.exit_code == 1
        assert "Layout file not found" in result.output

    def test_validate_ok(self, layout):
        result = runner.invoke(app, ["validate", str(layout)])
        assert result.exit_code == 0
        assert "is valid (2 components)" in result.output

    def test_validate_schema_error(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("components:\n  - type: Gauge\n    id: g1\n")
        result = runner.invoke(app, ["validate", str(path)])
        assert result.exit_code == 1
        assert "Validation Error" in result.output

    def test_validate_duplicate_ids(self, tmp_path):
        path = tmp_path / "dup.yaml"
        path.write_text(
            "components:\n"
            "  - {type: Button, id: b1}\n"
            "  - {type: Button, id: b1}\n"
        )
        result = runner.invoke(app, ["validate", str(path)])
        assert result.exit_code == 1
        assert "already registered" in result.output

    def test_validate_bounds(self, tmp_path):
        path = tmp_path / "bounds.yaml"
        path.write_text(
            "components:\n  - {type: Slider, id: s1, min: 5, max: 1, value: 3}\n"
        )
        result = runner.invoke(app, ["validate", str(path)])
        assert result.exit_code == 1

    def test_schema(self):
        result = runner.invoke(app, ["schema"])
        assert result.exit_code == 0
        schema = json.loads(result.output)
        assert "components" in schema["properties"]

    def test_serve(self, layout):
        with patch("device_ui.cli.setup_logging") as setup_logging:
            result = runner.invoke(
                app,
                ["serve", str(layout), "--report-unknown-ids"],
                input=(
                    '{"update":{"id":"s1","value":150}}\n'
                    "not json\n"
                    '{"update":{"id":"zz","pressed":true}}\n'
                ),
            )
        assert result.exit_code == 0
        setup_logging.assert_called_once_with("INFO")
        assert '{"error":"Invalid JSON"}' in result.output
        assert '{"error":"Unknown component","id":"zz"}' in result.output
        assert (
            '{"components":[{"type":"Slider","id":"s1","value":100,"min":0,"max":100}'
            in result.output
        )

    def test_serve_invalid_layout(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("runtime:\n  snapshot_interval: -1\n")
        result = runner.invoke(app, ["serve", str(path)])
        assert result.exit_code == 1
