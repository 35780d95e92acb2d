import json
from pathlib import Path
from unittest.mock import patch

import yaml
from click.testing import CliRunner

from openapi_export.cli import main
from openapi_export.errors import CaptureFormatError

FIXTURES = Path(__file__).parent / "fixtures"


class TestCliConvert:
    def test_convert_postman_to_json(self, tmp_path):
        output_file = tmp_path / "openapi.json"
        runner = CliRunner()
        result = runner.invoke(main, [
            "convert", str(FIXTURES / "sample.postman.json"),
            "-o", str(output_file),
            "--api-version", "1.0.0",
        ])

        assert result.exit_code == 0, result.output
        assert "Found 4 requests." in result.output
        doc = json.loads(output_file.read_text(encoding="utf-8"))
        assert doc["info"] == {"title": "Pet Store", "version": "1.0.0"}

    def test_convert_native_to_yaml(self, tmp_path):
        output_file = tmp_path / "out" / "openapi.yaml"
        runner = CliRunner()
        result = runner.invoke(main, [
            "convert", str(FIXTURES / "captured.yaml"),
            "-o", str(output_file),
            "--title", "Inventory",
        ])

        assert result.exit_code == 0, result.output
        doc = yaml.safe_load(output_file.read_text(encoding="utf-8"))
        assert doc["info"]["title"] == "Inventory"
        assert "(yaml)" in result.output

    def test_forced_output_format(self, tmp_path):
        output_file = tmp_path / "openapi.txt"
        runner = CliRunner()
        result = runner.invoke(main, [
            "convert", str(FIXTURES / "captured.yaml"),
            "-o", str(output_file),
            "--output-format", "yaml",
        ])

        assert result.exit_code == 0, result.output
        assert yaml.safe_load(output_file.read_text(encoding="utf-8"))["openapi"] == "3.0.3"

    def test_server_label_options(self, tmp_path):
        output_file = tmp_path / "openapi.json"
        runner = CliRunner()
        result = runner.invoke(main, [
            "convert", str(FIXTURES / "captured.yaml"),
            "-o", str(output_file),
            "--server-label", "Requests: ",
            "--server-separator", " | ",
        ])

        assert result.exit_code == 0, result.output
        doc = json.loads(output_file.read_text(encoding="utf-8"))
        assert doc["servers"][0]["description"] == "Requests: List items | Create item | Get item."

    def test_reports_skipped_requests(self, tmp_path):
        capture = tmp_path / "capture.yaml"
        capture.write_text(
            "requests:\n"
            "  - name: Broken\n"
            "    method: GET\n"
            "    url: /no/host\n"
            "  - name: Ping\n"
            "    method: GET\n"
            "    url: http://api.test/ping\n",
            encoding="utf-8",
        )
        runner = CliRunner()
        result = runner.invoke(main, ["convert", str(capture), "-o", str(tmp_path / "o.json")])

        assert result.exit_code == 0, result.output
        assert "Skipped 'Broken'" in result.output
        assert "Wrote 1 paths" in result.output

    @patch("openapi_export.cli.parse_native")
    def test_capture_error_exits_nonzero(self, mock_parse, tmp_path):
        capture = tmp_path / "capture.yaml"
        capture.write_text("requests: []", encoding="utf-8")
        mock_parse.side_effect = CaptureFormatError(capture, "boom")

        runner = CliRunner()
        result = runner.invoke(main, ["convert", str(capture), "-o", str(tmp_path / "o.json")])

        assert result.exit_code == 1
        assert "boom" in result.output
        assert not (tmp_path / "o.json").exists()
