"""Tests for the output formatter."""

import io
import json

from rich.console import Console

from pytheme.output import OutputFormatter


def _formatter(**kwargs):
    out, err = io.StringIO(), io.StringIO()
    formatter = OutputFormatter(
        console=Console(file=out, width=200),
        err_console=Console(file=err, width=200),
        **kwargs,
    )
    return formatter, out, err


class TestOutputFormatter:
    def test_info_and_summary(self):
        formatter, out, _ = _formatter()
        formatter.info("Uploading [assets]")
        formatter.print_summary(
            "Upload Complete", [("Successfully uploaded", "2 files")]
        )

        text = out.getvalue()
        assert "Uploading [assets]" in text
        assert "Upload Complete" in text
        assert "Successfully uploaded: 2 files" in text

    def test_quiet_suppresses_info_but_not_errors(self):
        formatter, out, err = _formatter(quiet=True)
        formatter.info("hidden")
        formatter.warning("hidden too")
        formatter.error("shown [red]")

        assert out.getvalue() == ""
        assert "Error: shown [red]" in err.getvalue()

    def test_json_output(self):
        formatter, out, _ = _formatter(json_output=True)
        formatter.info("not json")
        formatter.output_json({"success": 1})

        assert json.loads(out.getvalue()) == {"success": 1}

    def test_format_size(self):
        assert OutputFormatter.format_size(2048) == "2.0 KB"
