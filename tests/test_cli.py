"""
Tests for the odtquill command-line interface.
"""

import json
import zipfile

import pytest
from lxml import etree

from odtquill.cli import create_parser, main
from odtquill.utils.xml_utils import NAMESPACES
from odtquill.version import __version__

HELLO_DOCUMENT = {
    "content": {
        "name": "office:document-content",
        "children": [{
            "name": "office:body",
            "children": [{
                "name": "office:text",
                "children": [{
                    "name": "text:p",
                    "children": [{"nodeType": "TEXT", "textContent": "Hello"}],
                }],
            }],
        }],
    },
}


@pytest.fixture
def html_file(temp_dir):
    path = temp_dir / "document.html"
    path.write_text(
        "<h1>Report</h1><p>Body <b>text</b></p><table><tr><td>a</td><td>b</td></tr></table>",
        encoding="utf-8",
    )
    return path


class TestParser:
    """Test cases for argument parsing."""

    def test_export_arguments(self):
        args = create_parser().parse_args([
            "--log-level", "DEBUG", "export", "in.html", "-o", "out.odt",
            "--geometry", "g.json", "--content-width-px", "800", "--title", "T",
        ])
        assert args.command == "export"
        assert args.log_level == "DEBUG"
        assert args.content_width_px == 800.0
        assert args.geometry == "g.json"

    def test_invalid_log_level(self):
        with pytest.raises(SystemExit):
            create_parser().parse_args(["--log-level", "LOUD", "version"])


class TestCommands:
    """Test cases for CLI commands."""

    def test_version(self, capsys):
        assert main(["version"]) == 0
        assert f"odtquill v{__version__}" in capsys.readouterr().out

    def test_no_command_prints_help(self, capsys):
        assert main([]) == 0
        assert "usage" in capsys.readouterr().out.lower()

    def test_import(self, temp_dir):
        source = temp_dir / "document.json"
        source.write_text(json.dumps(HELLO_DOCUMENT), encoding="utf-8")
        output = temp_dir / "out.html"
        assert main(["--no-rich", "import", str(source), "-o", str(output)]) == 0
        assert output.read_text(encoding="utf-8") == "<p>Hello</p>"

    def test_import_default_output(self, temp_dir):
        source = temp_dir / "document.json"
        source.write_text(json.dumps(HELLO_DOCUMENT), encoding="utf-8")
        assert main(["import", str(source)]) == 0
        assert (temp_dir / "document.html").exists()

    def test_import_invalid_json(self, temp_dir):
        source = temp_dir / "broken.json"
        source.write_text("{not json", encoding="utf-8")
        assert main(["import", str(source)]) == 1

    def test_import_requires_object(self, temp_dir):
        source = temp_dir / "list.json"
        source.write_text("[]", encoding="utf-8")
        assert main(["import", str(source)]) == 1

    def test_missing_input(self, temp_dir):
        assert main(["export", str(temp_dir / "missing.html")]) == 1

    def test_export(self, html_file, temp_dir):
        output = temp_dir / "out.odt"
        assert main([
            "--no-rich", "export", str(html_file), "-o", str(output),
            "--title", "Quarterly", "--creator", "Lee",
        ]) == 0
        with zipfile.ZipFile(output) as archive:
            assert archive.namelist()[0] == "mimetype"
            meta = etree.fromstring(archive.read("meta.xml"))
            content = archive.read("content.xml")
        assert meta.findtext("office:meta/dc:title", namespaces=NAMESPACES) == "Quarterly"
        assert meta.findtext("office:meta/dc:creator", namespaces=NAMESPACES) == "Lee"
        assert b"Report" in content
        assert b"table:table" in content

    def test_export_with_geometry(self, html_file, temp_dir):
        geometry = temp_dir / "geometry.json"
        geometry.write_text(json.dumps([{"width": 400, "rows": [[{"width": 100}, {"width": 300}]]}]), encoding="utf-8")
        output = temp_dir / "out.json"
        assert main([
            "model", str(html_file), "-o", str(output),
            "--geometry", str(geometry), "--content-width-px", "800",
        ]) == 0
        model = json.loads(output.read_text(encoding="utf-8"))
        table = [block for block in model["body"] if block["type"] == "table"][0]["value"]
        assert table["widthCm"] == "8.5000cm"
        assert table["columnWidths"] == ["2.1250cm", "6.3750cm"]

    def test_export_with_bad_geometry(self, html_file, temp_dir):
        geometry = temp_dir / "geometry.json"
        geometry.write_text("{}", encoding="utf-8")
        assert main(["export", str(html_file), "--geometry", str(geometry)]) == 1

    def test_model(self, html_file, temp_dir):
        assert main(["model", str(html_file)]) == 0
        model = json.loads((temp_dir / "document.json").read_text(encoding="utf-8"))
        assert [block["type"] for block in model["body"]] == ["paragraph", "paragraph", "table"]
        assert model["body"][0]["value"]["spans"] == [{"text": "Report", "bold": True, "fontSize": "24pt"}]

    def test_markdown(self, temp_dir):
        source = temp_dir / "notes.md"
        source.write_text("# Notes\n\nSome *text*", encoding="utf-8")
        output = temp_dir / "notes.html"
        assert main(["markdown", str(source), "-o", str(output)]) == 0
        assert "<h1>Notes</h1>" in output.read_text(encoding="utf-8")
