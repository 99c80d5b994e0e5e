"""
Tests for OdtXmlRenderer.
"""

import pytest
from lxml import etree

from odtquill.exceptions import RenderingError
from odtquill.export.odt_xml_renderer import OdtXmlRenderer, append_span_text, build_content_xml
from odtquill.models import OdtBlock, OdtDoc, Paragraph, Table, TableCell, TableRow, TextSpan
from odtquill.utils.xml_utils import NAMESPACES, qn


def _render(*blocks, body_font=None):
    doc = OdtDoc(body=list(blocks))
    doc.styles.body_font = body_font
    return etree.fromstring(OdtXmlRenderer(doc).render())


def _text_body(root):
    return root.find("office:body/office:text", NAMESPACES)


def _paragraph(*spans, **kwargs):
    return OdtBlock.paragraph(Paragraph(spans=list(spans), **kwargs))


class TestDocumentStructure:
    """Test cases for the content.xml skeleton."""

    def test_root_and_sections(self, sample_doc):
        root = etree.fromstring(OdtXmlRenderer(sample_doc).render())
        assert root.tag == qn("office:document-content")
        assert root.get(qn("office:version")) == "1.3"
        assert [etree.QName(child).localname for child in root] == [
            "font-face-decls", "automatic-styles", "body",
        ]
        automatic = root.find("office:automatic-styles", NAMESPACES)
        assert automatic[0].tag == qn("style:page-layout")

    def test_output_is_deterministic(self, sample_doc):
        renderer = OdtXmlRenderer(sample_doc)
        first = renderer.render()
        assert renderer.render() == first
        assert OdtXmlRenderer(sample_doc).render() == first
        assert build_content_xml(sample_doc) == first

    def test_font_face_decls(self):
        root = _render(body_font="Noto Sans")
        faces = root.findall("office:font-face-decls/style:font-face", NAMESPACES)
        assert [face.get(qn("style:name")) for face in faces] == ["BodyFont", "EmojiFont", "GungsuhFont"]
        assert faces[0].get(qn("svg:font-family")).startswith("'Noto Sans','Malgun Gothic'")

    def test_default_body_font_is_not_repeated(self):
        root = _render(body_font="Malgun Gothic")
        body_font = root.find("office:font-face-decls/style:font-face", NAMESPACES)
        assert body_font.get(qn("svg:font-family")).count("Malgun Gothic") == 1


class TestParagraphs:
    """Test cases for paragraph and span rendering."""

    def test_empty_paragraph_is_self_closing(self):
        doc = OdtDoc(body=[OdtBlock.paragraph(Paragraph())])
        assert b"<text:p/>" in OdtXmlRenderer(doc).render()

    def test_spans_and_styles(self):
        root = _render(_paragraph(TextSpan("Hello "), TextSpan("world", bold=True), align="center"))
        paragraph = _text_body(root)[0]
        assert paragraph.get(qn("text:style-name")) == "PStyle1"
        spans = paragraph.findall("text:span", NAMESPACES)
        assert [span.text for span in spans] == ["Hello ", "world"]
        assert spans[0].get(qn("text:style-name")) is None
        assert spans[1].get(qn("text:style-name")) == "T1"

    def test_line_breaks(self):
        root = _render(_paragraph(TextSpan("a\nb")))
        children = list(_text_body(root)[0])
        assert [etree.QName(child).localname for child in children] == ["span", "line-break", "span"]
        assert children[0].text == "a"
        assert children[2].text == "b"

    def test_space_runs_and_tabs(self):
        root = _render(_paragraph(TextSpan("a   b\tc  d")))
        span = _text_body(root)[0][0]
        assert span.text == "a "
        spaces = span.findall("text:s", NAMESPACES)
        assert spaces[0].get(qn("text:c")) == "2"
        assert spaces[0].tail == "b"
        assert span.find("text:tab", NAMESPACES).tail == "c "
        assert spaces[1].get(qn("text:c")) is None
        assert spaces[1].tail == "d"

    def test_append_span_text_single_spaces_stay_literal(self):
        parent = etree.Element(qn("text:span"), nsmap=NAMESPACES)
        append_span_text(parent, "one two")
        assert parent.text == "one two"
        assert len(parent) == 0

    def test_page_break(self):
        root = _render(_paragraph(TextSpan("a")), OdtBlock.page_break(), _paragraph(TextSpan("b")))
        page_break = _text_body(root)[1]
        assert page_break.get(qn("text:style-name")) == "PageBreak"
        assert len(page_break) == 0

    def test_wrong_block_value(self):
        doc = OdtDoc(body=[OdtBlock("paragraph", Table())])
        with pytest.raises(RenderingError):
            OdtXmlRenderer(doc).render()


class TestTables:
    """Test cases for table rendering."""

    def _table(self):
        return Table(
            rows=[
                TableRow(cells=[
                    TableCell(paragraphs=[Paragraph(spans=[TextSpan("wide")])], col_span=2),
                    TableCell(background_color="#ff0000"),
                ]),
                TableRow(cells=[
                    TableCell(paragraphs=[Paragraph(spans=[TextSpan("a")])]),
                    TableCell(paragraphs=[Paragraph(spans=[TextSpan("b")])]),
                    TableCell(paragraphs=[Paragraph(spans=[TextSpan("c")])]),
                ]),
            ],
            column_widths=["2.0000cm"],
        )

    def test_column_count_matches_span_sum(self):
        root = _render(OdtBlock.table(self._table()))
        table = _text_body(root).find("table:table", NAMESPACES)
        columns = table.findall("table:table-column", NAMESPACES)
        assert len(columns) == 3
        assert [column.get(qn("table:style-name")) for column in columns] == [
            "TableColumnCustom1", "TableColumn", "TableColumn",
        ]

    def test_cells(self):
        root = _render(OdtBlock.table(self._table()))
        rows = _text_body(root).findall("table:table/table:table-row", NAMESPACES)
        assert rows[0].get(qn("table:style-name")) == "TableRow"

        first, second = rows[0].findall("table:table-cell", NAMESPACES)
        assert first.get(qn("table:number-columns-spanned")) == "2"
        assert first.get(qn("table:number-rows-spanned")) is None
        assert first.get(qn("table:style-name")) == "TableCell"
        assert second.get(qn("table:style-name")) == "TableCellCustom1"
        # Cells without paragraphs still hold one empty paragraph
        assert [etree.QName(child).localname for child in second] == ["p"]
        assert len(second[0]) == 0

    def test_table_names_and_styles(self):
        root = _render(
            OdtBlock.table(Table(rows=[TableRow(cells=[TableCell()])])),
            OdtBlock.table(Table(rows=[TableRow(cells=[TableCell()])], width_pct=50)),
        )
        tables = _text_body(root).findall("table:table", NAMESPACES)
        assert [table.get(qn("table:name")) for table in tables] == ["Table1", "Table2"]
        assert [table.get(qn("table:style-name")) for table in tables] == ["TableCustom1", "TableCustom2"]

    def test_mismatched_spans_are_rendered(self):
        table = Table(rows=[
            TableRow(cells=[TableCell(), TableCell()]),
            TableRow(cells=[TableCell()]),
        ])
        root = _render(OdtBlock.table(table))
        rows = _text_body(root).findall("table:table/table:table-row", NAMESPACES)
        assert [len(row) for row in rows] == [2, 1]
