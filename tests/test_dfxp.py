"""Tests for DFXP reading and writing."""

import pytest
from pathlib import Path

from captionconv.errors import EmptyDocument, MalformedTimestamp, StructuralError
from captionconv.export import DFXPWriter, export_dfxp, export_srt
from captionconv.models import Caption, CaptionSet, LineBreakNode, Region, Style, StyleNode, TextNode
from captionconv.parsing import DFXPReader

FIXTURES = Path(__file__).parent / "fixtures"

SAMPLE_DFXP_SYNTAX_ERROR = """
  <?xml version="1.0" encoding="UTF-8"?>
  <tt xml:lang="en" xmlns="http://www.w3.org/ns/ttml">
  <body>
    <div>
      <p begin="0:00:02.07" end="0:00:05.07">>>THE GENERAL ASSEMBLY'S 2014</p>
      <p begin="0:00:05.07" end="0:00:06.21">SESSION GOT OFF TO A LATE START,</p>
    </div>
   </body>
  </tt>
"""

SAMPLE_DFXP_EMPTY = """
  <?xml version="1.0" encoding="utf-8"?>
  <tt xml:lang="en" xmlns="http://www.w3.org/ns/ttml"
      xmlns:tts="http://www.w3.org/ns/ttml#styling">
   <head>
    <styling>
     <style xml:id="p" tts:color="#ffeedd" tts:fontfamily="Arial"
          tts:fontsize="10pt" tts:textAlign="center"/>
    </styling>
    <layout>
    </layout>
   </head>
   <body>
    <div xml:lang="en-US">
    </div>
   </body>
  </tt>
"""

SAMPLE_DFXP_UNKNOWN_ELEMENT = """<?xml version="1.0" encoding="utf-8"?>
<tt xmlns="http://www.w3.org/ns/ttml">
  <body>
    <div xml:lang="de">
      <p begin="00:00:01.000" end="00:00:02.000">Hallo<metadata><note>ignore me</note></metadata></p>
      <p begin="00:00:02.000" dur="1.5s">Welt</p>
    </div>
  </body>
</tt>
"""


@pytest.fixture
def sample_dfxp():
    return (FIXTURES / "sample.dfxp").read_text(encoding="utf-8")


class TestDFXPReader:
    """Tests for DFXP parsing."""

    def test_detect(self, sample_dfxp):
        assert DFXPReader().detect(sample_dfxp)
        assert not DFXPReader().detect("WEBVTT\n\n00:01.000 --> 00:02.000\nHi\n")

    def test_caption_length(self, sample_dfxp):
        caption_set = DFXPReader().read(sample_dfxp)
        assert caption_set.get_languages() == ["en-US"]
        assert len(caption_set.get_captions("en-US")) == 7

    def test_proper_timestamps(self, sample_dfxp):
        caption = DFXPReader().read(sample_dfxp).get_captions("en-US")[2]
        assert caption.start == 18752000
        assert caption.end == 20887000

    def test_styles_and_regions(self, sample_dfxp):
        caption_set = DFXPReader().read(sample_dfxp)

        styles = caption_set.get_styles()
        assert len(styles) == 1
        assert styles[0].id == "p"
        assert styles[0].font_family == "Arial"
        assert styles[0].font_size == "10pt"
        assert styles[0].text_align == "center"
        assert styles[0].color == "#ffeedd"
        assert not styles[0].italics

        regions = caption_set.get_regions()
        assert regions == [Region(id="bottom", display_align="after", text_align="center")]

    def test_caption_references(self, sample_dfxp):
        caption_set = DFXPReader().read(sample_dfxp)
        captions = caption_set.get_captions("en-US")

        assert all(caption.style_id == "p" for caption in captions)
        assert captions[6].region_id == "bottom"
        assert captions[0].region_id is None
        assert caption_set.get_region(captions[6].region_id).display_align == "after"

    def test_caption_text(self, sample_dfxp):
        captions = DFXPReader().read(sample_dfxp).get_captions("en-US")
        expected = [
            ("00:00:14.848", "00:00:17.000", "MAN:\nWhen we think\n♪ ...say bow, wow, ♪"),
            ("00:00:17.000", "00:00:18.752", "we have this vision of Einstein"),
            ("00:00:18.752", "00:00:20.887", "\nas an old, wrinkly man\nwith white hair."),
            ("00:00:20.887", "00:00:26.760", "MAN 2:\nE equals m c-squared is\nnot about an old Einstein."),
            ("00:00:26.760", "00:00:32.200", "MAN 2:\nIt's all about an eternal Einstein.  pois é"),
            ("00:00:32.200", "00:00:36.200", "<LAUGHING & WHOOPS!>"),
            ("00:00:34.400", "00:00:38.400", "some more text"),
        ]
        for caption, (start, end, text) in zip(captions, expected):
            assert caption.format_start() == start
            assert caption.format_end() == end
            assert caption.get_text() == text

    def test_caption_nodes(self, sample_dfxp):
        captions = DFXPReader().read(sample_dfxp).get_captions("en-US")

        assert [type(node) for node in captions[0].nodes] == [
            TextNode, LineBreakNode, TextNode, LineBreakNode, TextNode,
        ]
        assert [type(node) for node in captions[2].nodes] == [
            LineBreakNode, TextNode, LineBreakNode, TextNode,
        ]

        style_node, text_node = captions[1].nodes
        assert isinstance(style_node, StyleNode)
        assert style_node.style.text_align == "right"
        assert "text-align: right" in style_node.get_content()
        assert text_node.get_content() == "we have this vision of Einstein"

    def test_invalid_markup_is_properly_handled(self):
        captions = DFXPReader().read(SAMPLE_DFXP_SYNTAX_ERROR).get_captions("en-US")

        assert len(captions) == 2
        assert captions[0].get_text() == ">>THE GENERAL ASSEMBLY'S 2014"
        assert captions[0].start == 2_070_000
        assert captions[1].end == 6_210_000

    def test_unclosed_inline_tag_keeps_following_paragraph(self):
        content = """<tt xmlns="http://www.w3.org/ns/ttml"><body><div xml:lang="en">
        <p begin="00:00:01.000" end="00:00:02.000">one <b>bold</p><p begin="00:00:03.000" end="00:00:04.000">two</p>
        </div></body></tt>"""
        captions = DFXPReader().read(content).get_captions("en")

        assert len(captions) == 2
        assert captions[0].get_text().startswith("one")
        assert "two" not in captions[0].get_text()
        assert captions[1].get_text() == "two"
        assert captions[1].start == 3_000_000

    def test_unclosed_element_between_paragraphs(self):
        content = """<tt xmlns="http://www.w3.org/ns/ttml"><body><div xml:lang="en">
        <p begin="00:00:01.000" end="00:00:02.000">first</p>
        <font color="red">
        <p begin="00:00:03.000" end="00:00:04.000">second</p>
        </div></body></tt>"""
        captions = DFXPReader().read(content).get_captions("en")

        assert [caption.get_text() for caption in captions] == ["first", "second"]
        assert captions[1].end == 4_000_000

    def test_nested_divs_do_not_duplicate_captions(self):
        content = """<tt xmlns="http://www.w3.org/ns/ttml"><body>
        <div xml:lang="en">
          <p begin="00:00:01.000" end="00:00:02.000">outer</p>
          <div xml:lang="fr"><p begin="00:00:01.000" end="00:00:02.000">inner</p></div>
        </div>
        </body></tt>"""
        caption_set = DFXPReader().read(content)

        assert [c.get_text() for c in caption_set.get_captions("en")] == ["outer"]
        assert [c.get_text() for c in caption_set.get_captions("fr")] == ["inner"]

    def test_spaces_around_spans_are_kept(self):
        content = """<tt xmlns="http://www.w3.org/ns/ttml" xmlns:tts="http://www.w3.org/ns/ttml#styling">
        <body><div xml:lang="en">
        <p begin="00:00:01.000" end="00:00:02.000">Hello <span tts:color="red">big</span> world</p>
        <p begin="00:00:02.000" end="00:00:03.000">
          <span tts:fontStyle="italic">Two</span> <span tts:fontWeight="bold">words</span>
          <br/>
          next line
        </p>
        </div></body></tt>"""
        captions = DFXPReader().read(content).get_captions("en")

        assert captions[0].get_text() == "Hello big world"
        assert [type(node) for node in captions[0].nodes] == [TextNode, StyleNode, TextNode]
        assert captions[1].get_text() == "Two words\nnext line"

    def test_spans_survive_srt_conversion(self):
        content = """<tt xmlns="http://www.w3.org/ns/ttml" xmlns:tts="http://www.w3.org/ns/ttml#styling">
        <body><div xml:lang="en">
        <p begin="00:00:01.000" end="00:00:02.000">Hello <span tts:color="red">big</span> world</p>
        </div></body></tt>"""
        output = export_srt(DFXPReader().read(content)).splitlines()

        assert output[2] == "Hello big world"

    def test_unknown_elements_are_skipped(self):
        captions = DFXPReader().read(SAMPLE_DFXP_UNKNOWN_ELEMENT).get_captions("de")

        assert len(captions) == 2
        assert captions[0].get_text() == "Hallo"
        assert captions[1].end == 3_500_000

    def test_empty_file(self):
        with pytest.raises(EmptyDocument) as exc_info:
            DFXPReader().read(SAMPLE_DFXP_EMPTY)

        caption_set = exc_info.value.caption_set
        assert caption_set is not None
        assert caption_set.is_empty()
        assert caption_set.get_captions("en-US") == []
        assert caption_set.get_styles()[0].id == "p"

    def test_missing_structure(self):
        with pytest.raises(StructuralError):
            DFXPReader().read("<html><body><p>not captions</p></body></html>")
        with pytest.raises(StructuralError):
            DFXPReader().read('<tt xmlns="http://www.w3.org/ns/ttml"><head/></tt>')

    def test_missing_timing_fails(self):
        content = """<tt xmlns="http://www.w3.org/ns/ttml"><body><div>
        <p begin="00:00:01.000">no end</p>
        </div></body></tt>"""
        with pytest.raises(MalformedTimestamp):
            DFXPReader().read(content)

    def test_unparsable_timing_fails(self):
        content = """<tt xmlns="http://www.w3.org/ns/ttml"><body><div>
        <p begin="yesterday" end="00:00:02.000">bad begin</p>
        </div></body></tt>"""
        with pytest.raises(MalformedTimestamp):
            DFXPReader().read(content)

    def test_multiple_languages(self):
        content = """<tt xmlns="http://www.w3.org/ns/ttml"><body>
        <div xml:lang="en"><p begin="00:00:01.000" end="00:00:02.000">Hello</p></div>
        <div xml:lang="fr"><p begin="00:00:01.000" end="00:00:02.000">Bonjour</p></div>
        <div xml:lang="en"><p begin="00:00:03.000" end="00:00:04.000">Again</p></div>
        </body></tt>"""
        caption_set = DFXPReader().read(content)

        assert caption_set.get_languages() == ["en", "fr"]
        assert [c.get_text() for c in caption_set.get_captions("en")] == ["Hello", "Again"]
        assert caption_set.get_captions("fr")[0].get_text() == "Bonjour"


class TestDFXPWriter:
    """Tests for DFXP export."""

    def test_round_trip(self, sample_dfxp):
        original = DFXPReader().read(sample_dfxp)
        written = DFXPWriter().write(original)
        assert isinstance(written, bytes)

        re_read = DFXPReader().read(written)

        assert re_read.get_styles() == original.get_styles()
        assert re_read.get_regions() == original.get_regions()
        originals = original.get_captions("en-US")
        re_parsed = re_read.get_captions("en-US")
        assert len(re_parsed) == len(originals)
        for orig, reparsed in zip(originals, re_parsed):
            assert orig.start == reparsed.start
            assert orig.end == reparsed.end
            assert orig.get_text() == reparsed.get_text()
            assert orig.style_id == reparsed.style_id
            assert orig.region_id == reparsed.region_id
            assert [type(n) for n in orig.nodes] == [type(n) for n in reparsed.nodes]

    def test_text_is_escaped(self):
        caption_set = CaptionSet()
        caption_set.set_captions("en", [
            Caption(start=0, end=1_000_000, nodes=[TextNode(content="<LAUGHING & WHOOPS!>")]),
        ])
        output = export_dfxp(caption_set)

        assert "&lt;LAUGHING &amp; WHOOPS!&gt;" in output
        assert "<LAUGHING" not in output

    def test_document_skeleton(self):
        caption_set = CaptionSet()
        caption_set.add_style(Style(id="s1", color="white", italics=True))
        caption_set.add_region(Region(id="bottom", display_align="after"))
        caption_set.set_captions("en-GB", [
            Caption(
                start=1_500_000,
                end=3_000_000,
                nodes=[TextNode(content="one"), LineBreakNode(), TextNode(content="two")],
                style_id="s1",
                region_id="bottom",
            ),
        ])
        output = export_dfxp(caption_set)

        assert output.startswith('<?xml version="1.0" encoding="utf-8"?>')
        assert 'xmlns="http://www.w3.org/ns/ttml"' in output
        assert '<style xml:id="s1" tts:color="white" tts:fontStyle="italic" />' in output
        assert '<region xml:id="bottom" tts:displayAlign="after" />' in output
        assert '<div xml:lang="en-GB">' in output
        assert '<p begin="00:00:01.500" end="00:00:03.000" style="s1" region="bottom">one<br />two</p>' in output

    def test_span_wraps_following_text(self):
        caption_set = CaptionSet()
        caption_set.set_captions("en", [
            Caption(start=0, end=1_000_000, nodes=[
                StyleNode(style=Style(text_align="right", bold=True)),
                TextNode(content="styled"),
                LineBreakNode(),
                TextNode(content="after"),
            ]),
        ])
        output = export_dfxp(caption_set)

        assert '"><span tts:textAlign="right" tts:fontWeight="bold">styled</span><br />after</p>' in output

        caption = DFXPReader().read(output).get_captions("en")[0]
        assert caption.get_text() == "styled\nafter"
        assert caption.nodes[0].style.bold
