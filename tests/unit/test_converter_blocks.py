"""Unit tests for block-level conversion: paragraphs, headings, quotes, code and lists."""

import pytest
from bs4 import BeautifulSoup

from htmlremark import Remark
from htmlremark.converter import DocumentConverter
from htmlremark.options import IgnoredHtmlElement, RemarkOptions


def convert(html, **kwargs):
    return Remark(RemarkOptions(**kwargs)).convert(html)


@pytest.mark.unit
class TestParagraphs:
    def test_paragraphs_are_separated(self):
        assert convert("<p>one</p><p>two</p>") == "one\n\ntwo"

    def test_empty_paragraph_is_dropped(self):
        assert convert("<p>one</p><p> </p><p>two</p>") == "one\n\ntwo"

    def test_source_whitespace_collapses(self):
        assert convert("<p>\n  Hello\n  world\n</p>") == "Hello world"

    def test_inline_content_beside_blocks_becomes_own_block(self):
        assert convert("<div><p>foo</p> <em>bar</em> <p>baz</p></div>") == "foo\n\n*bar*\n\nbaz"

    def test_text_before_block(self):
        assert convert("<div>Hello <b>world</b><p>next</p></div>") == "Hello **world**\n\nnext"

    def test_trailing_text_after_block(self):
        assert convert("<p>a</p>tail ") == "a\n\ntail"

    def test_line_break(self):
        assert convert("<p>a<br>b</p>") == "a  \nb"

    def test_hardwrap_line_break(self):
        assert convert("<p>a<br>b</p>", hardwraps=True) == "a\nb"

    def test_unknown_tags_are_transparent(self):
        assert convert("<p><custom>x</custom> y</p>") == "x y"

    def test_comments_are_skipped(self):
        assert convert("<p>a<!-- note -->b</p>") == "ab"

    def test_comments_skipped_without_clean_pass(self):
        soup = BeautifulSoup("<p>a<!-- note -->b</p>", "html.parser")
        assert DocumentConverter().convert(soup) == "ab"

    def test_leading_list_marker_is_escaped(self):
        assert convert("<p>- not a list</p>") == r"\- not a list"

    def test_entities(self):
        assert convert("<p>AT&amp;T &lt;tag&gt;</p>") == "AT&T <tag>"

    def test_literal_entity_text_is_kept(self):
        assert convert("<p>&amp;lt;</p>") == r"\&lt;"


@pytest.mark.unit
class TestHeadings:
    def test_hash_headings(self):
        assert convert("<h1>One</h1><h3>Three</h3>") == "# One\n\n### Three"

    def test_setext_headings(self):
        html = "<h1>Title</h1><h2>Sub</h2><h3>Deep</h3>"
        assert convert(html, hash_headings=False) == "Title\n=====\n\nSub\n---\n\n### Deep"

    def test_header_ids(self):
        assert convert('<h2 id="intro">Intro</h2>', header_ids=True) == "## Intro {#intro}"

    def test_header_ids_disabled(self):
        assert convert('<h2 id="intro">Intro</h2>') == "## Intro"

    def test_heading_does_not_escape_leading_dash(self):
        assert convert("<h2>- dash</h2>") == "## - dash"

    def test_empty_heading_is_dropped(self):
        assert convert("<h1></h1><p>x</p>") == "x"


@pytest.mark.unit
class TestBlockQuotesAndRules:
    def test_blockquote(self):
        assert convert("<blockquote><p>a</p><p>b</p></blockquote>") == "> a\n>\n> b"

    def test_nested_blockquote(self):
        assert convert("<blockquote><blockquote><p>x</p></blockquote></blockquote>") == "> > x"

    def test_horizontal_rule(self):
        assert convert("<p>a</p><hr><p>b</p>") == "a\n\n* * *\n\nb"


@pytest.mark.unit
class TestCodeBlocks:
    def test_indented_code(self):
        html = "<pre><code>x = 1\n\nif y:\n    z</code></pre>"
        assert convert(html) == "    x = 1\n\n    if y:\n        z"

    def test_code_is_not_escaped(self):
        assert convert("<pre>a &lt; b &amp;&amp; c*d</pre>") == "    a < b && c*d"

    def test_backtick_fence_with_language(self):
        html = '<pre><code class="language-python">print(1)</code></pre>'
        assert convert(html, fenced_code_blocks="backtick") == "```python\nprint(1)\n```"

    def test_data_lang(self):
        html = '<pre data-lang="ruby">puts 1</pre>'
        assert convert(html, fenced_code_blocks="tilde") == "~~~ruby\nputs 1\n~~~"

    def test_fence_longer_than_content_run(self):
        html = "<pre>~~~~\nx</pre>"
        assert convert(html, fenced_code_blocks="tilde") == "~~~~~\n~~~~\nx\n~~~~~"

    def test_minimum_fence_width(self):
        html = "<pre>x</pre>"
        assert convert(html, fenced_code_blocks="backtick", fenced_code_blocks_width=5) == "`````\nx\n`````"

    def test_empty_pre_is_dropped(self):
        assert convert("<pre>\n\n</pre><p>x</p>") == "x"

    def test_inline_code(self):
        assert convert("<p>Use <code>a_b &lt; c</code> now</p>") == "Use `a_b < c` now"


@pytest.mark.unit
class TestLists:
    def test_unordered(self):
        assert convert("<ul><li>One</li><li>Two</li></ul>") == "*   One\n*   Two"

    def test_ordered_with_start(self):
        assert convert('<ol start="3"><li>a</li><li>b</li></ol>') == "3.  a\n4.  b"

    def test_invalid_start_falls_back_to_one(self):
        assert convert('<ol start="x"><li>a</li></ol>') == "1.  a"

    def test_loose_list(self):
        assert convert("<ul><li><p>a</p></li><li><p>b</p></li></ul>") == "*   a\n\n*   b"

    def test_continuation_lines_are_indented(self):
        assert convert("<ul><li><p>a</p><p>b</p></li></ul>") == "*   a\n\n    b"

    def test_nested_list(self):
        html = "<ul><li>A<ul><li>B</li></ul></li><li>C</li></ul>"
        assert convert(html) == "*   A\n    *   B\n*   C"

    def test_list_after_paragraph(self):
        assert convert("<p>Intro</p><ul><li>x</li></ul>") == "Intro\n\n*   x"


@pytest.mark.unit
class TestDefinitionLists:
    html = "<dl><dt>Term</dt><dd>Def</dd><dt>T2</dt><dd>D2</dd></dl>"

    def test_enabled(self):
        assert convert(self.html, definition_lists=True) == "Term\n:   Def\n\nT2\n:   D2"

    def test_several_terms_share_definitions(self):
        html = "<dl><dt>A</dt><dt>B</dt><dd>Both</dd></dl>"
        assert convert(html, definition_lists=True) == "A\nB\n:   Both"

    def test_empty_definitions_are_skipped(self):
        html = "<dl><dt>A</dt><dd></dd><dd>Def</dd></dl>"
        assert convert(html, definition_lists=True) == "A\n:   Def"

    def test_term_without_definitions_is_dropped(self):
        html = "<p>x</p><dl><dt>A</dt><dd> </dd><dt>B</dt><dd>Def</dd></dl>"
        assert convert(html, definition_lists=True) == "x\n\nB\n:   Def"

    def test_disabled_keeps_text_as_paragraphs(self):
        assert convert("<dl><dt>Term</dt><dd>Def</dd></dl>") == "Term\n\nDef"


@pytest.mark.unit
class TestIgnoredHtmlElements:
    def test_passthrough_keeps_configured_attributes(self):
        options = {"ignored_html_elements": (IgnoredHtmlElement.create("span", "class"),)}
        html = '<p><span class="x" id="y">t</span></p>'
        assert convert(html, **options) == '<span class="x">t</span>'

    def test_void_element(self):
        options = {"ignored_html_elements": (IgnoredHtmlElement.create("br"),)}
        assert convert("<p>a<br>b</p>", **options) == "a<br>b"


@pytest.mark.unit
class TestSanitizing:
    def test_script_and_style_are_dropped(self):
        assert convert("<p>Hi</p><script>alert(1)</script><style>p {}</style>") == "Hi"

    def test_script_ignored_without_clean_pass(self):
        assert convert("<p>Hi</p><script>alert(1)</script>", strip_dangerous_elements=False) == "Hi"

    def test_javascript_link_keeps_text_only(self):
        assert convert('<p><a href="javascript:alert(1)">click</a></p>') == "click"
