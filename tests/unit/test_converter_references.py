"""Unit tests for links, images, abbreviations and footnotes."""

import pytest

from htmlremark import Remark
from htmlremark.handlers.links import LinkRegistry, footnote_id
from htmlremark.options import RemarkOptions, markdown_extra


def convert(html, base_uri=None, **kwargs):
    return Remark(RemarkOptions(**kwargs)).convert(html, base_uri=base_uri)


@pytest.mark.unit
class TestLinkRegistry:
    def test_same_target_reuses_id(self):
        registry = LinkRegistry()
        assert registry.register("http://a", None, "A") == "a"
        assert registry.register("http://a", None, "other text") == "a"
        assert len(registry) == 1

    def test_duplicate_text_gets_suffix(self):
        registry = LinkRegistry()
        assert registry.register("http://a", None, "Here") == "here"
        assert registry.register("http://b", None, "Here") == "here 2"
        assert registry.register("http://c", None, "Here") == "here 3"

    def test_title_distinguishes_targets(self):
        registry = LinkRegistry()
        assert registry.register("http://a", "T", "x") == "x"
        assert registry.register("http://a", None, "x") == "x 2"

    def test_simple_ids(self):
        registry = LinkRegistry(simple_ids=True)
        assert registry.register("http://a", None, "A") == "1"
        assert registry.register("http://b", None, "B") == "2"

    def test_empty_text_uses_default(self):
        registry = LinkRegistry()
        assert registry.register("x.png", None, "", default="image") == "image"

    def test_definitions(self):
        registry = LinkRegistry()
        registry.register("http://a", 'Say "hi"', "A")
        assert registry.definitions() == ['[a]: http://a "Say &quot;hi&quot;"']


@pytest.mark.unit
class TestLinks:
    def test_reference_links_are_flushed_at_end(self):
        html = (
            '<p><a href="http://a.com">A</a> and <a href="http://b.com">B</a>'
            ' and <a href="http://a.com">again</a></p><p>End</p>'
        )
        assert convert(html) == (
            "[A][a] and [B][b] and [again][a]\n\nEnd\n\n[a]: http://a.com\n[b]: http://b.com"
        )

    def test_simple_link_ids(self):
        assert convert('<p><a href="http://a.com">A</a></p>', simple_link_ids=True) == "[A][1]\n\n[1]: http://a.com"

    def test_inline_link_with_title(self):
        html = '<p><a href="http://a.com" title="T">A</a></p>'
        assert convert(html, inline_links=True) == '[A](http://a.com "T")'

    def test_inline_link_encodes_spaces_and_parens(self):
        html = '<p><a href="http://a.com/x (1).html">A</a></p>'
        assert convert(html, inline_links=True) == "[A](http://a.com/x%20%281%29.html)"

    def test_autolink(self):
        html = '<p><a href="http://a.com">http://a.com</a></p>'
        assert convert(html, autolinks=True) == "<http://a.com>"

    def test_mailto_autolink(self):
        html = '<p><a href="mailto:me@x.org">me@x.org</a></p>'
        assert convert(html, autolinks=True) == "<mailto:me@x.org>"

    def test_autolink_disabled(self):
        html = '<p><a href="http://a.com">http://a.com</a></p>'
        assert convert(html, inline_links=True) == "[http://a.com](http://a.com)"

    def test_anchor_without_href(self):
        assert convert('<p><a name="top">Text</a></p>') == "Text"

    def test_link_without_text_is_dropped(self):
        assert convert('<p>a<a href="http://a.com"></a>b</p>') == "ab"

    def test_relative_links_resolved_against_base(self):
        html = '<p><a href="/x">X</a></p>'
        assert convert(html, base_uri="http://h.com/a/") == "[X][x]\n\n[x]: http://h.com/x"

    def test_relative_links_preserved(self):
        html = '<p><a href="/x">X</a></p>'
        assert convert(html, base_uri="http://h.com/a/", preserve_relative_links=True) == "[X][x]\n\n[x]: /x"

    def test_fragment_links_are_not_resolved(self):
        html = '<p><a href="#sec">S</a></p>'
        assert convert(html, base_uri="http://h.com/", inline_links=True) == "[S](#sec)"


@pytest.mark.unit
class TestImages:
    def test_reference_image(self):
        html = '<p><img src="a.png" alt="Alt" title="T"></p>'
        assert convert(html) == '![Alt][alt]\n\n[alt]: a.png "T"'

    def test_inline_image(self):
        assert convert('<p><img src="a.png" alt="Alt"></p>', inline_links=True) == "![Alt](a.png)"

    def test_image_without_alt_uses_image_id(self):
        assert convert('<p><img src="a.png"></p>') == "![][image]\n\n[image]: a.png"

    def test_image_without_src_is_dropped(self):
        assert convert('<p>x<img alt="a">y</p>') == "xy"

    def test_image_inside_link(self):
        html = '<p><a href="http://a.com"><img src="a.png" alt="Logo"></a></p>'
        assert convert(html, inline_links=True) == "[![Logo](a.png)](http://a.com)"


@pytest.mark.unit
class TestAbbreviations:
    def test_abbreviation_definitions(self):
        html = '<p><abbr title="HyperText Markup Language">HTML</abbr> rocks</p>'
        assert convert(html, abbreviations=True) == "HTML rocks\n\n*[HTML]: HyperText Markup Language"

    def test_abbreviations_disabled(self):
        html = '<p><abbr title="HyperText Markup Language">HTML</abbr> rocks</p>'
        assert convert(html) == "HTML rocks"

    def test_links_before_abbreviations(self):
        html = '<p><a href="http://a.com">A</a> <acronym title="Three Letter">TLA</acronym></p>'
        assert convert(html, abbreviations=True) == "[A][a] TLA\n\n[a]: http://a.com\n\n*[TLA]: Three Letter"


@pytest.mark.unit
class TestFootnotes:
    html = (
        '<p>Text<sup id="fnref:1"><a href="#fn:1" rel="footnote">1</a></sup></p>'
        '<div class="footnotes"><hr><ol>'
        '<li id="fn:1"><p>Note.&#160;<a href="#fnref:1" rev="footnote">&#8617;</a></p></li>'
        "</ol></div>"
    )

    def test_footnote_reference_and_definition(self):
        assert Remark(markdown_extra()).convert(self.html) == "Text[^1]\n\n[^1]: Note."

    def test_multi_paragraph_footnote(self):
        html = (
            '<p>A<a href="#fn1" class="footnote-ref">1</a></p>'
            '<section class="footnotes"><ol><li id="fn1"><p>One.</p><p>Two.'
            '<a href="#fnref1" class="footnote-backref">&#8617;</a></p></li></ol></section>'
        )
        assert Remark(markdown_extra()).convert(html) == "A[^1]\n\n[^1]: One.\n\n    Two."

    def test_footnotes_disabled(self):
        assert "[^1]" not in Remark(RemarkOptions()).convert(self.html)

    def test_footnote_id(self):
        assert footnote_id("fn:1") == "1"
        assert footnote_id("fn1") == "1"
        assert footnote_id("fn-note") == "note"
        assert footnote_id("other") == "other"
