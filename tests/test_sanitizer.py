"""Tests for the allowlist sanitizer stage."""

import logging

import pytest

from mdguard import SanitizeConfig, sanitize_html
from mdguard.allowlist import DEFAULT_ALLOWLIST
from mdguard.sanitizer import HtmlSanitizer


class TestDisallowedElements:
    def test_script_removed_with_payload(self) -> None:
        assert sanitize_html("<p>a</p><script>alert(1)</script><p>b</p>") == "<p>a</p><p>b</p>"

    def test_subtree_removed_not_unwrapped(self) -> None:
        """Allowed descendants of a dropped element go too."""
        html = sanitize_html("<div><span><strong>gone</strong></span>kept</div>")
        assert html == "<div>kept</div>"

    def test_style_element_removed(self) -> None:
        assert sanitize_html("<style>p { color: red }</style><p>x</p>") == "<p>x</p>"

    def test_foreign_object_removed_inside_svg(self) -> None:
        html = sanitize_html(
            '<svg><foreignObject><div onclick="x()">html</div></foreignObject><rect width="1"/></svg>'
        )
        assert html == '<svg><rect width="1" /></svg>'

    def test_iframe_removed(self) -> None:
        assert sanitize_html('<iframe src="https://evil.example"></iframe>ok') == "ok"

    def test_blockquote_is_not_allowlisted(self) -> None:
        assert sanitize_html("<blockquote><p>quote</p></blockquote>") == ""

    def test_dropped_void_element_keeps_siblings(self) -> None:
        """<input> has no closing tag, so it must not swallow what follows."""
        assert sanitize_html('<input value="x"><p>after</p>') == "<p>after</p>"

    def test_self_closing_disallowed_opens_subtree(self) -> None:
        """HTML ignores the slash on <span/>, so what follows is its content."""
        assert sanitize_html("<span/><p>after</p>") == ""
        assert sanitize_html("<span/>secret") == ""
        assert sanitize_html("<div><span/>secret</div>after") == "<div></div>after"

    def test_nested_disallowed(self) -> None:
        html = sanitize_html("<form><button><span>x</span></button>y</form>z")
        assert html == "z"


class TestAttributes:
    def test_event_handlers_removed(self) -> None:
        html = sanitize_html('<img src="a.png" onerror="alert(1)" alt="a">')
        assert html == '<img src="a.png" alt="a">'

    def test_style_attribute_removed(self) -> None:
        assert sanitize_html('<p style="color:red" class="note">x</p>') == '<p class="note">x</p>'

    def test_data_attributes_removed(self) -> None:
        assert sanitize_html('<div data-id="3" id="d">x</div>') == '<div id="d">x</div>'

    def test_attributes_are_global(self) -> None:
        """Any allowlisted attribute survives on any allowed tag."""
        assert sanitize_html('<p cx="1" fill="red">x</p>') == '<p cx="1" fill="red">x</p>'

    def test_values_not_inspected(self) -> None:
        html = sanitize_html('<a href="javascript:alert(1)">x</a>')
        assert html == '<a href="javascript:alert(1)">x</a>'

    def test_value_escaping(self) -> None:
        html = sanitize_html("<a href='x\"y' alt=\"a&amp;b<c\">t</a>")
        assert html == '<a href="x&quot;y" alt="a&amp;b&lt;c">t</a>'

    def test_valueless_attribute(self) -> None:
        html = sanitize_html("<svg externalresourcesrequired></svg>")
        assert html == "<svg externalResourcesRequired></svg>"

    def test_duplicate_attribute_first_wins(self) -> None:
        assert sanitize_html('<p id="a" id="b">x</p>') == '<p id="a">x</p>'


class TestSvg:
    def test_circle_passthrough(self) -> None:
        source = '<svg><circle cx="1" cy="1" r="1" fill="red"/></svg>'
        assert sanitize_html(source) == '<svg><circle cx="1" cy="1" r="1" fill="red" /></svg>'

    def test_camel_case_names_restored(self) -> None:
        html = sanitize_html(
            '<svg viewBox="0 0 10 10"><clipPath id="c"><rect width="10"/></clipPath>'
            '<linearGradient gradientUnits="userSpaceOnUse"></linearGradient></svg>'
        )
        assert html == (
            '<svg viewBox="0 0 10 10"><clipPath id="c"><rect width="10" /></clipPath>'
            '<linearGradient gradientUnits="userSpaceOnUse"></linearGradient></svg>'
        )

    def test_svg_script_removed(self) -> None:
        html = sanitize_html('<svg><script>alert(1)</script><path d="M0 0"/></svg>')
        assert html == '<svg><path d="M0 0" /></svg>'

    def test_animation_attributes(self) -> None:
        source = '<animate attributeName="r" from="1" to="5" dur="1s" repeatCount="indefinite"/>'
        assert sanitize_html(f"<svg>{source}</svg>") == (
            "<svg>"
            '<animate attributeName="r" from="1" to="5" dur="1s" repeatCount="indefinite" />'
            "</svg>"
        )

    def test_self_closing_kept_inside_svg_only(self) -> None:
        assert sanitize_html("<svg/><p>x</p>") == "<svg /><p>x</p>"
        assert sanitize_html("<svg><g><rect/></g></svg><circle/>x") == (
            "<svg><g><rect /></g></svg><circle>x</circle>"
        )


class TestText:
    def test_plain_text(self) -> None:
        assert sanitize_html("just text") == "just text"

    def test_text_reescaped(self) -> None:
        assert sanitize_html("<p>1 &lt; 2 &amp;&amp; 3 &gt; 2</p>") == "<p>1 &lt; 2 &amp;&amp; 3 &gt; 2</p>"

    def test_entities_normalized(self) -> None:
        assert sanitize_html("<p>&copy; &#169;</p>") == "<p>© ©</p>"

    def test_text_dropped_without_text_node(self) -> None:
        config = SanitizeConfig(allowed_tags=frozenset({"p", "em"}))
        assert sanitize_html("<p>hi <em>there</em></p>", config=config) == "<p><em></em></p>"

    def test_comments_dropped(self) -> None:
        assert sanitize_html("<p>a<!-- secret -->b</p>") == "<p>ab</p>"

    def test_doctype_dropped(self) -> None:
        assert sanitize_html("<!DOCTYPE html><p>x</p>") == "<p>x</p>"


class TestStructure:
    def test_unclosed_elements_closed(self) -> None:
        assert sanitize_html("<div><p>x") == "<div><p>x</p></div>"

    def test_stray_end_tag_dropped(self) -> None:
        assert sanitize_html("a</p>b</div>") == "ab"

    def test_end_tag_closes_inner_elements(self) -> None:
        assert sanitize_html("<div><em>x</div>y") == "<div><em>x</em></div>y"

    def test_end_tag_ends_dropped_subtree(self) -> None:
        assert sanitize_html("<p>a<span>b</p>c") == "<p>a</p>c"

    def test_void_allowed_elements(self) -> None:
        assert sanitize_html("a<hr>b<hr/>c") == "a<hr>b<hr />c"

    def test_self_closing_html_element_is_opened(self) -> None:
        """<div/> is an open tag in HTML and gets closed like one."""
        assert sanitize_html("<div/><p>x</p>") == "<div><p>x</p></div>"
        assert sanitize_html("<p/>text") == "<p>text</p>"

    def test_self_closing_link_does_not_leak(self) -> None:
        html = sanitize_html('<p><a href="https://evil.example"/>rest</p>after')
        assert html == '<p><a href="https://evil.example">rest</a></p>after'

    def test_empty_input(self) -> None:
        assert sanitize_html("") == ""


class TestHtmlSanitizer:
    def test_feed_in_chunks(self) -> None:
        s = HtmlSanitizer(DEFAULT_ALLOWLIST)
        s.feed("<p>he")
        s.feed("llo</p><scr")
        s.feed("ipt>x</script>")
        assert s.finish() == "<p>hello</p>"

    def test_dropping_flag(self) -> None:
        s = HtmlSanitizer(DEFAULT_ALLOWLIST)
        s.feed("<p><span>")
        assert s.dropping
        s.feed("</span>")
        assert not s.dropping

    def test_custom_allowlist(self) -> None:
        config = SanitizeConfig(
            allowed_tags=frozenset({"#text", "b"}),
            allowed_attributes=frozenset({"title"}),
        )
        html = sanitize_html('<b title="t" id="i">x</b><p>y</p>', config=config)
        assert html == '<b title="t">x</b>'


class TestLogging:
    def test_dropped_names_logged_at_debug(self, caplog: pytest.LogCaptureFixture) -> None:
        caplog.set_level(logging.DEBUG, logger="mdguard")
        sanitize_html('<p onclick="x()">a</p><script>b</script>')
        messages = [r.getMessage() for r in caplog.records if r.name == "mdguard.sanitizer"]
        assert any("<script>" in m for m in messages)
        assert any("'onclick'" in m for m in messages)


class TestTypeErrors:
    def test_non_string_rejected(self) -> None:
        with pytest.raises(TypeError, match="html must be str"):
            sanitize_html(b"<p>x</p>")  # type: ignore[arg-type]
