"""Comprehensive tests for the markup parser."""

import pytest

from compact_markup.parsing import MarkupParser, ParserState, parse_markup
from compact_markup.shared import ParseError, ParserConfig
from compact_markup.tree import Attribute, Comment, Document, Element, Text, render


class TestBasicParsing:
    """Test elements, text and attributes."""

    def test_concrete_paragraph(self):
        """Test <p>Hi</p> parses to one element with one text child."""
        document = parse_markup("<p>Hi</p>")
        assert document == Document([Element("p", [], [Text("Hi")])])

    def test_empty_input(self):
        assert parse_markup("") == Document()

    def test_whitespace_only_input_is_text(self):
        assert parse_markup("  \n\t ") == Document([Text("  \n\t ")])

    def test_multiple_roots_preserve_order(self):
        """Test a document need not have a single root."""
        document = parse_markup("<p>a</p><div></div>tail")
        assert [type(node).__name__ for node in document] == ["Element", "Element", "Text"]
        assert document.nodes[2] == Text("tail")

    def test_nested_children_order(self):
        """Test mixed content keeps child order."""
        document = parse_markup("<div>one<span>two</span>three</div>")
        div = document.nodes[0]
        assert div.children == (Text("one"), Element("span", children=[Text("two")]),
                                Text("three"))

    def test_text_keeps_inner_whitespace(self):
        """Test text runs keep whitespace up to the next tag."""
        document = parse_markup("<p>Hello <b>big</b> world </p>")
        assert document.nodes[0].children == (
            Text("Hello "), Element("b", children=[Text("big")]), Text(" world "),
        )

    def test_whitespace_between_tags_is_kept(self):
        """Test whitespace-only runs between tags are text nodes."""
        document = parse_markup("<ul>\n  <li>a</li>\n  <li>b</li>\n</ul>\n")
        ul = document.nodes[0]
        assert ul.children == (Text("\n  "), Element("li", children=[Text("a")]),
                               Text("\n  "), Element("li", children=[Text("b")]),
                               Text("\n"))
        assert document.nodes[1:] == (Text("\n"),)

    def test_space_between_inline_elements_survives_render(self):
        """Test the visible text of adjacent inline elements is unchanged."""
        markup = "<p><b>x</b> <i>y</i></p>"
        document = parse_markup(markup)
        assert document.nodes[0].children[1] == Text(" ")
        assert render(document) == markup

    def test_whitespace_before_closing_tag(self):
        assert parse_markup("<div>a </div>").nodes[0].children == (Text("a "),)
        assert parse_markup("<div> </div>").nodes[0].children == (Text(" "),)

    def test_leading_whitespace_kept_before_text(self):
        """Test leading whitespace belongs to a following text run."""
        assert parse_markup("  hi").nodes == (Text("  hi"),)

    def test_known_identifiers_are_canonicalised(self):
        """Test case-insensitive vocabulary matching."""
        document = parse_markup("<DIV CLASS='a'></DIV>")
        assert document.nodes[0] == Element("div", [Attribute("class", "a")])

    def test_custom_identifiers_keep_spelling(self):
        """Test unknown element and attribute names are kept as written."""
        element = parse_markup('<My-Widget data-Id="7"></My-Widget>').nodes[0]
        assert element.name == "My-Widget"
        assert element.attributes == (Attribute("data-Id", "7"),)


class TestAttributes:
    """Test attribute parsing rules."""

    def test_attribute_without_value(self):
        """Test a bare attribute has a None value."""
        element = parse_markup("<script async></script>").nodes[0]
        assert element.attributes == (Attribute("async"),)

    def test_empty_value_is_not_none(self):
        element = parse_markup('<img alt="">').nodes[0]
        assert element.attributes == (Attribute("alt", ""),)

    def test_quote_selection(self):
        """Test the first quote character delimits the value."""
        element = parse_markup("""<a title='say "hi"' href="it's">x</a>""").nodes[0]
        assert element.attributes == (Attribute("title", 'say "hi"'),
                                      Attribute("href", "it's"))

    def test_whitespace_before_quote(self):
        element = parse_markup('<a href=  "/x"></a>').nodes[0]
        assert element.get_attribute("href") == "/x"

    def test_attribute_order_preserved(self):
        element = parse_markup('<div id="1" class="c" data-x lang="en"></div>').nodes[0]
        assert [attribute.name for attribute in element.attributes] == [
            "id", "class", "data-x", "lang",
        ]

    def test_value_keeps_markup_characters(self):
        """Test values are not interpreted."""
        element = parse_markup('<div title="a > b <c/>"></div>').nodes[0]
        assert element.get_attribute("title") == "a > b <c/>"


class TestSelfClosingAndTextOnly:
    """Test void elements and raw text blocks."""

    def test_void_element_without_slash(self):
        """Test registry void elements close on >."""
        document = parse_markup("<p>a<br>b</p>")
        assert document.nodes[0].children == (Text("a"), Element("br"), Text("b"))

    def test_explicit_self_closing(self):
        """Test /> closes any element."""
        assert parse_markup("<div/>").nodes == (Element("div"),)
        assert parse_markup('<x-icon name="a" />').nodes == (
            Element("x-icon", [Attribute("name", "a")]),
        )
        assert parse_markup("<br/>").nodes == (Element("br"),)

    def test_doctype(self):
        """Test the doctype declaration is a void element."""
        document = parse_markup("<!DOCTYPE html><html></html>")
        assert document.nodes[0] == Element("!doctype", [Attribute("html")])
        assert document.nodes[1] == Element("html")

    def test_script_body_not_parsed(self):
        """Test script content is captured verbatim."""
        body = "if (a < b) { document.write('<p>'); }"
        element = parse_markup(f"<script>{body}</script>").nodes[0]
        assert element.children == (Text(body),)

    def test_empty_script_has_empty_text(self):
        assert parse_markup("<script></script>").nodes[0].children == (Text(""),)

    def test_empty_tag_text_only_element_has_no_body(self):
        """Test <script/> differs from an empty <script></script> body."""
        document = parse_markup("<script/>")
        assert document.nodes == (Element("script"),)
        assert render(document) == "<script/>"

    def test_text_only_closing_allows_whitespace(self):
        element = parse_markup("<style>a{}</style  >").nodes[0]
        assert element.children == (Text("a{}"),)

    def test_text_only_closing_is_case_sensitive(self):
        """Test the closing sequence must match the name as written."""
        element = parse_markup("<SCRIPT>x</script></SCRIPT>").nodes[0]
        assert element.name == "script"
        assert element.children == (Text("x</script>"),)


class TestComments:
    """Test comment forms and the terminator retention rule."""

    def test_plain_comment_retains_dashes(self):
        """Test <!--note--> keeps the terminator dashes."""
        assert parse_markup("<!--note-->").nodes == (Comment("note--"),)

    def test_comment_renders_asymmetrically(self):
        """Test the stored payload renders back as <!note-->."""
        assert render(parse_markup("<!--note-->")) == "<!note-->"

    def test_comment_content_is_raw(self):
        assert parse_markup("<!-- <p>x</p> -->").nodes == (Comment(" <p>x</p> --"),)

    def test_conditional_comment(self):
        """Test the conditional variant ends at ]> and keeps ]."""
        document = parse_markup("<!--[if IE]><p>old</p><![endif]-->")
        assert document.nodes == (
            Comment("[if IE]"),
            Element("p", children=[Text("old")]),
            Comment("[endif]--"),
        )

    def test_endif_renders_back(self):
        assert render(parse_markup("<![endif]-->")) == "<![endif]-->"

    def test_comment_inside_element(self):
        document = parse_markup("<div><!--x--><p></p></div>")
        assert document.nodes[0].children == (Comment("x--"), Element("p"))


class TestParseErrors:
    """Test fatal parse failures."""

    def test_mismatched_closing_identifier(self):
        """Test <div><span></div> fails on the closing identifier."""
        with pytest.raises(ParseError, match="unexpected closing identifier") as exc_info:
            parse_markup("<div><span></div>")
        error = exc_info.value
        assert "</div>" in str(error)
        assert "</span>" in str(error)
        assert error.state == ParserState.PARSE_CHILDREN.name

    def test_closing_identifier_case_must_match(self):
        with pytest.raises(ParseError, match="unexpected closing identifier"):
            parse_markup("<div></DIV>")

    def test_missing_identifier(self):
        with pytest.raises(ParseError, match="identifier expected"):
            parse_markup("< div>")
        with pytest.raises(ParseError, match="identifier expected"):
            parse_markup("</p>")

    def test_unterminated_quote(self):
        with pytest.raises(ParseError, match="unterminated quote"):
            parse_markup('<a href="/x></a>')

    def test_unquoted_value(self):
        with pytest.raises(ParseError, match="expected quote"):
            parse_markup("<a href=/x></a>")

    def test_invalid_attribute_identifier(self):
        with pytest.raises(ParseError, match="attribute identifier expected"):
            parse_markup("<a :x></a>")

    def test_unexpected_end_in_children(self):
        with pytest.raises(ParseError, match="unexpected end of input"):
            parse_markup("<div><p>text</p>")

    def test_unexpected_end_in_open_tag(self):
        with pytest.raises(ParseError, match="unexpected end of input"):
            parse_markup('<div id="x"')

    def test_unexpected_end_after_equals(self):
        with pytest.raises(ParseError, match="unexpected end of input"):
            parse_markup("<div id=")

    def test_unterminated_comment(self):
        with pytest.raises(ParseError, match="unterminated comment"):
            parse_markup("<!-- never closed")

    def test_unterminated_text_only_block(self):
        with pytest.raises(ParseError, match="unterminated <script> block"):
            parse_markup("<script>var a;")

    def test_stray_slash(self):
        with pytest.raises(ParseError, match="expected '/>'"):
            parse_markup("<div / ></div>")

    def test_error_reports_line_and_column(self):
        """Test errors carry a human-readable location."""
        with pytest.raises(ParseError) as exc_info:
            parse_markup("<div>\n  <p></span>\n</div>")
        assert exc_info.value.line == 2
        assert exc_info.value.column == 12
        assert "(line 2, column 12)" in str(exc_info.value)

    def test_nesting_depth_limit(self):
        """Test the configured depth limit aborts the parse."""
        parser = MarkupParser(ParserConfig(max_depth=3))
        parser.parse("<div><div><div></div></div></div>")
        with pytest.raises(ParseError, match="maximum nesting depth of 3 exceeded"):
            parser.parse("<div><div><div><div></div></div></div></div>")


class TestParserReuse:
    """Test parser instances are reusable."""

    def test_state_reset_between_parses(self):
        parser = MarkupParser(correlation_id="doc-1")
        with pytest.raises(ParseError):
            parser.parse("<div>")
        assert parser.parse("<p>ok</p>") == Document([Element("p", children=[Text("ok")])])


class TestRenderRoundTrip:
    """Test parse -> render -> parse structural stability."""

    @pytest.mark.parametrize("markup", [
        "<p>Hi</p>",
        '<!DOCTYPE html><html lang="en"><head><meta charset="utf-8"><title>T</title>'
        '<link rel="stylesheet" href="a.css"><style>p > a { color: red; }</style></head>'
        '<body class="main"><div id="x">Hello <b>world</b><br>'
        '<img src="a.png" alt="">'
        "<script async>if (a < b) alert('</div>');</script></div></body></html>",
        "<ul>\n <li>one</li>\n <li title='a \"q\"'>two</li>\n</ul>",
        '<x-card data-id="1" hidden><x-title>T</x-title></x-card>',
        "<div/><span></span>text",
        "<script/>",
        "<style media='print'/><script></script>",
        "<p><b>x</b> <i>y</i></p>\n",
    ])
    def test_render_then_parse_is_stable(self, markup):
        first = parse_markup(markup)
        second = parse_markup(render(first))
        assert second == first
