"""
Basic parser tests - simplest cases

Tests empty source, single rules, declarations, at-rules and comments.
"""

import pytest

from formathub.lib.parser import Parser
from formathub.lib.tokenizer import tokenize
from formathub.models.css import AtRule, CommentRule, Declaration, StyleRule


def parse(source):
    return Parser(tokenize(source)).parse()


class TestEmptyAndSimple:
    """Test empty source and simplest rules"""

    def test_empty_source(self):
        """Empty string should parse to empty list"""
        assert parse("") == []

    def test_whitespace_only(self):
        """Only whitespace should parse to empty list"""
        assert parse("   \n\n  \t  ") == []

    def test_single_rule(self):
        """Selector with two declarations"""
        rules = parse(".a{color:red;margin:0}")

        assert len(rules) == 1
        rule = rules[0]
        assert isinstance(rule, StyleRule)
        assert rule.selector == ".a"
        assert rule.declarations == [
            Declaration("color", "red"),
            Declaration("margin", "0"),
        ]
        assert rule.nested_rules == []

    def test_rule_position(self):
        """Rule records the position of its first selector token"""
        rules = parse("\n\n  .a { color: red }")
        assert (rules[0].line, rules[0].column) == (3, 3)

    def test_multiple_rules(self):
        """Rules come back in source order"""
        rules = parse(".a{color:red}\n.b{color:blue}")
        assert [r.selector for r in rules] == [".a", ".b"]

    def test_empty_block_kept_when_selector_present(self):
        """A selector with an empty block is a valid (empty) rule"""
        rules = parse(".empty {}")
        assert len(rules) == 1
        assert rules[0].selector == ".empty"
        assert rules[0].declarations == []

    def test_empty_shell_dropped(self):
        """No selector and no declarations: never enters the tree"""
        assert parse("{}") == []
        assert parse("  {   }  .a{x:y}")[0].selector == ".a"


class TestSelectorText:
    """Selector whitespace normalization"""

    def test_whitespace_collapsed(self):
        """Whitespace runs in selectors become single spaces"""
        rules = parse(".header \n\t  h1   >  a {color:red}")
        assert rules[0].selector == ".header h1 > a"

    def test_pseudo_class_and_list(self):
        """Colons and commas stay attached as written"""
        rules = parse("a:hover, a:focus {color:red}")
        assert rules[0].selector == "a:hover, a:focus"

    def test_root_selector(self):
        """:root starts with punctuation but is still a selector"""
        rules = parse(":root{--primary:#007bff}")
        assert rules[0].selector == ":root"
        assert rules[0].declarations == [Declaration("--primary", "#007bff")]


class TestDeclarations:
    """Property/value parsing"""

    def test_value_whitespace_joined(self):
        """Multi-word values keep single spaces"""
        rules = parse(".a { margin:   0 \n auto ; }")
        assert rules[0].declarations == [Declaration("margin", "0 auto")]

    def test_value_with_function_and_commas(self):
        """Punctuation inside values is kept verbatim"""
        rules = parse(".a{font-family:Arial, sans-serif;color:rgba(0,0,0,.5)}")
        assert rules[0].declarations == [
            Declaration("font-family", "Arial, sans-serif"),
            Declaration("color", "rgba(0,0,0,.5)"),
        ]

    def test_missing_final_semicolon(self):
        """Last declaration may omit its semicolon"""
        rules = parse(".a { color: red; margin: 0 }")
        assert [d.property for d in rules[0].declarations] == ["color", "margin"]

    def test_important_with_space(self):
        """!important suffix is stripped and flagged"""
        rules = parse(".a{color:red !important}")
        assert rules[0].declarations == [Declaration("color", "red", important=True)]

    def test_important_attached(self):
        """!important written without a space"""
        rules = parse(".a{color:red!important;}")
        assert rules[0].declarations == [Declaration("color", "red", important=True)]

    def test_important_case_sensitive(self):
        """Only the exact lowercase literal is recognized"""
        rules = parse(".a{color:red !IMPORTANT}")
        assert rules[0].declarations == [Declaration("color", "red !IMPORTANT")]

    def test_stray_semicolons_skipped(self):
        """Empty statements do not create declarations"""
        rules = parse(".a{;;color:red;;}")
        assert rules[0].declarations == [Declaration("color", "red")]

    def test_empty_property_kept(self):
        """A declaration with no property is kept for the validator"""
        rules = parse(".a{:red}")
        assert rules[0].declarations == [Declaration("", "red")]

    def test_missing_colon(self):
        """Property without colon becomes a declaration with empty value"""
        rules = parse(".a{color red;margin:0}")
        assert rules[0].declarations == [
            Declaration("color red", ""),
            Declaration("margin", "0"),
        ]

    def test_empty_value(self):
        rules = parse(".a{color:;}")
        assert rules[0].declarations == [Declaration("color", "")]


class TestAtRules:
    """At-rules in statement and block form"""

    def test_import_statement(self):
        """@import has no body"""
        rules = parse('@import url("theme.css");')
        assert rules == [AtRule(keyword="@import", prelude='url("theme.css")', body=None, line=1, column=1)]

    def test_charset_without_prelude_spacing(self):
        rules = parse('@charset    "utf-8"  ;')
        assert rules[0].prelude == '"utf-8"'

    def test_media_block(self):
        """@media body holds nested style rules"""
        rules = parse("@media (max-width:768px){.container{padding:10px}}")

        at_rule = rules[0]
        assert isinstance(at_rule, AtRule)
        assert at_rule.keyword == "@media"
        assert at_rule.prelude == "(max-width:768px)"
        assert len(at_rule.body) == 1
        assert at_rule.body[0].selector == ".container"
        assert at_rule.body[0].declarations == [Declaration("padding", "10px")]

    def test_media_prelude_spacing(self):
        rules = parse("@media   screen and\n(min-width: 100px) { }")
        assert rules[0].prelude == "screen and (min-width: 100px)"
        assert rules[0].body == []

    def test_font_face_declarations(self):
        """Declarations directly inside an at-rule block are kept"""
        rules = parse("@font-face{font-family:Foo;src:url(foo.woff)}")
        assert rules[0].declarations == [
            Declaration("font-family", "Foo"),
            Declaration("src", "url(foo.woff)"),
        ]
        assert rules[0].body == []

    def test_statement_then_rule(self):
        rules = parse("@import url(a.css);.a{color:red}")
        assert rules[0].body is None
        assert rules[1].selector == ".a"


class TestComments:
    """Comments become CommentRule siblings"""

    def test_top_level_comment(self):
        rules = parse("/* header */\n.a{color:red}")
        assert rules[0] == CommentRule(text="/* header */", line=1, column=1)
        assert rules[1].selector == ".a"

    def test_comment_inside_block(self):
        """Comments inside a block are nested siblings, not declarations"""
        rules = parse(".a{/* c */color:red}")
        assert rules[0].declarations == [Declaration("color", "red")]
        assert [r.text for r in rules[0].nested_rules] == ["/* c */"]

    def test_comment_inside_value(self):
        """Comment inside a value is hoisted out and acts as a space"""
        rules = parse(".a{margin:0/* x */auto}")
        assert rules[0].declarations == [Declaration("margin", "0 auto")]
        assert [r.text for r in rules[0].nested_rules] == ["/* x */"]

    def test_comment_in_statement_at_rule_prelude(self):
        """Prelude comment of @import becomes the preceding sibling"""
        rules = parse("@import /* keep */ url(a.css);")
        assert rules == [
            CommentRule(text="/* keep */", line=1, column=9),
            AtRule(keyword="@import", prelude="url(a.css)", body=None, line=1, column=1),
        ]

    def test_comment_in_nested_statement_at_rule_prelude(self):
        rules = parse("@layer x{@import /* c */ url(a)}")
        body = rules[0].body
        assert [type(r) for r in body] == [CommentRule, AtRule]
        assert body[0].text == "/* c */"
        assert body[1].prelude == "url(a)"

    def test_unterminated_comment_closed(self):
        """A comment running to end of input gets its closing delimiter"""
        rules = parse(".a{color:red;/* oops")
        assert rules[0].declarations == [Declaration("color", "red")]
        assert rules[0].nested_rules == [CommentRule(text="/* oops*/", line=1, column=14)]

    @pytest.mark.parametrize("source, text", [
        ("/* open", "/* open*/"),
        ("/*", "/**/"),
        ("/*/", "/*/*/"),
        ("/**/", "/**/"),
    ])
    def test_comment_closing(self, source, text):
        assert parse(source) == [CommentRule(text=text, line=1, column=1)]


class TestDegenerateInput:
    """Malformed input never raises"""

    @pytest.mark.parametrize("source", [
        ".a{color:red",
        ".a",
        "}}}",
        "@media screen {",
        "@import",
        ".a{color:",
        "/* open",
        ";;;",
    ])
    def test_no_exception(self, source):
        """Parser degrades gracefully"""
        assert isinstance(parse(source), list)

    def test_unclosed_block_keeps_content(self):
        """Missing closing brace: declarations read so far are kept"""
        rules = parse(".a{color:red;margin:0")
        assert rules[0].declarations == [Declaration("color", "red"), Declaration("margin", "0")]

    def test_selector_without_block_dropped(self):
        """Selector that never opens a block is dropped"""
        assert parse(".a .b") == []

    def test_stray_close_brace_ignored(self):
        rules = parse("} .a{color:red}")
        assert [r.selector for r in rules] == [".a"]


class TestLargeInput:
    """Parsing cost grows linearly with the token count"""

    def test_many_declarations(self):
        source = ".a{" + "".join(f"p{i}:{i};" for i in range(10000)) + "}"
        rules = parse(source)
        assert len(rules[0].declarations) == 10000
        assert rules[0].declarations[-1] == Declaration("p9999", "9999")

    def test_many_nested_rules(self):
        source = ".a{" + "".join(f".b{i}{{x:{i}}}" for i in range(2000)) + "}"
        rules = parse(source)
        assert len(rules[0].nested_rules) == 2000
        assert rules[0].nested_rules[-1].selector == ".b1999"
