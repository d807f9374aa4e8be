"""Unit tests for the PHP tokeniser."""

import pytest

from object_design_linter.domain.errors import ParseError
from object_design_linter.infrastructure.extractors.php_lexer import PhpLexer


def _texts(source: str) -> list[str]:
    return [token.text for token in PhpLexer().tokenize(source)]


def test_inline_html_before_open_tag_is_skipped() -> None:
    tokens = PhpLexer().tokenize("<html>\n<?php\n$a = 1;")
    assert [t.text for t in tokens] == ["$a", "=", "1", ";"]
    assert tokens[0].line == 3


def test_snippet_without_open_tag_is_code() -> None:
    assert _texts("function f() {}") == ["function", "f", "(", ")", "{", "}"]


def test_comments_and_whitespace_are_dropped() -> None:
    source = "<?php\n// line\n# hash\n/* block\n*/ $x;"
    tokens = PhpLexer().tokenize(source)
    assert [t.text for t in tokens] == ["$x", ";"]
    assert tokens[0].line == 5


def test_strings_keep_braces_inside() -> None:
    assert _texts("<?php $a = '{'; $b = \"}\";") == ["$a", "=", "'{'", ";", "$b", "=", '"}"', ";"]


def test_multi_char_operators() -> None:
    assert _texts("<?php $a?->b ??= Foo::bar(...$c);") == [
        "$a", "?->", "b", "??=", "Foo", "::", "bar", "(", "...", "$c", ")", ";",
    ]


def test_namespaced_names_are_single_tokens() -> None:
    assert _texts("<?php new \\App\\Clock\\SystemClock();")[1] == "\\App\\Clock\\SystemClock"


def test_attribute_opener_is_not_a_comment() -> None:
    assert _texts("<?php #[Inject] $x;")[:3] == ["#[", "Inject", "]"]


def test_heredoc_is_one_string_token() -> None:
    source = "<?php\n$sql = <<<SQL\nSELECT { FROM t\nSQL;\n$y;"
    tokens = PhpLexer().tokenize(source)
    assert [t.kind for t in tokens][:3] == ["var", "op", "string"]
    assert tokens[-2].text == "$y"
    assert tokens[-2].line == 5


def test_close_tag_acts_as_statement_end() -> None:
    assert _texts("<?php $a ?>\n<p>html</p>\n<?php $b;") == ["$a", ";", "$b", ";"]


@pytest.mark.parametrize(
    ("source", "message"),
    [
        ("<?php $a = 'open;", "Unterminated string literal"),
        ("<?php /* never closed", "Unterminated block comment"),
        ("<?php $a = <<<EOT\nbody without end", "Unterminated heredoc"),
    ],
)
def test_unterminated_constructs_raise(source: str, message: str) -> None:
    with pytest.raises(ParseError, match=message):
        PhpLexer().tokenize(source)


def test_is_name_is_case_insensitive() -> None:
    token = PhpLexer().tokenize("<?php FUNCTION")[0]
    assert token.is_name("function")
