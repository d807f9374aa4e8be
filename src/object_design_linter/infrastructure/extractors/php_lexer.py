"""Regex tokeniser for PHP source. Lexical only: no grammar, no semantic analysis."""

import re
from dataclasses import dataclass

from object_design_linter.domain.errors import ParseError

_OPEN_TAG = re.compile(r"<\?(?:php\b|=)", re.IGNORECASE)

_OPERATORS: tuple[str, ...] = (
    "<<=", ">>=", "**=", "...", "<=>", "===", "!==", "??=", "?->",
    "::", "->", "=>", "==", "!=", "<>", "<=", ">=", "&&", "||", "??", "++", "--",
    "+=", "-=", "*=", "/=", ".=", "%=", "&=", "|=", "^=", "<<", ">>", "**", "#[",
)

_TOKEN = re.compile(
    r"""
    (?P<ws>\s+)
  | (?P<close_tag>\?>)
  | (?P<comment>//[^\n]*?(?=\?>|\n|$)|\#(?!\[)[^\n]*?(?=\?>|\n|$)|/\*.*?\*/)
  | (?P<heredoc><<<[ \t]*(?P<hq>['"]?)(?P<label>[^\W\d]\w*)(?P=hq)\r?\n.*?^[ \t]*(?P=label)\b)
  | (?P<string>'(?:[^'\\]|\\.)*'|"(?:[^"\\]|\\.)*"|`(?:[^`\\]|\\.)*`)
  | (?P<var>\$[^\W\d]\w*)
  | (?P<name>\\?[^\W\d]\w*(?:\\[^\W\d]\w*)*)
  | (?P<number>0[xXbB][0-9a-fA-F_]+|\d[\d_]*(?:\.\d+)?(?:[eE][+-]?\d+)?|\.\d+)
  | (?P<op>"""
    + "|".join(re.escape(op) for op in _OPERATORS)
    + r"""|.)
    """,
    re.VERBOSE | re.DOTALL | re.MULTILINE,
)


@dataclass(frozen=True)
class Token:
    """A lexical token with its 1-based line."""
    kind: str
    text: str
    line: int

    def is_op(self, *texts: str) -> bool:
        return self.kind == "op" and self.text in texts

    def is_name(self, *names: str) -> bool:
        """Case-insensitive keyword/name comparison, as PHP does."""
        return self.kind == "name" and self.text.lower() in names


class PhpLexer:
    """Turns PHP source text into a token list, dropping whitespace and comments."""

    def tokenize(self, source: str) -> list[Token]:
        tokens: list[Token] = []
        pos, line = 0, 1
        length = len(source)
        # Snippets without an opening tag are treated as bare PHP code.
        if _OPEN_TAG.search(source):
            pos, line = self._skip_inline_html(source, 0, 1)
        while pos < length:
            match = _TOKEN.match(source, pos)
            if match is None:  # pragma: no cover - the op group matches any char
                raise ParseError("Unrecognised input", line=line)
            kind = match.lastgroup
            text = match.group(0)
            if kind == "op" and text in ("'", '"', "`"):
                raise ParseError("Unterminated string literal", line=line)
            if kind == "op" and text == "/" and source.startswith("/*", pos):
                raise ParseError("Unterminated block comment", line=line)
            if kind == "op" and source.startswith("<<<", pos):
                raise ParseError("Unterminated heredoc", line=line)
            if kind == "close_tag":
                pos, line = self._skip_inline_html(source, match.end(), line)
                tokens.append(Token("op", ";", line))
                continue
            if kind not in ("ws", "comment"):
                tokens.append(Token("string" if kind == "heredoc" else kind, text, line))
            line += text.count("\n")
            pos = match.end()
        return tokens

    @staticmethod
    def _skip_inline_html(source: str, pos: int, line: int) -> tuple[int, int]:
        """Skip to just after the next opening tag; end of input if there is none."""
        tag = _OPEN_TAG.search(source, pos)
        end = tag.end() if tag else len(source)
        return end, line + source.count("\n", pos, end)
