"""
PHP Source Model Extractor.

Structural decomposition over the token stream: classes, interfaces, traits
and enums, their methods, and top-level functions. Bodies are reduced to a
coarse summary (call sites and field assignments) by a lexical scan.
"""

import logging
from typing import Optional

from object_design_linter.domain.entities import (
    BodySummary,
    CallKind,
    CallSite,
    Declaration,
    DeclarationKind,
    Parameter,
    SourceLocation,
)
from object_design_linter.domain.errors import ParseError
from object_design_linter.domain.type_shapes import parse_type
from object_design_linter.infrastructure.extractors.php_lexer import PhpLexer, Token

logger = logging.getLogger(__name__)

_PAIRS: dict[str, str] = {"(": ")", "[": "]", "{": "}", "#[": "]"}
_CLOSERS: frozenset[str] = frozenset({")", "]", "}"})

CLASS_KEYWORDS: frozenset[str] = frozenset({"class", "interface", "trait", "enum"})
PARAMETER_MODIFIERS: frozenset[str] = frozenset({"public", "protected", "private", "readonly"})
ASSIGNMENT_OPS: frozenset[str] = frozenset(
    {"=", "??=", ".=", "+=", "-=", "*=", "/=", "%=", "**=", "|=", "&=", "^="}
)

# Names followed by "(" that are language constructs, not calls.
LANGUAGE_CONSTRUCTS: frozenset[str] = frozenset(
    {
        "if", "elseif", "else", "while", "for", "foreach", "switch", "match", "array",
        "list", "isset", "empty", "unset", "catch", "return", "echo", "print",
        "include", "include_once", "require", "require_once", "declare", "function",
        "fn", "use", "and", "or", "xor", "instanceof", "yield", "throw", "static",
        "new", "clone", "exit", "die", "eval", "do", "case", "default",
    }
)


class PhpExtractor:
    """Extracts declarations from PHP source. Pure transform; raises ParseError."""

    language: str = "php"
    suffixes: tuple[str, ...] = (".php",)

    def __init__(self, lexer: Optional[PhpLexer] = None) -> None:
        self._lexer = lexer or PhpLexer()

    def extract(self, source_text: str, path: str = "<string>") -> list[Declaration]:
        """Decompose source text into one Declaration per class, function and method."""
        try:
            tokens = self._lexer.tokenize(source_text)
        except ParseError as exc:
            raise ParseError(exc.message, line=exc.line, path=path) from exc
        pairs = self._match_brackets(tokens, path)
        parser = _TokenParser(tokens, pairs, path)
        declarations = parser.parse_block(0, len(tokens))
        logger.debug("Extracted %d declarations from %s", len(declarations), path)
        return declarations

    @staticmethod
    def _match_brackets(tokens: list[Token], path: str) -> dict[int, int]:
        """Map each opening bracket index to its closer. Unbalanced input is a ParseError."""
        pairs: dict[int, int] = {}
        stack: list[int] = []
        for index, token in enumerate(tokens):
            if token.kind != "op":
                continue
            if token.text in _PAIRS:
                stack.append(index)
            elif token.text in _CLOSERS:
                if not stack:
                    raise ParseError(f"Unbalanced '{token.text}'", line=token.line, path=path)
                opener = stack.pop()
                expected = _PAIRS[tokens[opener].text]
                if token.text != expected:
                    raise ParseError(
                        f"Expected '{expected}' to close '{tokens[opener].text}' "
                        f"from line {tokens[opener].line}, found '{token.text}'",
                        line=token.line,
                        path=path,
                    )
                pairs[opener] = index
        if stack:
            opener = tokens[stack[-1]]
            raise ParseError(f"Unclosed '{opener.text}'", line=opener.line, path=path)
        return pairs


class _TokenParser:
    """Recursive structural walk over a balanced token list."""

    def __init__(self, tokens: list[Token], pairs: dict[int, int], path: str) -> None:
        self._tokens = tokens
        self._pairs = pairs
        self._path = path

    # -- structure -----------------------------------------------------------

    def parse_block(self, start: int, end: int) -> list[Declaration]:
        """Top-level or namespace-block statements: classes and functions."""
        declarations: list[Declaration] = []
        index = start
        while index < end:
            token = self._tokens[index]
            if token.is_name(*CLASS_KEYWORDS) and self._starts_declaration(index):
                class_decls, index = self._parse_class(index)
                declarations.extend(class_decls)
            elif token.is_name("function") and self._starts_declaration(index):
                function, index = self._parse_function(index, owner=None, constructor_params=())
                if function is not None:
                    declarations.append(function)
            elif token.is_name("new") and index + 1 < end and self._tokens[index + 1].is_name("class"):
                index = self._skip_anonymous_class(index)
            elif token.is_op("{"):
                declarations.extend(self.parse_block(index + 1, self._pairs[index]))
                index = self._pairs[index] + 1
            elif token.is_op("(", "[", "#["):
                index = self._pairs[index] + 1
            else:
                index += 1
        return declarations

    def _starts_declaration(self, index: int) -> bool:
        """False for Foo::class, $x->class, new class, use function and enum as a plain name."""
        previous = self._tokens[index - 1] if index > 0 else None
        if previous is not None and (
            previous.is_op("::", "->", "?->") or previous.is_name("new", "use")
        ):
            return False
        following = self._peek(index + 1)
        if self._tokens[index].is_name("enum"):
            return following is not None and following.kind == "name"
        return True

    def _skip_anonymous_class(self, index: int) -> int:
        cursor = index + 2
        while cursor < len(self._tokens) and not self._tokens[cursor].is_op("{"):
            if cursor in self._pairs:
                cursor = self._pairs[cursor]
            cursor += 1
        if cursor >= len(self._tokens):
            raise self._error("Missing body for anonymous class", self._tokens[index])
        return self._pairs[cursor] + 1

    def _parse_class(self, index: int) -> tuple[list[Declaration], int]:
        keyword = self._tokens[index]
        name_token = self._peek(index + 1)
        if name_token is None or name_token.kind != "name":
            raise self._error(f"Expected a name after '{keyword.text}'", keyword)
        brace = index + 2
        while brace < len(self._tokens) and not self._tokens[brace].is_op("{"):
            if self._tokens[brace].is_op(";", "}", "("):
                raise self._error(f"Malformed {keyword.text.lower()} header for {name_token.text}", keyword)
            brace += 1
        if brace >= len(self._tokens):
            raise self._error(f"Missing body for {keyword.text.lower()} {name_token.text}", keyword)
        body_end = self._pairs[brace]
        class_name = name_token.text

        method_starts = self._method_starts(brace + 1, body_end)
        constructor_params: tuple[str, ...] = ()
        for start in method_starts:
            if self._function_name(start).lower() == "__construct":
                constructor_params = tuple(p.name for p in self._parameters_of(start))
                break

        declarations = [
            Declaration(
                name=class_name,
                kind=DeclarationKind.CLASS,
                location=SourceLocation(self._path, keyword.line),
            )
        ]
        for start in method_starts:
            method, _ = self._parse_function(start, owner=class_name, constructor_params=constructor_params)
            if method is not None:
                declarations.append(method)
        return declarations, body_end + 1

    def _method_starts(self, start: int, end: int) -> list[int]:
        """Indexes of 'function' keywords directly inside a class body."""
        starts: list[int] = []
        index = start
        while index < end:
            token = self._tokens[index]
            if token.is_name("function") and self._starts_declaration(index):
                starts.append(index)
                _, index = self._function_bounds(index)
            elif token.kind == "op" and index in self._pairs:
                index = self._pairs[index] + 1
            else:
                index += 1
        return starts

    def _function_name(self, index: int) -> str:
        name_index = index + 1
        if self._tokens[name_index].is_op("&"):
            name_index += 1
        token = self._tokens[name_index]
        return token.text if token.kind == "name" else ""

    def _function_bounds(self, index: int) -> tuple[dict[str, int], int]:
        """
        Locate the pieces of a function header.

        Returns indexes for name, params_open, params_close, return type span
        and body (or -1 for abstract declarations), plus the index after it.
        """
        keyword = self._tokens[index]
        cursor = index + 1
        if cursor < len(self._tokens) and self._tokens[cursor].is_op("&"):
            cursor += 1
        name = cursor
        token = self._peek(cursor)
        if token is not None and token.is_op("("):
            name = -1  # closure
        elif token is None or token.kind != "name":
            raise self._error("Malformed function header", keyword)
        else:
            cursor += 1
        opener = self._peek(cursor)
        if opener is None or not opener.is_op("("):
            raise self._error("Expected '(' after function name", keyword)
        params_open, params_close = cursor, self._pairs[cursor]
        cursor = params_close + 1
        if name == -1 and self._peek(cursor) is not None and self._tokens[cursor].is_name("use"):
            if not self._tokens[cursor + 1].is_op("("):
                raise self._error("Malformed closure 'use' clause", keyword)
            cursor = self._pairs[cursor + 1] + 1
        return_start = return_end = -1
        if self._peek(cursor) is not None and self._tokens[cursor].is_op(":"):
            return_start = cursor + 1
            cursor = return_start
            while cursor < len(self._tokens) and not self._tokens[cursor].is_op("{", ";", "=>"):
                if cursor in self._pairs:
                    cursor = self._pairs[cursor]
                cursor += 1
            return_end = cursor
        terminator = self._peek(cursor)
        if terminator is None or not terminator.is_op("{", ";"):
            raise self._error("Expected function body or ';'", keyword)
        body = cursor if terminator.is_op("{") else -1
        after = self._pairs[cursor] + 1 if body != -1 else cursor + 1
        bounds = {
            "name": name,
            "params_open": params_open,
            "params_close": params_close,
            "return_start": return_start,
            "return_end": return_end,
            "body": body,
        }
        return bounds, after

    def _parse_function(
        self, index: int, owner: Optional[str], constructor_params: tuple[str, ...]
    ) -> tuple[Optional[Declaration], int]:
        bounds, after = self._function_bounds(index)
        if bounds["name"] == -1:
            return None, after
        name = self._tokens[bounds["name"]].text
        if name.lower() == "__construct":
            name = "__construct"
        return_type = None
        if bounds["return_start"] != -1:
            return_type = self._join(bounds["return_start"], bounds["return_end"]) or None
        body = BodySummary()
        if bounds["body"] != -1:
            body = self._summarize_body(bounds["body"] + 1, self._pairs[bounds["body"]])
        declaration = Declaration(
            name=name,
            kind=DeclarationKind.METHOD if owner else DeclarationKind.FUNCTION,
            location=SourceLocation(self._path, self._tokens[index].line),
            parameters=self._parameters_of(index, bounds),
            return_type=return_type,
            body=body,
            owner=owner,
            owner_constructor_parameters=constructor_params if owner else (),
        )
        return declaration, after

    # -- parameters ----------------------------------------------------------

    def _parameters_of(self, index: int, bounds: Optional[dict[str, int]] = None) -> tuple[Parameter, ...]:
        if bounds is None:
            bounds, _ = self._function_bounds(index)
        parameters: list[Parameter] = []
        for start, end in self._split_commas(bounds["params_open"] + 1, bounds["params_close"]):
            parameters.append(self._parse_parameter(start, end))
        return tuple(parameters)

    def _split_commas(self, start: int, end: int) -> list[tuple[int, int]]:
        groups: list[tuple[int, int]] = []
        group_start = index = start
        while index < end:
            token = self._tokens[index]
            if token.is_op(","):
                if index > group_start:
                    groups.append((group_start, index))
                group_start = index + 1
            elif token.kind == "op" and index in self._pairs:
                index = self._pairs[index]
            index += 1
        if end > group_start:
            groups.append((group_start, end))
        return groups

    def _parse_parameter(self, start: int, end: int) -> Parameter:
        type_parts: list[str] = []
        index = start
        variable: Optional[Token] = None
        while index < end:
            token = self._tokens[index]
            if token.is_op("#["):
                index = self._pairs[index] + 1
                continue
            if token.kind == "var":
                variable = token
                index += 1
                break
            if token.is_name(*PARAMETER_MODIFIERS):
                index += 1
                if index < end and self._tokens[index].is_op("("):  # private(set)
                    index = self._pairs[index] + 1
                continue
            if token.is_op("...") or (token.is_op("&") and self._tokens[index + 1].kind == "var"):
                index += 1
                continue
            type_parts.append(token.text)
            index += 1
        if variable is None:
            raise self._error("Malformed parameter", self._tokens[start])

        declared_type = "".join(type_parts) or None
        has_default = index < end and self._tokens[index].is_op("=")
        default_is_null = (
            has_default
            and index + 2 == end
            and self._tokens[index + 1].is_name("null")
        )
        parsed = parse_type(declared_type)
        return Parameter(
            name=variable.text[1:],
            declared_type=declared_type,
            has_default=has_default,
            is_nullable=bool(parsed and parsed.nullable) or default_is_null,
        )

    # -- bodies --------------------------------------------------------------

    def _summarize_body(self, start: int, end: int) -> BodySummary:
        calls: list[CallSite] = []
        assigned: set[str] = set()
        sources: list[tuple[str, str]] = []
        for index in range(start, end):
            token = self._tokens[index]
            nxt = self._peek(index + 1)
            if nxt is None:
                break
            if token.is_name("new"):
                calls.append(self._construction(index))
            elif token.kind == "name" and nxt.is_op("::"):
                member = self._peek(index + 2)
                call = self._peek(index + 3)
                if member is not None and member.kind == "name" and call is not None and call.is_op("("):
                    calls.append(CallSite(f"{token.text}::{member.text}", CallKind.STATIC, token.line))
            elif token.kind == "name" and nxt.is_op("("):
                previous = self._tokens[index - 1] if index > start else None
                if previous is not None and previous.is_op("->", "?->", "::"):
                    if previous.is_op("->", "?->"):
                        calls.append(CallSite(f"->{token.text}", CallKind.METHOD, token.line))
                    continue
                if previous is not None and previous.is_name("function", "fn", "new"):
                    continue
                if token.text.lower() not in LANGUAGE_CONSTRUCTS:
                    calls.append(CallSite(token.text, CallKind.FUNCTION, token.line))
            elif token.kind == "var" and token.text == "$this" and nxt.is_op("->"):
                self._record_field_assignment(index, end, assigned, sources)
        return BodySummary(
            call_sites=tuple(calls),
            assigned_fields=frozenset(assigned),
            field_sources=tuple(sources),
        )

    def _construction(self, index: int) -> CallSite:
        token = self._tokens[index]
        target = self._tokens[index + 1]
        if target.is_name("class"):
            return CallSite("class@anonymous", CallKind.NEW, token.line)
        return CallSite(target.text, CallKind.NEW, token.line)

    def _record_field_assignment(
        self, index: int, end: int, assigned: set[str], sources: list[tuple[str, str]]
    ) -> None:
        """$this->field (= | ??= | .= ...) and $this->field[...] = ..."""
        field_token = self._peek(index + 2)
        if field_token is None or field_token.kind != "name":
            return
        cursor = index + 3
        while cursor < end and self._tokens[cursor].is_op("["):
            cursor = self._pairs[cursor] + 1
        if cursor >= end:
            return
        operator = self._tokens[cursor]
        if operator.kind != "op" or operator.text not in ASSIGNMENT_OPS:
            return
        assigned.add(field_token.text)
        value = self._peek(cursor + 1)
        terminator = self._peek(cursor + 2)
        if (
            operator.text == "="
            and cursor == index + 3
            and value is not None
            and value.kind == "var"
            and terminator is not None
            and terminator.is_op(";")
        ):
            sources.append((field_token.text, value.text[1:]))

    # -- helpers -------------------------------------------------------------

    def _peek(self, index: int) -> Optional[Token]:
        if 0 <= index < len(self._tokens):
            return self._tokens[index]
        return None

    def _join(self, start: int, end: int) -> str:
        return "".join(token.text for token in self._tokens[start:end])

    def _error(self, message: str, token: Token) -> ParseError:
        return ParseError(message, line=token.line, path=self._path)
