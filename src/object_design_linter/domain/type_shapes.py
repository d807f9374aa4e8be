"""Helpers for reading type annotations written as PHP or Python source text."""

import re
from dataclasses import dataclass
from typing import Optional

NULL_SHAPES: frozenset[str] = frozenset({"null", "none", "nonetype"})
AD_HOC_SHAPES: frozenset[str] = frozenset({"mixed", "any", "typing.any"})

_WRAPPER = re.compile(r"^(?:typing\.)?(Optional|Union)\[(.*)\]$", re.DOTALL)


@dataclass(frozen=True)
class TypeShape:
    """Concrete shapes of an annotation once null markers are removed."""
    shapes: tuple[str, ...]
    nullable: bool = False

    @property
    def is_ad_hoc(self) -> bool:
        """True when the annotation admits anything (mixed / Any)."""
        return any(shape.lower() in AD_HOC_SHAPES for shape in self.shapes)

    @property
    def is_single(self) -> bool:
        """Exactly one concrete shape, optionally nullable."""
        return len(self.shapes) == 1 and not self.is_ad_hoc


def split_top_level(text: str, separator: str) -> list[str]:
    """Split on separator outside of [], <>, () and {} nesting."""
    parts: list[str] = []
    depth = 0
    current: list[str] = []
    for char in text:
        if char in "[<({":
            depth += 1
        elif char in "])}>":
            depth = max(0, depth - 1)
        if char == separator and depth == 0:
            parts.append("".join(current).strip())
            current = []
            continue
        current.append(char)
    parts.append("".join(current).strip())
    return [part for part in parts if part]


def parse_type(annotation: Optional[str]) -> Optional[TypeShape]:
    """
    Decompose an annotation into its concrete shapes.

    ``?Foo``, ``Foo|null``, ``Optional[Foo]`` and ``Foo | None`` are one
    nullable shape. Returns None for empty annotations.
    """
    if annotation is None:
        return None
    text = annotation.strip().strip("'\"").strip()
    if not text:
        return None
    nullable = False
    if text.startswith("?"):
        nullable = True
        text = text[1:].strip()

    wrapper = _WRAPPER.match(text)
    if wrapper:
        kind, inner = wrapper.groups()
        members = split_top_level(inner, ",")
        if kind == "Optional":
            nullable = True
    else:
        members = split_top_level(text, "|")

    shapes: list[str] = []
    for member in members:
        if _WRAPPER.match(member) or len(split_top_level(member, "|")) > 1:
            nested = parse_type(member)
            if nested is None:
                continue
            nullable = nullable or nested.nullable
            shapes.extend(s for s in nested.shapes if s not in shapes)
            continue
        if member.lower() in NULL_SHAPES:
            nullable = True
            continue
        if member not in shapes:
            shapes.append(member)
    return TypeShape(shapes=tuple(shapes), nullable=nullable)


def bare_type_name(shape: str) -> str:
    """Strip namespace, module prefix and generic arguments: ``\\App\\Log\\Logger`` -> ``Logger``."""
    text = shape.strip().lstrip("?").strip()
    for opener in ("[", "<"):
        if opener in text:
            text = text.split(opener, 1)[0]
    text = text.replace("\\", ".")
    return text.rsplit(".", 1)[-1].strip()


def matches_type_pattern(annotation: Optional[str], pattern: "re.Pattern[str]") -> bool:
    """
    True when every concrete shape of the annotation fully matches pattern.

    Missing or ad hoc annotations never match, so uncertain parameters pass.
    """
    parsed = parse_type(annotation)
    if parsed is None or not parsed.shapes or parsed.is_ad_hoc:
        return False
    return all(pattern.fullmatch(bare_type_name(shape)) for shape in parsed.shapes)
