"""Return shape rule: a function returns one kind of thing, optionally nothing."""

from typing import Optional

from object_design_linter.domain.config import ConfigurationLoader
from object_design_linter.domain.entities import Declaration, DeclarationKind
from object_design_linter.domain.rules import RuleContext
from object_design_linter.domain.type_shapes import parse_type


def mixed_return_type(decl: Declaration, context: RuleContext) -> Optional[str]:
    """Return annotation admitting several concrete shapes without a sanctioned marker."""
    if decl.kind is DeclarationKind.CLASS or not decl.return_type:
        return None
    parsed = parse_type(decl.return_type)
    if parsed is None or not parsed.shapes:
        return None
    if parsed.is_single:
        return None
    if not parsed.is_ad_hoc:
        spelling = ConfigurationLoader.canonical_union("|".join(parsed.shapes))
        if spelling in context.sanctioned_return_unions:
            return None
    return (
        f"{decl.qualified_name} returns '{decl.return_type}', which has more than one shape. "
        "Return a single type (nullable at most) or split the operation."
    )
