"""System boundary rule: clocks, environment and files are reached through abstractions."""

from typing import Optional

from object_design_linter.domain.entities import Declaration, DeclarationKind
from object_design_linter.domain.rules import RuleContext


def normalize_symbol(symbol: str) -> str:
    """Case-fold and drop PHP's leading namespace separator."""
    return symbol.lstrip("\\").replace("\\", ".").lower()


def is_banned(symbol: str, banned: frozenset[str]) -> bool:
    """
    Bare banned entries match exactly, dotted entries also as a dotted suffix.

    ``datetime.now`` matches ``datetime.datetime.now``; ``date`` does not
    match ``datetime.date``.
    """
    target = normalize_symbol(symbol)
    for entry in banned:
        candidate = normalize_symbol(entry)
        if target == candidate:
            return True
        if "." in candidate and target.endswith("." + candidate):
            return True
    return False


def is_system_boundary(decl: Declaration, context: RuleContext) -> bool:
    """Declaration or its owning class is a designated system boundary."""
    names = [decl.name] + ([decl.owner] if decl.owner else [])
    return any(context.system_boundary_pattern.fullmatch(name) for name in names)


def direct_system_call(decl: Declaration, context: RuleContext) -> Optional[str]:
    """Function or method body reaching a banned system symbol outside a boundary."""
    if decl.kind is DeclarationKind.CLASS:
        return None
    if is_system_boundary(decl, context):
        return None
    hits = [
        site.symbol
        for site in decl.body.call_sites
        if is_banned(site.symbol, context.banned_system_call_symbols)
    ]
    if not hits:
        return None
    listed = ", ".join(dict.fromkeys(hits))
    return (
        f"{decl.qualified_name} calls the system directly ({listed}). "
        "Inject a boundary abstraction (clock, environment, file store) instead."
    )
