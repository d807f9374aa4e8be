"""Constructor rules: dependencies are mandatory and construction does no work."""

from typing import Optional

from object_design_linter.domain.constants import PARENT_CONSTRUCTOR_CALLS, PARENT_INIT_SUFFIX
from object_design_linter.domain.entities import Declaration
from object_design_linter.domain.rules import RuleContext
from object_design_linter.domain.type_shapes import matches_type_pattern


def optional_constructor_dependency(decl: Declaration, context: RuleContext) -> Optional[str]:
    """Constructor parameter typed as a service that has a default or is nullable."""
    if not decl.is_constructor or not decl.parameters:
        return None
    optional = [
        param
        for param in decl.parameters
        if (param.has_default or param.is_nullable)
        and matches_type_pattern(param.declared_type, context.service_type_pattern)
    ]
    if not optional:
        return None
    listed = ", ".join(f"'{p.name}' ({p.declared_type})" for p in optional)
    return (
        f"{decl.qualified_name} declares optional service dependencies: {listed}. "
        "Make every dependency a required constructor argument."
    )


def is_parent_constructor_call(symbol: str) -> bool:
    """parent::__construct (any case), super(...) or a Python <Base>.__init__ call."""
    return symbol.lower() in PARENT_CONSTRUCTOR_CALLS or symbol.endswith(PARENT_INIT_SUFFIX)


def side_effecting_constructor(decl: Declaration, context: RuleContext) -> Optional[str]:
    """Constructor taking arguments whose body does more than assign fields."""
    if not decl.is_constructor or not decl.parameters:
        return None
    calls = [
        site.symbol
        for site in decl.body.call_sites
        if not is_parent_constructor_call(site.symbol)
    ]
    if not calls:
        return None
    listed = ", ".join(dict.fromkeys(calls))
    return (
        f"{decl.qualified_name} does work while constructing ({listed}). "
        "Constructors should only assign their arguments to fields."
    )
