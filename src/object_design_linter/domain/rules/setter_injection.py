"""Setter injection rule: dependencies arrive through the constructor, not set<Noun>()."""

import re
from typing import Optional

from object_design_linter.domain.entities import Declaration, DeclarationKind
from object_design_linter.domain.rules import RuleContext
from object_design_linter.domain.type_shapes import matches_type_pattern

SETTER_NAME = re.compile(r"[sS]et[A-Z0-9]\w*|set_[a-z0-9]\w*")


def setter_dependency_injection(decl: Declaration, context: RuleContext) -> Optional[str]:
    """
    set<Noun> method assigning a field that belongs in the constructor.

    A field qualifies when the owning constructor already takes a parameter of
    that name, or when the setter assigns it from a service-typed parameter.
    """
    if decl.kind is not DeclarationKind.METHOD or not SETTER_NAME.fullmatch(decl.name):
        return None
    injected: list[str] = []
    for field_name in sorted(decl.body.assigned_fields):
        if field_name in decl.owner_constructor_parameters:
            injected.append(field_name)
            continue
        source = decl.body.source_of(field_name)
        param = decl.parameter(source) if source else None
        if param and matches_type_pattern(param.declared_type, context.service_type_pattern):
            injected.append(field_name)
    if not injected:
        return None
    listed = ", ".join(f"'{name}'" for name in injected)
    return (
        f"{decl.qualified_name} injects {listed} through a setter. "
        "Pass the dependency to the constructor instead."
    )
