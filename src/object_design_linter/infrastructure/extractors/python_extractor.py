"""Python Source Model Extractor backed by astroid."""

import logging
from typing import Optional

import astroid
from astroid import nodes
from astroid.exceptions import AstroidSyntaxError

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

logger = logging.getLogger(__name__)

_SKIP_SCOPES = (nodes.FunctionDef, nodes.ClassDef, nodes.Lambda)


class PythonExtractor:
    """Extracts declarations from Python source. Pure transform; raises ParseError."""

    language: str = "python"
    suffixes: tuple[str, ...] = (".py",)

    def extract(self, source_text: str, path: str = "<string>") -> list[Declaration]:
        """Decompose source text into one Declaration per class, function and method."""
        module = self.parse(source_text, path)
        imports = self.import_map(module)
        declarations = self._walk(module.body, path, imports, owner=None)
        logger.debug("Extracted %d declarations from %s", len(declarations), path)
        return declarations

    def parse(self, source_text: str, path: str = "<string>") -> nodes.Module:
        """Parse with astroid; syntax errors become ParseError."""
        try:
            return astroid.parse(source_text, path=None if path == "<string>" else path)
        except AstroidSyntaxError as exc:
            error = getattr(exc, "error", None)
            line = getattr(error, "lineno", 0) or 0
            message = getattr(error, "msg", None) or str(exc)
            raise ParseError(message, line=line, path=path) from exc
        except ValueError as exc:  # e.g. source containing null bytes
            raise ParseError(str(exc), path=path) from exc

    def declarations_for_module(self, module: nodes.Module) -> list[Declaration]:
        """Extract from an already parsed module (used by the pylint plugin)."""
        path = getattr(module, "file", None) or module.name or "<string>"
        return self._walk(module.body, path, self.import_map(module), owner=None)

    @staticmethod
    def import_map(module: nodes.Module) -> dict[str, str]:
        """Local name -> dotted origin for module-level imports."""
        mapping: dict[str, str] = {}
        for node in module.nodes_of_class((nodes.Import, nodes.ImportFrom), skip_klass=_SKIP_SCOPES):
            if isinstance(node, nodes.Import):
                for name, alias in node.names:
                    if alias:
                        mapping[alias] = name
                    else:
                        root = name.split(".", 1)[0]
                        mapping[root] = root
            else:
                for name, alias in node.names:
                    if name == "*":
                        continue
                    origin = f"{node.modname}.{name}" if node.modname else name
                    mapping[alias or name] = origin
        return mapping

    # -- structure -----------------------------------------------------------

    def _walk(
        self,
        body: list[nodes.NodeNG],
        path: str,
        imports: dict[str, str],
        owner: Optional[str],
        constructor_params: tuple[str, ...] = (),
    ) -> list[Declaration]:
        """Declarations in body, including those nested in if/try/with blocks."""
        declarations: list[Declaration] = []
        for node in body:
            if isinstance(node, nodes.ClassDef):
                declarations.extend(self._class(node, path, imports))
            elif isinstance(node, nodes.FunctionDef):
                declarations.append(self._function(node, path, imports, owner, constructor_params))
            elif not isinstance(node, nodes.Lambda):
                declarations.extend(
                    self._walk(list(node.get_children()), path, imports, owner, constructor_params)
                )
        return declarations

    def _class(self, node: nodes.ClassDef, path: str, imports: dict[str, str]) -> list[Declaration]:
        constructor_params: tuple[str, ...] = ()
        for child in node.body:
            if isinstance(child, nodes.FunctionDef) and child.name == "__init__":
                constructor_params = tuple(p.name for p in self._parameters(child, is_method=True))
                break
        declarations = [
            Declaration(
                name=node.name,
                kind=DeclarationKind.CLASS,
                location=SourceLocation(path, node.lineno or 0),
            )
        ]
        declarations.extend(self._walk(node.body, path, imports, node.name, constructor_params))
        return declarations

    def _function(
        self,
        node: nodes.FunctionDef,
        path: str,
        imports: dict[str, str],
        owner: Optional[str],
        constructor_params: tuple[str, ...],
    ) -> Declaration:
        return Declaration(
            name=node.name,
            kind=DeclarationKind.METHOD if owner else DeclarationKind.FUNCTION,
            location=SourceLocation(path, node.lineno or 0),
            parameters=self._parameters(node, is_method=owner is not None),
            return_type=node.returns.as_string() if node.returns is not None else None,
            body=self._summarize_body(node, imports),
            owner=owner,
            owner_constructor_parameters=constructor_params,
        )

    # -- parameters ----------------------------------------------------------

    def _parameters(self, node: nodes.FunctionDef, is_method: bool) -> tuple[Parameter, ...]:
        args = node.args
        positional = list(args.posonlyargs or []) + list(args.args or [])
        positional_annotations = list(args.posonlyargs_annotations or []) + list(args.annotations or [])
        defaults = list(args.defaults or [])
        first_default = len(positional) - len(defaults)

        parameters: list[Parameter] = []
        for position, arg in enumerate(positional):
            if is_method and position == 0 and not self._is_staticmethod(node):
                continue
            annotation = positional_annotations[position] if position < len(positional_annotations) else None
            default = defaults[position - first_default] if position >= first_default else None
            parameters.append(self._parameter(arg.name, annotation, default, position >= first_default))

        kw_defaults = list(args.kw_defaults or [])
        kw_annotations = list(args.kwonlyargs_annotations or [])
        for position, arg in enumerate(args.kwonlyargs or []):
            annotation = kw_annotations[position] if position < len(kw_annotations) else None
            default = kw_defaults[position] if position < len(kw_defaults) else None
            parameters.append(self._parameter(arg.name, annotation, default, default is not None))
        return tuple(parameters)

    @staticmethod
    def _parameter(
        name: str,
        annotation: Optional[nodes.NodeNG],
        default: Optional[nodes.NodeNG],
        has_default: bool,
    ) -> Parameter:
        declared_type = annotation.as_string() if annotation is not None else None
        parsed = parse_type(declared_type)
        default_is_none = isinstance(default, nodes.Const) and default.value is None
        return Parameter(
            name=name,
            declared_type=declared_type,
            has_default=has_default,
            is_nullable=bool(parsed and parsed.nullable) or default_is_none,
        )

    @staticmethod
    def _is_staticmethod(node: nodes.FunctionDef) -> bool:
        return node.type == "staticmethod"

    # -- bodies --------------------------------------------------------------

    def _summarize_body(self, node: nodes.FunctionDef, imports: dict[str, str]) -> BodySummary:
        calls: list[CallSite] = []
        assigned: set[str] = set()
        sources: list[tuple[str, str]] = []
        for statement in node.body:
            for call in self._nodes(statement, nodes.Call):
                calls.append(self._call_site(call, imports))
            for target in self._nodes(statement, nodes.AssignAttr):
                if isinstance(target.expr, nodes.Name) and target.expr.name == "self":
                    assigned.add(target.attrname)
            for assign in self._nodes(statement, nodes.Assign):
                field = self._self_field(assign.targets[0]) if len(assign.targets) == 1 else None
                if field and isinstance(assign.value, nodes.Name):
                    sources.append((field, assign.value.name))
            for assign in self._nodes(statement, nodes.AnnAssign):
                field = self._self_field(assign.target)
                if field and isinstance(assign.value, nodes.Name):
                    sources.append((field, assign.value.name))
        calls.sort(key=lambda site: site.line)
        return BodySummary(
            call_sites=tuple(calls),
            assigned_fields=frozenset(assigned),
            field_sources=tuple(sources),
        )

    @staticmethod
    def _nodes(statement: nodes.NodeNG, klass: type) -> list:
        """Nodes of klass in statement, not descending into nested scopes."""
        if isinstance(statement, _SKIP_SCOPES):
            return []
        return list(statement.nodes_of_class(klass, skip_klass=_SKIP_SCOPES))

    @staticmethod
    def _self_field(target: nodes.NodeNG) -> Optional[str]:
        if isinstance(target, nodes.AssignAttr) and isinstance(target.expr, nodes.Name):
            if target.expr.name == "self":
                return target.attrname
        return None

    @staticmethod
    def _call_site(call: nodes.Call, imports: dict[str, str]) -> CallSite:
        func = call.func
        line = call.lineno or 0
        if isinstance(func, nodes.Name):
            symbol = imports.get(func.name, func.name)
            kind = CallKind.NEW if func.name[:1].isupper() else CallKind.FUNCTION
            return CallSite(symbol, kind, line)
        if isinstance(func, nodes.Attribute):
            root = func.expr
            while isinstance(root, nodes.Attribute):
                root = root.expr
            text = func.as_string()
            if isinstance(root, nodes.Name) and root.name in imports:
                qualified = imports[root.name] + text[len(root.name):]
                kind = CallKind.NEW if func.attrname[:1].isupper() else CallKind.FUNCTION
                return CallSite(qualified, kind, line)
            return CallSite(text, CallKind.METHOD, line)
        return CallSite(func.as_string(), CallKind.FUNCTION, line)
