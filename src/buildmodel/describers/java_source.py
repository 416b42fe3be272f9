"""Describe extension types from their Java source using javalang."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path
from typing import Any

from buildmodel.host import CapabilityDescription, MemberInfo

logger = logging.getLogger(__name__)


def _format_param_type(param) -> str:
    """Format a parameter type to a simple string."""
    if param.type is None:
        return "?"
    name = param.type.name
    if param.type.dimensions:
        name += "[]" * len(param.type.dimensions)
    if getattr(param, "varargs", False):
        name += "[]"
    return name


def _annotation_names(node) -> list[str]:
    return [a.name for a in (node.annotations or [])]


def _method_modifiers(method, in_interface: bool) -> frozenset[str]:
    modifiers = set(method.modifiers or ())
    if in_interface:
        # Interface methods are implicitly public; only body-less ones are abstract.
        if "private" not in modifiers:
            modifiers.add("public")
        if method.body is None and not modifiers & {"default", "static", "private"}:
            modifiers.add("abstract")
    return frozenset(modifiers)


def _type_members(decl) -> list:
    import javalang

    if isinstance(decl, javalang.tree.EnumDeclaration):
        return list(decl.body.declarations) if decl.body else []
    return list(decl.body or [])


def _find_nested(decl, names: list[str]):
    import javalang

    for name in names:
        for member in _type_members(decl):
            if (
                isinstance(
                    member,
                    (
                        javalang.tree.ClassDeclaration,
                        javalang.tree.InterfaceDeclaration,
                        javalang.tree.EnumDeclaration,
                    ),
                )
                and member.name == name
            ):
                decl = member
                break
        else:
            return None
    return decl


def describe_declaration(decl) -> CapabilityDescription:
    """Return the public methods and fields declared directly on *decl*."""
    import javalang

    in_interface = isinstance(decl, javalang.tree.InterfaceDeclaration)
    methods: list[MemberInfo] = []
    fields: list[MemberInfo] = []

    for member in _type_members(decl):
        if isinstance(member, javalang.tree.MethodDeclaration):
            modifiers = _method_modifiers(member, in_interface)
            if "public" not in modifiers:
                continue
            methods.append(
                MemberInfo(
                    name=member.name,
                    parameter_types=[
                        _format_param_type(p) for p in member.parameters or []
                    ],
                    modifiers=modifiers,
                    annotations=_annotation_names(member),
                )
            )
        elif isinstance(member, javalang.tree.FieldDeclaration):
            modifiers = set(member.modifiers or ())
            if in_interface:
                modifiers |= {"public", "static", "final"}
            if "public" not in modifiers:
                continue
            for declarator in member.declarators:
                fields.append(
                    MemberInfo(
                        name=declarator.name,
                        modifiers=frozenset(modifiers),
                        annotations=_annotation_names(member),
                    )
                )

    return CapabilityDescription(methods=methods, fields=fields)


class JavaSourceDescriber:
    """Find ``com.example.Type`` (or ``Outer$Inner``) under the source roots and parse it."""

    def __init__(self, source_roots: Iterable[Path] = ()) -> None:
        self.source_roots = [Path(r) for r in source_roots]

    def describe(self, public_type: Any) -> CapabilityDescription | None:
        if not isinstance(public_type, str) or not public_type:
            return None

        try:
            import javalang
        except ImportError:
            logger.warning(
                "javalang not installed; cannot describe %s. "
                "Install with: pip install javalang",
                public_type,
            )
            return None

        located = self._locate(public_type)
        if located is None:
            logger.debug("No source for %s under %s", public_type, self.source_roots)
            return None
        java_file, nested = located

        try:
            source = java_file.read_text(encoding="utf-8", errors="replace")
        except OSError as e:
            logger.warning("Could not read %s: %s", java_file, e)
            return None

        try:
            tree = javalang.parse.parse(source)
        except (javalang.parser.JavaSyntaxError, javalang.tokenizer.LexerError) as e:
            logger.warning("Could not parse %s: %s", java_file, e)
            return None

        top_name = java_file.stem
        for type_decl in tree.types:
            if type_decl is not None and type_decl.name == top_name:
                decl = _find_nested(type_decl, nested)
                if decl is None:
                    return None
                return describe_declaration(decl)
        return None

    def _locate(self, type_name: str) -> tuple[Path, list[str]] | None:
        parts = type_name.replace("$", ".").split(".")
        for root in self.source_roots:
            # Longest prefix that names a file wins; the rest are nested types.
            for i in range(len(parts), 0, -1):
                candidate = root.joinpath(*parts[: i - 1], parts[i - 1] + ".java")
                if candidate.is_file():
                    return candidate, parts[i:]
        return None
