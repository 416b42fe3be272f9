"""Describe extension types that are Python classes."""

from __future__ import annotations

import inspect
from typing import Any

from buildmodel.host import CapabilityDescription, MemberInfo

_DEPRECATED = "Deprecated"


def _markers(obj: Any) -> list[str]:
    # PEP 702: @warnings.deprecated / @typing_extensions.deprecated set __deprecated__
    if getattr(obj, "__deprecated__", None) is not None:
        return [_DEPRECATED]
    return []


def _type_name(annotation: Any) -> str:
    if annotation is inspect.Parameter.empty:
        return "object"
    if isinstance(annotation, str):
        return annotation
    if inspect.isclass(annotation):
        return annotation.__qualname__
    return str(annotation)


def _describe_method(name: str, member: Any, static: Any) -> MemberInfo:
    modifiers = {"public"}
    if getattr(member, "__isabstractmethod__", False):
        modifiers.add("abstract")
    if isinstance(static, staticmethod):
        modifiers.add("static")

    try:
        params = list(inspect.signature(member).parameters.values())
    except (TypeError, ValueError):
        params = []
    # Unbound instance methods still carry self; bound class methods do not.
    unbound = inspect.ismethoddescriptor(member) or (
        inspect.isfunction(member) and not isinstance(static, staticmethod)
    )
    if params and unbound:
        params = params[1:]

    return MemberInfo(
        name=name,
        parameter_types=[_type_name(p.annotation) for p in params],
        modifiers=frozenset(modifiers),
        annotations=_markers(member),
    )


class PythonTypeDescriber:
    """Introspect a class: public routines are methods, public data are fields."""

    def describe(self, public_type: Any) -> CapabilityDescription | None:
        if not inspect.isclass(public_type):
            return None

        methods: list[MemberInfo] = []
        fields: list[MemberInfo] = []
        seen_fields: set[str] = set()

        def add_field(name: str, annotations: list[str]) -> None:
            if name not in seen_fields:
                seen_fields.add(name)
                fields.append(MemberInfo(name=name, annotations=annotations))

        for cls in reversed(public_type.__mro__):
            if cls is object:
                continue
            for name in inspect.get_annotations(cls):
                if not name.startswith("_"):
                    add_field(name, [])

        for name, member in inspect.getmembers(public_type):
            if name.startswith("_"):
                continue
            static = inspect.getattr_static(public_type, name)
            if isinstance(static, property):
                add_field(name, _markers(static.fget))
            elif inspect.isroutine(member):
                methods.append(_describe_method(name, member, static))
            elif not inspect.isclass(member):
                add_field(name, [])

        return CapabilityDescription(methods=methods, fields=fields)
