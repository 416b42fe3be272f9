"""Describe the methods and fields that project extensions expose."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from buildmodel.context import BuildContext
from buildmodel.host import CapabilityDescriber, ExtensionSchema, MemberInfo
from buildmodel.model import CapabilityClosure, FieldDescriptor, MethodDescriptor

logger = logging.getLogger(__name__)


def is_deprecated(member: MemberInfo) -> bool:
    return any("Deprecated" in annotation for annotation in member.annotations)


def managed_property_name(member: MemberInfo) -> str | None:
    """Return the property name for a public abstract ``getX()`` method, else None.

    See https://docs.gradle.org/current/userguide/custom_gradle_types.html#managed_properties
    """
    name = member.name
    if (
        name.startswith("get")
        and len(name) > 3
        and not member.parameter_types
        and member.is_public
        and member.is_abstract
    ):
        return name[3].lower() + name[4:]
    return None


def extract_closures(
    schemas: Iterable[ExtensionSchema], context: BuildContext
) -> list[CapabilityClosure]:
    """Return one closure per extension schema, in schema order."""
    describer: CapabilityDescriber = context.describer
    closures: list[CapabilityClosure] = []

    for schema in schemas:
        description = describer.describe(schema.public_type)
        if description is None:
            context.diagnostics.undescribed_extensions += 1
            logger.warning(
                "Could not describe extension %r (type %r)",
                schema.name,
                schema.public_type,
            )
            closures.append(CapabilityClosure(schema.name))
            continue

        methods: list[MethodDescriptor] = []
        fields: list[FieldDescriptor] = []
        for method in description.methods:
            if not method.is_public:
                continue
            deprecated = is_deprecated(method)
            methods.append(
                MethodDescriptor(method.name, list(method.parameter_types), deprecated)
            )
            prop = managed_property_name(method)
            if prop is not None:
                fields.append(FieldDescriptor(prop, deprecated))
        for declared in description.fields:
            if declared.is_public:
                fields.append(FieldDescriptor(declared.name, is_deprecated(declared)))

        closures.append(CapabilityClosure(schema.name, methods, fields))

    return closures
