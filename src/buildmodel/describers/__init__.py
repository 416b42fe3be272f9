"""Capability describers: turn extension types into member lists."""

from __future__ import annotations

import inspect
from collections.abc import Iterable
from pathlib import Path
from typing import Any

from buildmodel.describers.java_source import JavaSourceDescriber
from buildmodel.describers.python_type import PythonTypeDescriber
from buildmodel.host import CapabilityDescription

__all__ = [
    "DefaultDescriber",
    "JavaSourceDescriber",
    "PythonTypeDescriber",
]


class DefaultDescriber:
    """Dispatch on the public type: inline description, Python class, or Java type name."""

    def __init__(self, source_roots: Iterable[Path] = ()) -> None:
        self.python = PythonTypeDescriber()
        self.java = JavaSourceDescriber(source_roots)

    def describe(self, public_type: Any) -> CapabilityDescription | None:
        if isinstance(public_type, CapabilityDescription):
            return public_type
        if inspect.isclass(public_type):
            return self.python.describe(public_type)
        if isinstance(public_type, str):
            return self.java.describe(public_type)
        return None
