"""Exceptions raised by buildmodel."""

from __future__ import annotations


class BuildModelError(Exception):
    """Base class for all buildmodel errors."""


class MalformedHostError(BuildModelError):
    """The host handed over a structure the model cannot be built from."""


class SnapshotError(BuildModelError):
    """A build snapshot or project description could not be loaded."""
