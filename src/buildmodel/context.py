"""Per-invocation state threaded through one model build."""

from __future__ import annotations

from dataclasses import dataclass, field

from buildmodel.config import BuildModelConfig
from buildmodel.describers import DefaultDescriber
from buildmodel.host import CapabilityDescriber
from buildmodel.model import Diagnostics, TaskCache


@dataclass
class BuildContext:
    """Everything one model build reads or accumulates besides the host itself.

    Create one per invocation; never share an instance between concurrent builds.
    """

    config: BuildModelConfig = field(default_factory=BuildModelConfig)
    describer: CapabilityDescriber | None = None
    tasks: TaskCache = field(default_factory=TaskCache)
    diagnostics: Diagnostics = field(default_factory=Diagnostics)

    def __post_init__(self) -> None:
        if self.describer is None:
            self.describer = DefaultDescriber(source_roots=self.config.source_roots)
