"""Target-platform compilation contexts."""

from dataclasses import dataclass, field

DEFAULT_DOCUMENTED_VISIBILITIES = frozenset({"public", "protected"})


@dataclass(frozen=True)
class SourceSet:
    """A source set such as ``commonMain`` or ``jvmMain``."""

    name: str
    platform: str = "jvm"
    documented_visibilities: frozenset[str] = field(
        default=DEFAULT_DOCUMENTED_VISIBILITIES
    )

    def __str__(self) -> str:
        return self.name
