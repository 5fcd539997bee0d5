"""Stable symbol identifiers shared by every phase of the pipeline."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Callable:
    """Callable part of a SID: name plus rendered parameter types."""

    name: str
    params: tuple[str, ...] = ()
    receiver: str | None = None

    def signature(self) -> str:
        return f"{self.name}({','.join(self.params)})"


@dataclass(frozen=True)
class Sid:
    """Identifies a package, class-like, member or enum entry.

    ``class_names`` is the dotted chain of enclosing class names
    (``Outer.Inner``); ``callable`` is set for functions and properties.
    """

    package: str = ""
    class_names: str | None = None
    callable: Callable | None = None

    @property
    def full_name(self) -> str:
        return ".".join(p for p in (self.package, self.class_names) if p)

    @property
    def parent(self) -> Sid:
        """SID one level up: member -> class, nested -> outer, class -> package."""
        if self.callable is not None:
            return Sid(self.package, self.class_names)
        if self.class_names:
            outer, _, _ = self.class_names.rpartition(".")
            return Sid(self.package, outer or None)
        return self

    @property
    def package_sid(self) -> Sid:
        return Sid(self.package)

    def with_class_names(self, class_names: str | None) -> Sid:
        return Sid(self.package, class_names, self.callable)

    def __str__(self) -> str:
        text = self.full_name or "[root]"
        if self.callable is not None:
            text += "/" + self.callable.signature()
            if self.callable.receiver:
                text += "@" + self.callable.receiver
        return text
