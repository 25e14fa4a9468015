"""Option mask selecting which comparison categories run."""

from __future__ import annotations

from dataclasses import dataclass, fields, replace
from typing import ClassVar, Iterable


@dataclass(frozen=True)
class DiffOptions:
    """
    Independent flags gating each comparison category.

    Identifier comparison is not represented here: it always runs.
    """
    versioning: bool = False
    descriptions: bool = False
    service: bool = False
    schemas: bool = False
    resources: bool = False

    ALL: ClassVar["DiffOptions"]
    NONE: ClassVar["DiffOptions"]

    @classmethod
    def names(cls) -> tuple[str, ...]:
        return tuple(f.name for f in fields(cls))

    @classmethod
    def from_names(cls, names: Iterable[str]) -> DiffOptions:
        """Build a mask with only the named flags set."""
        return cls().with_(*names)

    def with_(self, *names: str) -> DiffOptions:
        """Return a copy with the named flags set."""
        self._check_names(names)
        return replace(self, **{name: True for name in names})

    def without(self, *names: str) -> DiffOptions:
        """Return a copy with the named flags cleared."""
        self._check_names(names)
        return replace(self, **{name: False for name in names})

    def has(self, name: str) -> bool:
        self._check_names((name,))
        return getattr(self, name)

    def enabled(self) -> list[str]:
        return [name for name in self.names() if getattr(self, name)]

    def _check_names(self, names: Iterable[str]):
        known = self.names()
        for name in names:
            if name not in known:
                raise ValueError(
                    f"Unknown diff option '{name}', expected one of: {', '.join(known)}"
                )


DiffOptions.ALL = DiffOptions(
    versioning=True,
    descriptions=True,
    service=True,
    schemas=True,
    resources=True,
)
DiffOptions.NONE = DiffOptions()
