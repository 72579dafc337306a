"""Bound Registry for the Analysis Engine.

The registry is the canonical, ordered list of lower-bound pruning strategies.
A bound's position in the registry is its index in every raw metric array, so
the registry is the only place where positional data gets a name.
"""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from dataclasses import dataclass
from typing import Final


@dataclass(frozen=True, slots=True)
class BoundDefinition:
    """A single registered bound.

    Attributes:
        index: Position of the bound in raw metric arrays.
        name: Stable display name (also used as the bound key).
        color: Hex color used by the presentation layer.
    """

    index: int
    name: str
    color: str


@dataclass(frozen=True, slots=True)
class BoundRegistry:
    """Ordered, immutable collection of bound definitions."""

    bounds: tuple[BoundDefinition, ...]

    @classmethod
    def from_names(
        cls,
        names: Sequence[str],
        *,
        colors: Sequence[str] | None = None,
    ) -> "BoundRegistry":
        """Build a registry from bound names in canonical order.

        Args:
            names: Bound names; position becomes the bound index.
            colors: Optional colors aligned to `names`. Missing colors fall back
                to the default palette, cycling when it runs out.

        Returns:
            A BoundRegistry.

        Raises:
            ValueError: If no names are given or a name is repeated.
        """

        if not names:
            raise ValueError("A bound registry needs at least one bound.")
        if len(set(names)) != len(names):
            raise ValueError(f"Bound names must be unique: {list(names)!r}")

        palette = tuple(colors) if colors else ()
        bounds = []
        for index, name in enumerate(names):
            if index < len(palette):
                color = palette[index]
            else:
                color = DEFAULT_COLORS[index % len(DEFAULT_COLORS)]
            bounds.append(BoundDefinition(index=index, name=name, color=color))
        return cls(bounds=tuple(bounds))

    def __len__(self) -> int:
        return len(self.bounds)

    def __iter__(self) -> Iterator[BoundDefinition]:
        return iter(self.bounds)

    @property
    def names(self) -> tuple[str, ...]:
        """Bound names in registry order."""

        return tuple(bound.name for bound in self.bounds)

    @property
    def colors(self) -> tuple[str, ...]:
        """Bound colors in registry order."""

        return tuple(bound.color for bound in self.bounds)

    def get(self, name: str) -> BoundDefinition | None:
        """Return the bound registered under `name`, if any."""

        for bound in self.bounds:
            if bound.name == name:
                return bound
        return None


DEFAULT_BOUND_NAMES: Final[tuple[str, ...]] = (
    "None",
    "Keogh",
    "Improved",
    "Enhanced(5)",
    "Petitjean",
    "Webb",
)

DEFAULT_COLORS: Final[tuple[str, ...]] = (
    "#667eea",
    "#764ba2",
    "#f093fb",
    "#4facfe",
    "#43e97b",
    "#fa709a",
)

DEFAULT_REGISTRY: Final[BoundRegistry] = BoundRegistry.from_names(
    DEFAULT_BOUND_NAMES,
    colors=DEFAULT_COLORS,
)
