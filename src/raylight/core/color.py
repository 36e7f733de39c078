"""Linear RGB color values.

Colors share the vector arithmetic contract (component-wise between colors,
broadcast with scalars) but never mix with vectors. Values are unbounded;
mapping to a displayable range happens in :mod:`raylight.output.image`.
"""

from __future__ import annotations

from raylight.core.vector import Components


class Color(Components):
    """An RGB radiance value."""

    __slots__ = ()

    def __init__(self, r: float, g: float, b: float) -> None:
        super().__init__(r, g, b)

    @classmethod
    def black(cls) -> Color:
        return cls(0.0, 0.0, 0.0)

    @classmethod
    def white(cls) -> Color:
        return cls(1.0, 1.0, 1.0)

    @property
    def r(self) -> float:
        return self[0]

    @property
    def g(self) -> float:
        return self[1]

    @property
    def b(self) -> float:
        return self[2]
