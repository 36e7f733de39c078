"""Host-side vector and point types.

These are the values collaborators use to describe scenes and configure the
camera. They are immutable and numpy-backed, and work in any dimension;
only ``cross`` is restricted to three components. Kernel code uses the
``vec3`` helpers in :mod:`raylight.core.ray` instead.

Example:
    >>> from raylight.core.vector import Point, Vector
    >>> a = Vector(1.0, 2.0, 3.0)
    >>> 6.0 / Vector(6.0, 3.0, 2.0) == Vector(1.0, 2.0, 3.0)
    True
    >>> Point(0.0, 0.0, 0.0) + a
    Point(1.0, 2.0, 3.0)
"""

from __future__ import annotations

import math
import operator
from collections.abc import Callable, Iterable, Iterator
from typing import Any

import numpy as np
import numpy.typing as npt

# Machine epsilon of the host storage type
EPSILON = float(np.finfo(np.float64).eps)


def _as_array(values: Iterable[float]) -> npt.NDArray[np.float64]:
    array = np.array(list(values), dtype=np.float64)
    array.setflags(write=False)
    return array


class Components:
    """Immutable tuple of floats with component-wise arithmetic.

    Binary operators accept another value of exactly the same type (applied
    component-wise) or a scalar (broadcast to every component). Scalars may
    appear on either side; ``s / v`` divides ``s`` by each component.
    """

    __slots__ = ("_components",)

    def __init__(self, *components: float) -> None:
        self._components = _as_array(components)

    @classmethod
    def from_iterable(cls, values: Iterable[float]) -> Any:
        """Build a value from any iterable of numbers."""
        instance = cls.__new__(cls)
        instance._components = _as_array(values)
        return instance

    # -------------------------------------------------------------------------
    # Container protocol
    # -------------------------------------------------------------------------

    def __len__(self) -> int:
        return len(self._components)

    def __iter__(self) -> Iterator[float]:
        return (float(c) for c in self._components)

    def __getitem__(self, index: int) -> float:
        return float(self._components[index])

    def to_list(self) -> list[float]:
        """Components as a plain list (for Taichi fields and JSON)."""
        return [float(c) for c in self._components]

    def to_numpy(self) -> npt.NDArray[np.float64]:
        """Components as a read-only numpy array."""
        return self._components

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return bool(np.array_equal(self._components, other._components))

    def __hash__(self) -> int:
        return hash((type(self).__name__, tuple(self._components)))

    def __repr__(self) -> str:
        return f"{type(self).__name__}({', '.join(repr(c) for c in self)})"

    def isclose(self, other: Components, tolerance: float = 1e-9) -> bool:
        """Whether every component is within ``tolerance`` of ``other``."""
        if type(other) is not type(self) or len(other) != len(self):
            return False
        return bool(np.allclose(self._components, other._components, rtol=0.0, atol=tolerance))

    # -------------------------------------------------------------------------
    # Arithmetic
    # -------------------------------------------------------------------------

    def _binary(self, other: object, op: Callable[[Any, Any], Any], reflected: bool = False) -> Any:
        if type(other) is type(self):
            rhs = other._components  # type: ignore[attr-defined]
            if rhs.shape != self._components.shape:
                raise ValueError(
                    f"Dimension mismatch: {len(self)} vs {len(rhs)} components"
                )
        elif isinstance(other, (int, float, np.floating, np.integer)) and not isinstance(other, bool):
            rhs = float(other)
        else:
            return NotImplemented
        lhs = self._components
        result = op(rhs, lhs) if reflected else op(lhs, rhs)
        return type(self).from_iterable(result)

    def __add__(self, other: object) -> Any:
        return self._binary(other, operator.add)

    def __radd__(self, other: object) -> Any:
        return self._binary(other, operator.add, reflected=True)

    def __sub__(self, other: object) -> Any:
        return self._binary(other, operator.sub)

    def __rsub__(self, other: object) -> Any:
        return self._binary(other, operator.sub, reflected=True)

    def __mul__(self, other: object) -> Any:
        return self._binary(other, operator.mul)

    def __rmul__(self, other: object) -> Any:
        return self._binary(other, operator.mul, reflected=True)

    def __truediv__(self, other: object) -> Any:
        with np.errstate(divide="ignore", invalid="ignore"):
            return self._binary(other, operator.truediv)

    def __rtruediv__(self, other: object) -> Any:
        with np.errstate(divide="ignore", invalid="ignore"):
            return self._binary(other, operator.truediv, reflected=True)

    def __neg__(self) -> Any:
        return type(self).from_iterable(-self._components)


class Vector(Components):
    """Free displacement in N-dimensional space."""

    __slots__ = ()

    @classmethod
    def zeros(cls, dimension: int = 3) -> Vector:
        """The zero vector of the given dimension."""
        return cls.from_iterable([0.0] * dimension)

    @classmethod
    def random_unit_vector(cls, rng: np.random.Generator, dimension: int = 3) -> Vector:
        """Random unit vector.

        Components are drawn uniformly from [-1, 1) and the result is
        normalised. This is rejection-free, so the direction distribution is
        only approximately uniform.

        Args:
            rng: The caller-owned generator to draw from.
            dimension: Number of components.

        Returns:
            A vector of unit length.
        """
        return cls.from_iterable(rng.uniform(-1.0, 1.0, size=dimension)).normalize()

    @property
    def x(self) -> float:
        return self[0]

    @property
    def y(self) -> float:
        return self[1]

    @property
    def z(self) -> float:
        return self[2]

    def dot(self, other: Vector) -> float:
        if len(other) != len(self):
            raise ValueError(f"Dimension mismatch: {len(self)} vs {len(other)} components")
        return float(np.dot(self._components, other._components))

    def length_squared(self) -> float:
        return self.dot(self)

    def length(self) -> float:
        return math.sqrt(self.length_squared())

    def normalize(self) -> Vector:
        """Scale to unit length. A zero vector yields NaN components."""
        return self / self.length()

    def cross(self, other: Vector) -> Vector:
        """Right-handed cross product of two 3-dimensional vectors.

        Raises:
            ValueError: If either vector does not have exactly 3 components.
        """
        if len(self) != 3 or len(other) != 3:
            raise ValueError("Cross product is only defined for 3-dimensional vectors")
        a = self._components
        b = other._components
        return Vector(
            a[1] * b[2] - a[2] * b[1],
            a[2] * b[0] - a[0] * b[2],
            a[0] * b[1] - a[1] * b[0],
        )

    def reflect(self, normal: Vector) -> Vector:
        """Mirror about the plane with the given unit normal."""
        return self - normal * 2.0 * self.dot(normal)

    def refract(self, normal: Vector, eta_ratio: float) -> Vector | None:
        """Refract through a surface using Snell's law.

        Both this vector and ``normal`` must be unit length, with the normal
        facing against this vector.

        Args:
            normal: Surface normal facing the incoming side.
            eta_ratio: Ratio of refractive indices (incident over transmitted).

        Returns:
            The refracted direction, or None on total internal reflection.
        """
        cos_i = min(-normal.dot(self), 1.0)
        sin2_t = eta_ratio * eta_ratio * (1.0 - cos_i * cos_i)
        if sin2_t > 1.0:
            return None
        cos_t = math.sqrt(1.0 - sin2_t)
        return self * eta_ratio + normal * (eta_ratio * cos_i - cos_t)

    def near_zero(self, epsilon: float = EPSILON) -> bool:
        """Whether every component is smaller in magnitude than ``epsilon``."""
        return bool(np.all(np.abs(self._components) < epsilon))


class Point:
    """Position in N-dimensional space backed by a :class:`Vector`.

    Only ``Point + Vector``, ``Point - Vector`` and ``Point - Point`` are
    defined; points never add to each other.
    """

    __slots__ = ("_position",)

    def __init__(self, *coordinates: float) -> None:
        self._position = Vector(*coordinates)

    @classmethod
    def from_vector(cls, position: Vector) -> Point:
        point = cls.__new__(cls)
        point._position = position
        return point

    @classmethod
    def origin(cls, dimension: int = 3) -> Point:
        return cls.from_vector(Vector.zeros(dimension))

    @property
    def position(self) -> Vector:
        """Displacement of this point from the origin."""
        return self._position

    @property
    def x(self) -> float:
        return self._position[0]

    @property
    def y(self) -> float:
        return self._position[1]

    @property
    def z(self) -> float:
        return self._position[2]

    def __len__(self) -> int:
        return len(self._position)

    def __iter__(self) -> Iterator[float]:
        return iter(self._position)

    def __getitem__(self, index: int) -> float:
        return self._position[index]

    def to_list(self) -> list[float]:
        return self._position.to_list()

    def __add__(self, other: object) -> Point:
        if isinstance(other, Vector):
            return Point.from_vector(self._position + other)
        return NotImplemented

    def __radd__(self, other: object) -> Point:
        return self.__add__(other)

    def __sub__(self, other: object) -> Any:
        if isinstance(other, Point):
            return self._position - other._position
        if isinstance(other, Vector):
            return Point.from_vector(self._position - other)
        return NotImplemented

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Point):
            return NotImplemented
        return self._position == other._position

    def __hash__(self) -> int:
        return hash(("Point", hash(self._position)))

    def __repr__(self) -> str:
        return f"Point({', '.join(repr(c) for c in self)})"

    def isclose(self, other: Point, tolerance: float = 1e-9) -> bool:
        return self._position.isclose(other._position, tolerance)
