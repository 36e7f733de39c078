"""Material tags, host-side material values and the kernel-side struct.

A material is one of a closed set of variants. On the host it is described by
an immutable :class:`MaterialInfo` built through the factory functions below;
inside kernels the same data travels as a :class:`Material` struct and the
variant is selected by its ``kind`` tag.

Example:
    >>> from raylight.core.color import Color
    >>> from raylight.materials.material import metal
    >>> info = metal(Color(0.8, 0.6, 0.2), fuzz=1.5)
    >>> info.fuzz
    1.0
"""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any

import taichi as ti
import taichi.math as tm

from raylight.core.color import Color

# Type alias for 3D vectors
vec3 = tm.vec3


class MaterialKind(IntEnum):
    """Enumeration of supported material variants.

    Used for material dispatch in :func:`raylight.materials.scatter.scatter`.
    NONE absorbs every ray that hits it.
    """

    NONE = 0
    LAMBERTIAN = 1
    METAL = 2
    DIELECTRIC = 3


@ti.dataclass
class Material:
    """Kernel-side material record.

    Attributes:
        kind: The variant tag (see MaterialKind).
        albedo: Reflectance color for Lambertian and metal.
        fuzz: Perturbation radius in [0, 1] for metal.
        ior: Index of refraction for dielectric.
    """

    kind: ti.i32
    albedo: vec3
    fuzz: ti.f32
    ior: ti.f32


@dataclass(frozen=True)
class MaterialInfo:
    """Host-side description of a material.

    Prefer the factory functions, which validate their arguments.

    Attributes:
        kind: The material variant.
        albedo: Reflectance color (Lambertian and metal only).
        fuzz: Metal fuzz, already clamped into [0, 1].
        ior: Dielectric index of refraction.
    """

    kind: MaterialKind
    albedo: Color = field(default_factory=Color.black)
    fuzz: float = 0.0
    ior: float = 1.0

    def to_dict(self) -> dict[str, Any]:
        """Serialize to a JSON-friendly dictionary."""
        data: dict[str, Any] = {"type": self.kind.name.lower()}
        if self.kind in (MaterialKind.LAMBERTIAN, MaterialKind.METAL):
            data["albedo"] = self.albedo.to_list()
        if self.kind == MaterialKind.METAL:
            data["fuzz"] = self.fuzz
        if self.kind == MaterialKind.DIELECTRIC:
            data["ior"] = self.ior
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "MaterialInfo":
        """Build a material from a dictionary produced by :meth:`to_dict`.

        Raises:
            ValueError: If the material type is unknown or a value is invalid.
        """
        name = str(data.get("type", "")).lower()
        if name == "lambertian":
            return lambertian(Color(*data["albedo"]))
        if name == "metal":
            return metal(Color(*data["albedo"]), float(data.get("fuzz", 0.0)))
        if name == "dielectric":
            return dielectric(float(data["ior"]))
        if name in ("none", "absorbing"):
            return absorbing()
        raise ValueError(f"Unknown material type: {data.get('type')!r}")


def _validate_albedo(albedo: Color) -> None:
    if len(albedo) != 3:
        raise ValueError(f"Albedo must have 3 components, got {len(albedo)}")
    for i, component in enumerate(albedo):
        if component < 0.0 or component > 1.0:
            raise ValueError(
                f"Albedo component {i} = {component} is outside [0, 1]"
            )


def lambertian(albedo: Color) -> MaterialInfo:
    """Ideal diffuse material.

    Raises:
        ValueError: If any albedo component is outside [0, 1].
    """
    _validate_albedo(albedo)
    return MaterialInfo(kind=MaterialKind.LAMBERTIAN, albedo=albedo)


def metal(albedo: Color, fuzz: float = 0.0) -> MaterialInfo:
    """Reflective material. ``fuzz`` is clamped into [0, 1].

    Raises:
        ValueError: If any albedo component is outside [0, 1].
    """
    _validate_albedo(albedo)
    return MaterialInfo(
        kind=MaterialKind.METAL,
        albedo=albedo,
        fuzz=min(max(float(fuzz), 0.0), 1.0),
    )


def dielectric(ior: float) -> MaterialInfo:
    """Transparent refractive material such as glass (ior 1.5).

    Raises:
        ValueError: If ``ior`` is not positive.
    """
    if not ior > 0.0:
        raise ValueError(f"Index of refraction must be positive, got {ior}")
    return MaterialInfo(kind=MaterialKind.DIELECTRIC, ior=float(ior))


def absorbing() -> MaterialInfo:
    """Material that never scatters."""
    return MaterialInfo(kind=MaterialKind.NONE)
