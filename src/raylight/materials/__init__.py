"""Materials module for light scattering models.

Components:
    material: Material tags, host-side MaterialInfo values and factories,
        and the kernel-side Material struct
    lambertian: Ideal diffuse reflection
    metal: Specular reflection with optional fuzz
    dielectric: Glass-like refraction with Schlick reflectance
    scatter: Single dispatch over the material kind (import directly)

Every model returns (direction, attenuation, did_scatter, state), threading
the caller's random stream through.
"""

from .dielectric import scatter_dielectric, schlick_reflectance
from .lambertian import scatter_lambertian
from .material import (
    Material,
    MaterialInfo,
    MaterialKind,
    absorbing,
    dielectric,
    lambertian,
    metal,
)
from .metal import scatter_metal

# Note: scatter is NOT imported here to avoid a circular import with
# raylight.geometry. Use raylight.materials.scatter directly.

__all__ = [
    "Material",
    "MaterialInfo",
    "MaterialKind",
    "lambertian",
    "metal",
    "dielectric",
    "absorbing",
    "scatter_lambertian",
    "scatter_metal",
    "scatter_dielectric",
    "schlick_reflectance",
]
