"""Material dispatch for the scattering step of the radiance estimator.

Kept out of ``raylight.materials.__init__`` because it depends on the
geometry package, which in turn depends on the material struct. Import it
directly as ``raylight.materials.scatter``.
"""

import taichi as ti
import taichi.math as tm

from raylight.core.ray import Ray
from raylight.geometry.intersection import Intersection
from raylight.materials.dielectric import scatter_dielectric
from raylight.materials.lambertian import scatter_lambertian
from raylight.materials.material import Material, MaterialKind
from raylight.materials.metal import scatter_metal

# Type alias for 3D vectors
vec3 = tm.vec3


@ti.func
def scatter(material: Material, ray: Ray, hit: Intersection, state: ti.u32):
    """Scatter an incident ray off the surface described by ``hit``.

    Args:
        material: The material at the hit point.
        ray: The incident ray.
        hit: The intersection record (hit == 1).
        state: The caller's random stream.

    Returns:
        A tuple (scattered, attenuation, did_scatter, state) where scattered
        is a Ray leaving hit.point. did_scatter == 0 means the ray was
        absorbed and scattered/attenuation must not be used.
    """
    direction = vec3(0.0, 0.0, 0.0)
    attenuation = vec3(0.0, 0.0, 0.0)
    did_scatter = 0
    new_state = state

    if material.kind == int(MaterialKind.LAMBERTIAN):
        direction, attenuation, did_scatter, new_state = scatter_lambertian(
            material.albedo, hit.normal, state
        )
    elif material.kind == int(MaterialKind.METAL):
        direction, attenuation, did_scatter, new_state = scatter_metal(
            material.albedo, material.fuzz, ray.direction, hit.normal, state
        )
    elif material.kind == int(MaterialKind.DIELECTRIC):
        direction, attenuation, did_scatter, new_state = scatter_dielectric(
            material.ior, ray.direction, hit.normal, state
        )

    return Ray(origin=hit.point, direction=direction), attenuation, did_scatter, new_state
