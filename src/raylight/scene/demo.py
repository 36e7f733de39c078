"""Ready-made scenes for examples and tests.

Both scenes sit a large "ground" sphere under objects placed around
(0, 0, -1), so a camera at the origin looking down -z sees them.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from raylight.scene.demo import create_three_spheres_scene
    >>> scene = create_three_spheres_scene()
    >>> len(scene)
    4
"""

from raylight.core.color import Color
from raylight.core.vector import Point
from raylight.materials.material import MaterialInfo, dielectric, lambertian, metal
from raylight.scene.scene import Scene

# Ground sphere shared by both scenes
GROUND_CENTER = Point(0.0, -100.5, -1.0)
GROUND_RADIUS = 100.0


def create_three_spheres_scene() -> Scene:
    """Ground plus a diffuse, a glass and a metal sphere side by side.

    Shapes in insertion order:
        0. Ground: yellow-green Lambertian, radius 100
        1. Center (0, 0, -1): blue Lambertian, radius 0.5
        2. Left (-1, 0, -1): glass (ior 1.5), radius 0.5
        3. Right (1, 0, -1): gold metal (fuzz 0), radius 0.5
    """
    scene = Scene()
    scene.add_sphere(GROUND_CENTER, GROUND_RADIUS, lambertian(Color(0.8, 0.8, 0.0)))
    scene.add_sphere(Point(0.0, 0.0, -1.0), 0.5, lambertian(Color(0.1, 0.2, 0.5)))
    scene.add_sphere(Point(-1.0, 0.0, -1.0), 0.5, dielectric(1.5))
    scene.add_sphere(Point(1.0, 0.0, -1.0), 0.5, metal(Color(0.8, 0.6, 0.2), 0.0))
    return scene


def create_two_spheres_scene(material: MaterialInfo | None = None) -> Scene:
    """A small sphere resting on the ground sphere.

    Args:
        material: Material for both spheres. Defaults to a mid-grey
            Lambertian.

    Returns:
        A scene with the small sphere (center (0, 0, -1), radius 0.5) at
        index 0 and the ground at index 1.
    """
    if material is None:
        material = lambertian(Color(0.5, 0.5, 0.5))
    scene = Scene()
    scene.add_sphere(Point(0.0, 0.0, -1.0), 0.5, material)
    scene.add_sphere(GROUND_CENTER, GROUND_RADIUS, material)
    return scene
