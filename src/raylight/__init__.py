"""raylight: a Taichi-accelerated recursive ray tracer.

The package renders scenes of spheres with Lambertian, metal and dielectric
materials by casting jittered camera rays, following scattered rays up to a
fixed bounce budget, and averaging the results per pixel.

Subpackages:
    core: Host-side vector algebra, device-side ray math, intervals, and
        explicit random streams
    geometry: Intersection records and the sphere primitive
    materials: Material tags, values, and scattering models
    scene: Shape storage and nearest-hit search, demo scenes
    camera: Viewport setup and the row-parallel render loop
    output: Display mapping and image file export
    config: Taichi runtime setup and plain render settings
"""

__version__ = "0.1.0"
