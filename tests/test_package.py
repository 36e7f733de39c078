"""Import checks for the raylight package.

Tests cover:
- Every module imports
- Modules defining Taichi structs, funcs or kernels keep their annotations
  as real types rather than postponed strings
"""

import __future__
import importlib

import pytest

MODULES = [
    "raylight",
    "raylight.core",
    "raylight.core.color",
    "raylight.core.interval",
    "raylight.core.random",
    "raylight.core.ray",
    "raylight.core.vector",
    "raylight.materials",
    "raylight.materials.dielectric",
    "raylight.materials.lambertian",
    "raylight.materials.material",
    "raylight.materials.metal",
    "raylight.materials.scatter",
    "raylight.geometry",
    "raylight.geometry.intersection",
    "raylight.geometry.shape",
    "raylight.geometry.sphere",
    "raylight.scene",
    "raylight.scene.demo",
    "raylight.scene.scene",
    "raylight.camera",
    "raylight.camera.camera",
    "raylight.config",
    "raylight.output",
    "raylight.output.image",
]

# Modules whose annotations Taichi reads at definition time
TAICHI_MODULES = [
    "raylight.core.interval",
    "raylight.core.random",
    "raylight.core.ray",
    "raylight.materials.dielectric",
    "raylight.materials.lambertian",
    "raylight.materials.material",
    "raylight.materials.metal",
    "raylight.materials.scatter",
    "raylight.geometry.intersection",
    "raylight.geometry.shape",
    "raylight.geometry.sphere",
    "raylight.scene.scene",
    "raylight.camera.camera",
]


class TestImports:
    """Tests for importing the package."""

    @pytest.mark.parametrize("name", MODULES)
    def test_module_imports(self, name):
        assert importlib.import_module(name) is not None

    @pytest.mark.parametrize("name", TAICHI_MODULES)
    def test_annotations_not_postponed(self, name):
        module = importlib.import_module(name)
        assert getattr(module, "annotations", None) is not __future__.annotations

    def test_material_struct_fields_are_types(self):
        from raylight.materials.material import MaterialInfo

        hints = MaterialInfo.__dataclass_fields__
        assert not any(isinstance(f.type, str) for f in hints.values())
