"""
Load and save scenes as Wavefront OBJ/MTL.

    entities = sparrow_obj.load("scene/cube.obj")
    sparrow_obj.save(entities, "out/cube.obj", "out/cube.mtl")
"""

from sparrow_obj.errors import (
    AssetError,
    AssetIOError,
    InvalidDataError,
    LoadError,
    MissingNormalsError,
    MissingPositionsError,
)
from sparrow_obj.exporters import ObjExporter, save
from sparrow_obj.importers import ObjImporter, load
from sparrow_obj.paths import resolve
from sparrow_obj.scene import (
    Entity,
    MapSlot,
    Material,
    MaterialBuilder,
    MaterialRegistry,
    Mesh,
)
from sparrow_obj.settings import ExportSettings, ImportSettings

__all__ = [
    "AssetError",
    "AssetIOError",
    "Entity",
    "ExportSettings",
    "ImportSettings",
    "InvalidDataError",
    "LoadError",
    "MapSlot",
    "Material",
    "MaterialBuilder",
    "MaterialRegistry",
    "Mesh",
    "MissingNormalsError",
    "MissingPositionsError",
    "ObjExporter",
    "ObjImporter",
    "load",
    "resolve",
    "save",
]
