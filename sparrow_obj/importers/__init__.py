from sparrow_obj.importers.base import AssetImporter
from sparrow_obj.importers.materials import MAP_ALIASES, MaterialTranslator
from sparrow_obj.importers.meshes import MeshAdapter
from sparrow_obj.importers.obj import ObjImporter, load
from sparrow_obj.importers.obj_parser import MtlParser, ObjParseError, ObjParser

__all__ = [
    "AssetImporter",
    "MAP_ALIASES",
    "MaterialTranslator",
    "MeshAdapter",
    "MtlParser",
    "ObjImporter",
    "ObjParseError",
    "ObjParser",
    "load",
]
