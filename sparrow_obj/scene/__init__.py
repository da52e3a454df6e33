from sparrow_obj.scene.registry import MaterialRegistry
from sparrow_obj.scene.types import (
    Entity,
    MapSlot,
    Material,
    MaterialBuilder,
    Mesh,
)

__all__ = [
    "Entity",
    "MapSlot",
    "Material",
    "MaterialBuilder",
    "MaterialRegistry",
    "Mesh",
]
