# sparrow_obj/importers/obj.py
from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional

from sparrow_obj.errors import LoadError
from sparrow_obj.importers.base import AssetImporter
from sparrow_obj.importers.materials import MaterialTranslator
from sparrow_obj.importers.meshes import MeshAdapter
from sparrow_obj.importers.obj_parser import ObjParseError, ObjParser
from sparrow_obj.importers.records import RawModel
from sparrow_obj.scene.types import Entity, Material
from sparrow_obj.settings import ImportSettings

logger = logging.getLogger(__name__)


class ObjImporter(AssetImporter):
    """
    Loads the entities of an OBJ file together with the materials of the
    MTL libraries it references.

    Loading is all-or-nothing: the first failure raises and nothing that was
    converted so far is returned.
    """

    def __init__(self, settings: Optional[ImportSettings] = None) -> None:
        self.settings = settings or ImportSettings()
        self._parser = ObjParser(self.settings.default_object_name)
        self._meshes = MeshAdapter()
        self._materials = MaterialTranslator()

    def import_file(self, path: Path) -> List[Entity]:
        path = Path(path)
        try:
            models, raw_materials = self._parser.parse(path)
        except (ObjParseError, OSError, UnicodeDecodeError) as e:
            raise LoadError(f"Failed to parse OBJ {path}: {e}") from e

        materials = [self._materials.translate(m) for m in raw_materials]
        entities = self._convert_models(models, materials)

        logger.info(
            "Loaded %d entities and %d materials from %s",
            len(entities),
            len(materials),
            path,
        )
        return entities

    def _convert_models(
        self, models: List[RawModel], materials: List[Material]
    ) -> List[Entity]:
        # Shared by every model that does not select a material.
        no_material = Material(name=self.settings.default_material_name)

        entities = []
        for model in models:
            material = no_material
            if model.mesh.material_id is not None:
                material = materials[model.mesh.material_id]
            mesh = self._meshes.adapt(model.mesh, model.name)

            logger.debug(
                "  > %s: %d vertices, %d triangles, material '%s'",
                model.name,
                mesh.vertex_count,
                mesh.triangle_count,
                material.name,
            )
            entities.append(Entity(name=model.name, mesh=mesh, material=material))

        return entities


def load(path: Path | str) -> List[Entity]:
    """Load the entities stored in the OBJ file at `path`."""
    return ObjImporter().import_file(Path(path))
