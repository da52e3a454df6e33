# sparrow_obj/exporters/obj.py
from __future__ import annotations

import logging
from contextlib import ExitStack
from pathlib import Path
from typing import Dict, Iterable, Optional, TextIO, Tuple

import numpy as np

from sparrow_obj.errors import AssetIOError, MissingPositionsError
from sparrow_obj.importers.materials import MAP_ALIASES
from sparrow_obj.paths import relative_to
from sparrow_obj.scene.registry import MaterialRegistry
from sparrow_obj.scene.types import Entity, MapSlot, Material, Mesh
from sparrow_obj.settings import ExportSettings

logger = logging.getLogger(__name__)

# MTL key written for each populated slot, in output order.
MTL_KEYS: Dict[MapSlot, str] = {
    MapSlot.AMBIENT: "map_Ka",
    MapSlot.DIFFUSE: "map_Kd",
    MapSlot.SPECULAR: "map_Ks",
    **{slot: aliases[0] for slot, aliases in MAP_ALIASES.items()},
}

# Keyed by (positions, texcoords, normals) presence.
FACE_FORMATS: Dict[Tuple[bool, bool, bool], str] = {
    (True, True, True): "{p}/{t}/{n}",
    (True, True, False): "{p}/{t}",
    (True, False, True): "{p}//{n}",
    (True, False, False): "{p}",
}


def face_format(has_positions: bool, has_texcoords: bool, has_normals: bool) -> str:
    """Per-corner template of an `f` line for a mesh with these attributes."""
    if not has_positions:
        raise MissingPositionsError(
            "OBJ cannot contain a mesh that does not define positions"
        )
    return FACE_FORMATS[(True, has_texcoords, has_normals)]


def _fmt(value: np.floating) -> str:
    return np.format_float_positional(value, trim="-")


class ObjExporter:
    """
    Writes entities to an OBJ file and, optionally, a companion MTL file.

    Output is streamed one entity at a time. A failure aborts immediately and
    leaves whatever was already written on disk.
    """

    def __init__(self, settings: Optional[ExportSettings] = None) -> None:
        self.settings = settings or ExportSettings()

    def export(
        self,
        entities: Iterable[Entity],
        obj_path: Optional[Path | str] = None,
        mtl_path: Optional[Path | str] = None,
    ) -> None:
        """
        Raises:
            AssetIOError: if an output file cannot be created or written.
            InvalidDataError: if the MTL file or a texture cannot be
                referenced relative to the OBJ file's directory.
            MissingPositionsError: if an entity's mesh has no positions.
        """
        try:
            with ExitStack() as stack:
                mtl: Optional[TextIO] = None
                if mtl_path is not None:
                    mtl = stack.enter_context(open(mtl_path, "w", encoding="utf-8"))
                    mtl.write(f"{self.settings.mtl_header}\n")

                if obj_path is None:
                    return

                # The OBJ is created before its parent can be canonicalized, so a
                # failing mtllib path leaves an empty OBJ behind.
                obj = stack.enter_context(open(obj_path, "w", encoding="utf-8"))
                base = Path(obj_path).resolve(strict=True).parent

                mtl_lib = None
                if mtl_path is not None:
                    mtl_lib = relative_to(Path(mtl_path), base)

                obj.write(f"{self.settings.obj_header}\n")
                if mtl_lib is not None:
                    obj.write(f"mtllib {mtl_lib}\n")
                obj.write("\n")

                self._write_entities(entities, obj, mtl, base)
        except OSError as e:
            raise AssetIOError(
                f"Failed to write OBJ {obj_path!s} / MTL {mtl_path!s}: {e}"
            ) from e

    def _write_entities(
        self,
        entities: Iterable[Entity],
        obj: TextIO,
        mtl: Optional[TextIO],
        base: Path,
    ) -> None:
        persisted = MaterialRegistry()
        position_base = texcoord_base = normal_base = 1
        count = 0

        for entity in entities:
            mesh = entity.mesh
            template = face_format(
                len(mesh.positions) > 0,
                len(mesh.texcoords) > 0,
                len(mesh.normals) > 0,
            )

            material, is_new = persisted.resolve(entity.material, entity.name)
            if is_new:
                persisted.store(material)

            obj.write(f"o {entity.name}\n")
            self._write_attributes(obj, mesh)

            if mtl is not None:
                obj.write(f"usemtl {material.name}\n")

            for a, b, c in mesh.indices.reshape(-1, 3):
                corners = (
                    template.format(
                        p=position_base + int(i),
                        t=texcoord_base + int(i),
                        n=normal_base + int(i),
                    )
                    for i in (a, b, c)
                )
                obj.write("f " + " ".join(corners) + "\n")

            obj.write("\n")

            if is_new and mtl is not None:
                self._write_material(mtl, material, base)

            logger.debug(
                "  > %s: %d vertices, %d triangles, material '%s'%s",
                entity.name,
                mesh.vertex_count,
                mesh.triangle_count,
                material.name,
                " (new)" if is_new else "",
            )

            position_base += mesh.vertex_count
            texcoord_base += mesh.texcoord_count
            normal_base += mesh.normal_count
            count += 1

        logger.info("Saved %d entities with %d materials", count, len(persisted))

    def _write_attributes(self, obj: TextIO, mesh: Mesh) -> None:
        for x, y, z in mesh.positions.reshape(-1, 3):
            obj.write(f"v {_fmt(x)} {_fmt(y)} {_fmt(z)}\n")

        for u, v in mesh.texcoords.reshape(-1, 2):
            obj.write(f"vt {_fmt(u)} {_fmt(v)}\n")

        for x, y, z in mesh.normals.reshape(-1, 3):
            obj.write(f"vn {_fmt(x)} {_fmt(y)} {_fmt(z)}\n")

    def _write_material(self, mtl: TextIO, material: Material, base: Path) -> None:
        mtl.write(f"\nnewmtl {material.name}\n")
        mtl.write(f"illum {self.settings.illum}\n")

        for slot, key in MTL_KEYS.items():
            path = material.map(slot)
            if path is not None:
                mtl.write(f"{key} {relative_to(path, base)}\n")


def save(
    entities: Iterable[Entity],
    obj_path: Optional[Path | str] = None,
    mtl_path: Optional[Path | str] = None,
) -> None:
    """Save entities to OBJ and/or MTL. Either path may be omitted."""
    ObjExporter().export(entities, obj_path, mtl_path)
