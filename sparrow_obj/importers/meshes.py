# sparrow_obj/importers/meshes.py
from sparrow_obj.errors import MissingNormalsError
from sparrow_obj.importers.records import RawMesh
from sparrow_obj.scene.types import Mesh


class MeshAdapter:
    """Moves parsed attribute arrays into a scene Mesh."""

    def adapt(self, raw: RawMesh, label: str = "") -> Mesh:
        if not raw.normals:
            raise MissingNormalsError(
                f"Tried to load OBJ object '{label}' without normals"
            )

        texcoords = raw.texcoords
        if not texcoords:
            texcoords = [0.0] * ((len(raw.positions) // 3) * 2)

        return Mesh(
            positions=raw.positions,
            normals=raw.normals,
            texcoords=texcoords,
            indices=raw.indices,
        )
