# sparrow_obj/importers/obj_parser.py
from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, Iterator, List, Optional, Tuple

from sparrow_obj.importers.records import Color, RawMaterial, RawMesh, RawModel

logger = logging.getLogger(__name__)

Corner = Tuple[int, Optional[int], Optional[int]]


class ObjParseError(ValueError):
    def __init__(self, path: Path, line_no: int, message: str) -> None:
        super().__init__(f"{path}:{line_no}: {message}")
        self.path = path
        self.line_no = line_no


def _lines(path: Path) -> Iterator[Tuple[int, str, str]]:
    """Yield (line number, keyword, rest of line), skipping blanks and comments."""
    with open(path, "r", encoding="utf-8") as f:
        for line_no, line in enumerate(f, start=1):
            line = line.strip()
            if not line or line.startswith("#"):
                continue

            parts = line.split(maxsplit=1)
            tag = parts[0]
            rest = parts[1].strip() if len(parts) > 1 else ""
            yield line_no, tag, rest


def _floats(
    path: Path, line_no: int, rest: str, count: int, minimum: int
) -> List[float]:
    tokens = rest.split()
    if len(tokens) < minimum:
        raise ObjParseError(
            path, line_no, f"Expected {minimum} numbers, got {len(tokens)}"
        )
    try:
        values = [float(t) for t in tokens[:count]]
    except ValueError as e:
        raise ObjParseError(path, line_no, f"Malformed number in '{rest}'") from e

    return values + [0.0] * (count - len(values))


class _ModelBuilder:
    """
    Collects the faces of one model and maps every distinct (v, vt, vn)
    corner to a single vertex so all attributes share one index.
    """

    def __init__(self, name: str, material_id: Optional[int]) -> None:
        self.name = name
        self.mesh = RawMesh(material_id=material_id)
        self._corners: Dict[Corner, int] = {}
        self._layout: Optional[Tuple[bool, bool]] = None

    @property
    def has_faces(self) -> bool:
        return bool(self.mesh.indices)

    def add_corner(
        self,
        corner: Corner,
        positions: List[Tuple[float, float, float]],
        texcoords: List[Tuple[float, float]],
        normals: List[Tuple[float, float, float]],
    ) -> int:
        v_idx, vt_idx, vn_idx = corner
        layout = (vt_idx is not None, vn_idx is not None)
        if self._layout is None:
            self._layout = layout
        elif self._layout != layout:
            raise ValueError(
                f"Object '{self.name}' mixes faces with and without texcoords/normals"
            )

        index = self._corners.get(corner)
        if index is None:
            index = len(self._corners)
            self._corners[corner] = index

            self.mesh.positions.extend(positions[v_idx])
            if vt_idx is not None:
                self.mesh.texcoords.extend(texcoords[vt_idx])
            if vn_idx is not None:
                self.mesh.normals.extend(normals[vn_idx])

        return index

    def build(self) -> RawModel:
        return RawModel(name=self.name, mesh=self.mesh)


class ObjParser:
    """
    Tokenizes an OBJ file and the MTL libraries it references into raw
    records.

    Supported:
      - v, vt, vn
      - f with v, v/vt, v//vn and v/vt/vn corners, negative indices
      - polygons (fan-triangulated)
      - o, g, usemtl, mtllib

    Raises:
        ObjParseError: on malformed input.
        OSError: if the OBJ or a referenced MTL file cannot be read.
    """

    def __init__(self, default_object_name: str = "unnamed_object") -> None:
        self.default_object_name = default_object_name

    def parse(self, path: Path) -> Tuple[List[RawModel], List[RawMaterial]]:
        path = Path(path)
        positions: List[Tuple[float, float, float]] = []
        normals: List[Tuple[float, float, float]] = []
        uvs: List[Tuple[float, float]] = []

        materials: List[RawMaterial] = []
        material_ids: Dict[str, int] = {}
        models: List[RawModel] = []

        current = _ModelBuilder(self.default_object_name, None)

        def finish(name: str, material_id: Optional[int]) -> _ModelBuilder:
            if current.has_faces:
                models.append(current.build())
            return _ModelBuilder(name, material_id)

        for line_no, tag, rest in _lines(path):
            if tag == "v":
                px, py, pz = _floats(path, line_no, rest, 3, 3)
                positions.append((px, py, pz))

            elif tag == "vn":
                nx, ny, nz = _floats(path, line_no, rest, 3, 3)
                normals.append((nx, ny, nz))

            elif tag == "vt":
                u, v = _floats(path, line_no, rest, 2, 1)
                uvs.append((u, v))

            elif tag == "f":
                tokens = rest.split()
                if len(tokens) < 3:
                    raise ObjParseError(
                        path, line_no, "Faces need at least three vertices"
                    )

                corners = [
                    self._parse_face_vertex(
                        path, line_no, token, len(positions), len(uvs), len(normals)
                    )
                    for token in tokens
                ]

                try:
                    face = [
                        current.add_corner(c, positions, uvs, normals)
                        for c in corners
                    ]
                except ValueError as e:
                    raise ObjParseError(path, line_no, str(e)) from e

                for i in range(1, len(face) - 1):
                    current.mesh.indices.extend((face[0], face[i], face[i + 1]))

            elif tag in ("o", "g"):
                name = rest or self.default_object_name
                # The active material carries over into the next object.
                current = finish(name, current.mesh.material_id)

            elif tag == "usemtl":
                material_id = material_ids.get(rest)
                if material_id is None:
                    logger.warning(
                        "%s:%d: usemtl references unknown material '%s'",
                        path,
                        line_no,
                        rest,
                    )
                if current.has_faces:
                    current = finish(current.name, material_id)
                else:
                    current.mesh.material_id = material_id

            elif tag == "mtllib":
                if not rest:
                    raise ObjParseError(path, line_no, "mtllib without a file name")
                for name in rest.split():
                    mtl_path = Path(name)
                    if not mtl_path.is_absolute():
                        mtl_path = path.parent / mtl_path

                    for material in MtlParser().parse(mtl_path):
                        material_ids[material.name] = len(materials)
                        materials.append(material)

            else:
                logger.debug("%s:%d: ignoring '%s'", path, line_no, tag)

        if current.has_faces:
            models.append(current.build())

        return models, materials

    def _parse_index(
        self, path: Path, line_no: int, val: str, count: int
    ) -> Optional[int]:
        """
        If positive, convert 1-based to 0-based.
        If negative, count back from the last element read so far.
        """
        if not val:
            return None
        try:
            idx = int(val)
        except ValueError as e:
            raise ObjParseError(path, line_no, f"Malformed index '{val}'") from e

        resolved = idx - 1 if idx > 0 else count + idx
        if idx == 0 or not 0 <= resolved < count:
            raise ObjParseError(
                path, line_no, f"Index {idx} out of range ({count} elements)"
            )
        return resolved

    def _parse_face_vertex(
        self,
        path: Path,
        line_no: int,
        token: str,
        position_count: int,
        texcoord_count: int,
        normal_count: int,
    ) -> Corner:
        parts = token.split("/")
        if len(parts) > 3:
            raise ObjParseError(path, line_no, f"Malformed face vertex '{token}'")

        v = self._parse_index(path, line_no, parts[0], position_count)
        vt = (
            self._parse_index(path, line_no, parts[1], texcoord_count)
            if len(parts) > 1
            else None
        )
        vn = (
            self._parse_index(path, line_no, parts[2], normal_count)
            if len(parts) > 2
            else None
        )

        if v is None:
            raise ObjParseError(path, line_no, f"Invalid vertex index in '{token}'")

        return v, vt, vn


class MtlParser:
    """Reads every `newmtl` block of an MTL file into RawMaterial records."""

    _TEXTURES = {
        "map_Ka": "ambient_texture",
        "map_Kd": "diffuse_texture",
        "map_Ks": "specular_texture",
        "map_Ns": "shininess_texture",
        "map_d": "dissolve_texture",
    }
    _COLORS = {
        "Ka": "ambient",
        "Kd": "diffuse",
        "Ks": "specular",
        "Ke": "emission",
    }
    _SCALARS = {
        "Ns": "shininess",
        "Ni": "optical_density",
        "d": "dissolve",
    }

    def parse(self, path: Path) -> List[RawMaterial]:
        path = Path(path)
        base_dir = path.parent
        materials: List[RawMaterial] = []
        current: Optional[RawMaterial] = None

        for line_no, tag, rest in _lines(path):
            if tag == "newmtl":
                if not rest:
                    raise ObjParseError(path, line_no, "newmtl without a name")
                current = RawMaterial(name=rest, base_dir=base_dir)
                materials.append(current)
                continue

            if current is None:
                raise ObjParseError(
                    path, line_no, f"'{tag}' appears before any newmtl"
                )

            if tag in self._TEXTURES:
                setattr(current, self._TEXTURES[tag], rest)

            elif tag in self._COLORS:
                r, g, b = _floats(path, line_no, rest, 3, 3)
                color: Color = (r, g, b)
                setattr(current, self._COLORS[tag], color)

            elif tag in self._SCALARS:
                (value,) = _floats(path, line_no, rest, 1, 1)
                setattr(current, self._SCALARS[tag], value)

            elif tag == "Tr":
                (value,) = _floats(path, line_no, rest, 1, 1)
                current.dissolve = 1.0 - value

            elif tag == "illum":
                try:
                    current.illumination_model = int(rest)
                except ValueError as e:
                    raise ObjParseError(
                        path, line_no, f"Malformed illum '{rest}'"
                    ) from e

            else:
                current.unknown_params[tag] = rest

        return materials
