# sparrow_obj/scene/types.py
from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from pathlib import Path
from types import MappingProxyType
from typing import Dict, Mapping, Optional

import numpy as np
import numpy.typing as npt

from sparrow_obj.errors import InvalidDataError


class MapSlot(StrEnum):
    """Texture attachment points a material can populate."""

    DIFFUSE = "diffuse"
    AMBIENT = "ambient"
    SPECULAR = "specular"
    BUMP = "bump"
    DISPLACEMENT = "displacement"
    NORMAL = "normal"
    ROUGHNESS = "roughness"
    METALLIC = "metallic"
    SHEEN = "sheen"
    EMISSIVE = "emissive"


def _frozen_array(values: npt.ArrayLike, dtype: type) -> np.ndarray:
    array = np.ascontiguousarray(values, dtype=dtype).reshape(-1)
    array.setflags(write=False)
    return array


@dataclass(frozen=True, init=False, eq=False, slots=True)
class Mesh:
    """
    Deinterleaved indexed triangle mesh.

    positions, normals and texcoords are parallel arrays sharing one index
    space: index i addresses positions[3i:3i+3], normals[3i:3i+3] and
    texcoords[2i:2i+2]. Any of the attribute arrays may be empty.
    """

    positions: np.ndarray
    normals: np.ndarray
    texcoords: np.ndarray
    indices: np.ndarray

    def __init__(
        self,
        positions: npt.ArrayLike = (),
        normals: npt.ArrayLike = (),
        texcoords: npt.ArrayLike = (),
        indices: npt.ArrayLike = (),
    ) -> None:
        object.__setattr__(self, "positions", _frozen_array(positions, np.float32))
        object.__setattr__(self, "normals", _frozen_array(normals, np.float32))
        object.__setattr__(self, "texcoords", _frozen_array(texcoords, np.float32))
        object.__setattr__(self, "indices", _frozen_array(indices, np.uint32))
        self._validate()

    def _validate(self) -> None:
        for label, array, stride in (
            ("positions", self.positions, 3),
            ("normals", self.normals, 3),
            ("texcoords", self.texcoords, 2),
            ("indices", self.indices, 3),
        ):
            if len(array) % stride != 0:
                raise InvalidDataError(
                    f"Mesh {label} length {len(array)} is not a multiple of {stride}"
                )

        if len(self.indices) == 0:
            return

        highest = int(self.indices.max())
        for label, count in (
            ("positions", self.vertex_count),
            ("normals", self.normal_count),
            ("texcoords", self.texcoord_count),
        ):
            if count and highest >= count:
                raise InvalidDataError(
                    f"Mesh index {highest} out of range for {count} {label}"
                )

    @property
    def vertex_count(self) -> int:
        return len(self.positions) // 3

    @property
    def normal_count(self) -> int:
        return len(self.normals) // 3

    @property
    def texcoord_count(self) -> int:
        return len(self.texcoords) // 2

    @property
    def triangle_count(self) -> int:
        return len(self.indices) // 3


@dataclass(frozen=True, slots=True)
class Material:
    """
    Named set of texture maps.

    Two materials are equal when both the name and every populated slot
    (including its path) match.
    """

    name: str
    maps: Mapping[MapSlot, Path] = field(default_factory=dict)

    def __post_init__(self) -> None:
        maps = {MapSlot(slot): Path(path) for slot, path in self.maps.items()}
        object.__setattr__(self, "maps", MappingProxyType(maps))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Material):
            return NotImplemented
        return self.name == other.name and dict(self.maps) == dict(other.maps)

    def __hash__(self) -> int:
        return hash((self.name, frozenset(self.maps.items())))

    def map(self, slot: MapSlot) -> Optional[Path]:
        return self.maps.get(slot)

    def has_same_maps(self, other: Material) -> bool:
        return dict(self.maps) == dict(other.maps)


class MaterialBuilder:
    """
    Builds immutable materials, optionally starting from a copy of an
    existing one.

        renamed = MaterialBuilder.from_material(mat).name("Brick-2").build()
    """

    def __init__(self) -> None:
        self._name: str = ""
        self._maps: Dict[MapSlot, Path] = {}

    @classmethod
    def from_material(cls, material: Material) -> MaterialBuilder:
        builder = cls()
        builder._name = material.name
        builder._maps = dict(material.maps)
        return builder

    def name(self, name: str) -> MaterialBuilder:
        self._name = name
        return self

    def map(self, slot: MapSlot, path: Path | str) -> MaterialBuilder:
        self._maps[MapSlot(slot)] = Path(path)
        return self

    def without(self, slot: MapSlot) -> MaterialBuilder:
        self._maps.pop(MapSlot(slot), None)
        return self

    def diffuse_color_map(self, path: Path | str) -> MaterialBuilder:
        return self.map(MapSlot.DIFFUSE, path)

    def ambient_color_map(self, path: Path | str) -> MaterialBuilder:
        return self.map(MapSlot.AMBIENT, path)

    def specular_color_map(self, path: Path | str) -> MaterialBuilder:
        return self.map(MapSlot.SPECULAR, path)

    def bump_map(self, path: Path | str) -> MaterialBuilder:
        return self.map(MapSlot.BUMP, path)

    def displacement_map(self, path: Path | str) -> MaterialBuilder:
        return self.map(MapSlot.DISPLACEMENT, path)

    def normal_map(self, path: Path | str) -> MaterialBuilder:
        return self.map(MapSlot.NORMAL, path)

    def roughness_map(self, path: Path | str) -> MaterialBuilder:
        return self.map(MapSlot.ROUGHNESS, path)

    def metallic_map(self, path: Path | str) -> MaterialBuilder:
        return self.map(MapSlot.METALLIC, path)

    def sheen_map(self, path: Path | str) -> MaterialBuilder:
        return self.map(MapSlot.SHEEN, path)

    def emissive_map(self, path: Path | str) -> MaterialBuilder:
        return self.map(MapSlot.EMISSIVE, path)

    def build(self) -> Material:
        return Material(name=self._name, maps=dict(self._maps))


@dataclass(frozen=True, slots=True)
class Entity:
    """Named pairing of a mesh and a material. Both may be shared."""

    name: str
    mesh: Mesh
    material: Material
