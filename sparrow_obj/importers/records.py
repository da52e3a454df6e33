# sparrow_obj/importers/records.py
from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Tuple

Color = Tuple[float, float, float]


@dataclass(slots=True)
class RawMesh:
    """Parser output for one model, already in a single shared index space."""

    positions: List[float] = field(default_factory=list)
    normals: List[float] = field(default_factory=list)
    texcoords: List[float] = field(default_factory=list)
    indices: List[int] = field(default_factory=list)
    material_id: Optional[int] = None


@dataclass(slots=True)
class RawModel:
    name: str
    mesh: RawMesh


@dataclass(slots=True)
class RawMaterial:
    """
    One `newmtl` block.

    Keys the parser does not know are kept verbatim in unknown_params
    (key -> rest of line) so that vendor extensions can be interpreted later.
    """

    name: str
    base_dir: Path
    ambient: Color = (0.0, 0.0, 0.0)
    diffuse: Color = (0.0, 0.0, 0.0)
    specular: Color = (0.0, 0.0, 0.0)
    emission: Color = (0.0, 0.0, 0.0)
    shininess: float = 0.0
    optical_density: float = 1.0
    dissolve: float = 1.0
    illumination_model: Optional[int] = None
    ambient_texture: str = ""
    diffuse_texture: str = ""
    specular_texture: str = ""
    shininess_texture: str = ""
    dissolve_texture: str = ""
    unknown_params: Dict[str, str] = field(default_factory=dict)
