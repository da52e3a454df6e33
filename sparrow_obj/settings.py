# sparrow_obj/settings.py
from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class ExportSettings:
    """Fixed text written by the OBJ/MTL exporter."""

    obj_header: str = "# sparrow_obj exported OBJ file"
    mtl_header: str = "# sparrow_obj exported MTL file"
    illum: int = 1


@dataclass(frozen=True, slots=True)
class ImportSettings:
    """Names given to things the OBJ file leaves unnamed."""

    default_material_name: str = "NoMaterial"
    default_object_name: str = "unnamed_object"
