# sparrow_obj/importers/materials.py
from __future__ import annotations

from typing import Dict, Tuple

from sparrow_obj.importers.records import RawMaterial
from sparrow_obj.paths import resolve
from sparrow_obj.scene.types import MapSlot, Material, MaterialBuilder

# Keys probed in unknown MTL parameters, first match wins.
# The first alias of each slot is also the key the exporter writes.
MAP_ALIASES: Dict[MapSlot, Tuple[str, ...]] = {
    MapSlot.BUMP: ("bump", "map_bump", "bump_map"),
    MapSlot.DISPLACEMENT: ("disp", "map_disp", "disp_map"),
    # map_Ns is shininess, not normals, despite what some exporters assume.
    MapSlot.NORMAL: ("norm", "map_norm", "map_normal", "normal", "normal_map"),
    MapSlot.ROUGHNESS: ("map_Pr", "map_PR", "map_pr", "map_pR", "Pr_map"),
    MapSlot.METALLIC: ("map_Pm", "map_PM", "map_pm", "map_pM", "Pm_map"),
    MapSlot.SHEEN: ("map_Ps", "map_PS", "map_ps", "map_pS", "Ps_map"),
    MapSlot.EMISSIVE: ("map_Ke", "map_KE", "map_ke", "map_kE", "Ke_map"),
}


class MaterialTranslator:
    """Turns parsed MTL records into scene materials with resolved map paths."""

    def translate(self, source: RawMaterial) -> Material:
        """
        Raises:
            InvalidDataError: if any referenced texture cannot be resolved.
        """
        mat = MaterialBuilder().name(source.name)
        base_dir = source.base_dir

        if source.diffuse_texture:
            mat.diffuse_color_map(resolve(source.diffuse_texture, base_dir))

        if source.ambient_texture:
            mat.ambient_color_map(resolve(source.ambient_texture, base_dir))

        if source.specular_texture:
            mat.specular_color_map(resolve(source.specular_texture, base_dir))

        other = source.unknown_params
        for slot, aliases in MAP_ALIASES.items():
            value = next((other[key] for key in aliases if key in other), None)
            if value is not None:
                mat.map(slot, resolve(value, base_dir))

        return mat.build()
