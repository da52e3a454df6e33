# sparrow_obj/scene/registry.py
from typing import Iterator, List, Optional, Tuple

from sparrow_obj.scene.types import Material, MaterialBuilder


class MaterialRegistry:
    """
    Append-only, ordered store of materials already written to a file.

    Materials are looked up by content: a material is "known" when one with
    the same name and the same maps was stored before.
    """

    def __init__(self) -> None:
        self._storage: List[Material] = []

    def store(self, material: Material) -> None:
        """Register a persisted material."""
        self._storage.append(material)

    def get(self, name: str) -> Optional[Material]:
        """First stored material with this name, if any."""
        for material in self._storage:
            if material.name == name:
                return material
        return None

    def __contains__(self, material: Material) -> bool:
        return material in self._storage

    def __iter__(self) -> Iterator[Material]:
        return iter(self._storage)

    def __len__(self) -> int:
        return len(self._storage)

    def is_name_taken(self, name: str) -> bool:
        return any(material.name == name for material in self._storage)

    def resolve(self, material: Material, owner: str) -> Tuple[Material, bool]:
        """
        Find the material to persist for an entity named `owner`.

        Returns the material and whether it is new to the registry. A name
        clash with different maps renames to `{name}-{owner}`, then appends
        `-2`, `-3`, ... until the name is free.
        """
        if material in self:
            return material, False

        if not self.is_name_taken(material.name):
            return material, True

        base_name = f"{material.name}-{owner}"
        candidate = base_name
        suffix = 2
        while True:
            if not self.is_name_taken(candidate):
                renamed = MaterialBuilder.from_material(material).name(candidate)
                return renamed.build(), True
            candidate = f"{base_name}-{suffix}"
            suffix += 1
