# sparrow_obj/importers/base.py
from abc import ABC, abstractmethod
from pathlib import Path
from typing import List

from sparrow_obj.scene.types import Entity


class AssetImporter(ABC):
    @abstractmethod
    def import_file(self, path: Path) -> List[Entity]:
        """
        Read a scene file from disk and return its entities.
        Must not keep any file handle open past the call.
        """
        pass
