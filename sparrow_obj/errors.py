# sparrow_obj/errors.py
from __future__ import annotations


class AssetError(Exception):
    """Base class for everything raised while importing or exporting assets."""


class AssetIOError(AssetError):
    """Creating or writing an output file failed. The OSError is chained."""


class InvalidDataError(AssetError, ValueError):
    """Input references or buffers that cannot be represented."""


class LoadError(AssetError):
    """The OBJ/MTL parser rejected the input. The parser error is chained."""


class MissingNormalsError(NotImplementedError):
    """
    Raised when a loaded mesh defines no normals.

    Normal estimation is not supported, so this is not an AssetError and
    callers are not expected to recover from it.
    """


class MissingPositionsError(NotImplementedError):
    """Raised when exporting a mesh without positions, which OBJ cannot express."""
