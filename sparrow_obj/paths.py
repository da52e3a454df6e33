# sparrow_obj/paths.py
from __future__ import annotations

import os
from pathlib import Path, PurePath

from sparrow_obj.errors import InvalidDataError


def _canonicalize(path: Path) -> Path | None:
    try:
        return path.resolve(strict=True)
    except (OSError, RuntimeError):
        return None


def resolve(raw: str, base: Path) -> Path:
    """
    Resolve a texture or MTL reference into a canonical absolute path.

    The reference is first tried as-is (absolute, or relative to the working
    directory). Failing that, an absolute reference loses its root or drive
    and is tried relative to `base`, which covers files authored on another
    machine.

    Raises:
        InvalidDataError: if `raw` is empty or neither attempt names an
            existing file.
    """
    if not raw:
        raise InvalidDataError(
            "OBJ/MTL references an empty string where a path to an MTL or "
            "texture file should be"
        )

    path = Path(raw)
    found = _canonicalize(path)
    if found is not None:
        return found

    if path.is_absolute():
        path = path.relative_to(path.anchor)

    found = _canonicalize(Path(base) / path)
    if found is not None:
        return found

    raise InvalidDataError(f"OBJ/MTL references non-existing file: {raw!r}")


def relative_to(path: Path, base: Path) -> str:
    """
    Express an existing file relative to the directory `base`.

    Raises:
        InvalidDataError: if the file does not exist, lives on another drive
            or the result is not valid UTF-8.
    """
    canonical = _canonicalize(Path(path))
    if canonical is None:
        raise InvalidDataError(f"Path {str(path)!r} does not exist")

    try:
        relative = os.path.relpath(canonical, base)
    except ValueError as e:
        raise InvalidDataError(
            f"Path {str(canonical)!r} cannot be expressed relative to {str(base)!r}"
        ) from e

    text = PurePath(relative).as_posix()
    try:
        text.encode("utf-8")
    except UnicodeEncodeError as e:
        raise InvalidDataError(
            f"Path {relative!r} is not valid UTF-8"
        ) from e

    return text
