from __future__ import annotations

import asyncio
import contextlib
import os
import tempfile
from pathlib import Path

from .errors import OutputWriteError
from .raster import RasterImage


def _atomic_write(path: Path, data: bytes) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=path.parent)
    try:
        with os.fdopen(fd, "wb") as f:
            f.write(data)
        os.replace(tmp, path)
    except BaseException:
        with contextlib.suppress(OSError):
            os.remove(tmp)
        raise


async def write_image(image: RasterImage, path: Path) -> Path:
    """Create or overwrite ``path`` with the encoded image."""
    try:
        await asyncio.to_thread(_atomic_write, path, image.data)
    except OSError as e:
        raise OutputWriteError(f"Failed to write {path}: {e}") from e
    return path
