from __future__ import annotations

import asyncio
import logging
from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from .compose import compose, preview_spec
from .config import Settings
from .fragment import Fragment, extract_fragment
from .raster import rasterize
from .svg import VectorDocument
from .writer import write_image

ICON_TARGETS: tuple[tuple[str, int], ...] = (
    ("favicon-16x16.png", 16),
    ("favicon-32x32.png", 32),
    ("apple-touch-icon.png", 180),
)
PREVIEW_NAME = "og.png"


class BatchState(str, Enum):
    PENDING = "pending"
    RUNNING = "running"
    COMPLETED = "completed"
    FAILED = "failed"


@dataclass(frozen=True)
class RasterTask:
    name: str
    document: VectorDocument
    width: int
    height: int


def build_tasks(
    icon: VectorDocument, preview: VectorDocument, preview_size: tuple[int, int]
) -> list[RasterTask]:
    tasks = [RasterTask(name, icon, size, size) for name, size in ICON_TARGETS]
    tasks.append(RasterTask(PREVIEW_NAME, preview, *preview_size))
    _check_unique(t.name for t in tasks)
    return tasks


def _check_unique(names: Iterable[str]) -> None:
    seen: set[str] = set()
    for name in names:
        if name in seen:
            raise ValueError(f"Duplicate output filename in batch: {name}")
        seen.add(name)


class AssetBatch:
    """Renders the icon set and the social preview image, in order, fail-fast.

    The run either writes every output or stops at the first error; nothing is
    retried.
    """

    def __init__(self, settings: Settings):
        self.settings = settings
        self.state = BatchState.PENDING

    async def _load(self, path: Path) -> VectorDocument:
        return await asyncio.to_thread(VectorDocument.from_file, path)

    def _preview(self, fragment: Fragment | None) -> tuple[VectorDocument, tuple[int, int]]:
        spec = preview_spec(
            self.settings.site_title,
            self.settings.site_url,
            strip_strategy=self.settings.strip_strategy,
        )
        return compose(spec, fragment), (spec.width, spec.height)

    async def run(self) -> list[Path]:
        if self.state is not BatchState.PENDING:
            raise RuntimeError(f"Batch already {self.state.value}")
        self.state = BatchState.RUNNING
        try:
            written = await self._run()
        except BaseException:
            self.state = BatchState.FAILED
            raise
        self.state = BatchState.COMPLETED
        return written

    async def _run(self) -> list[Path]:
        # Both templates are read before anything is written.
        icon = await self._load(self.settings.icon_path)
        logo = await self._load(self.settings.logo_path)

        preview, preview_size = self._preview(extract_fragment(logo))
        tasks = build_tasks(icon, preview, preview_size)

        out_dir = self.settings.output_dir
        written: list[Path] = []
        for task in tasks:
            image = rasterize(task.document, task.width, task.height)
            path = await write_image(image, out_dir / task.name)
            logging.info("Generated %s (%dx%d)", task.name, task.width, task.height)
            written.append(path)

        logging.info("All assets generated: %d files in %s", len(written), out_dir)
        return written
