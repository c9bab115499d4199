from __future__ import annotations


class AssetError(Exception):
    """Base class for failures that abort an asset batch."""


class SourceNotFound(AssetError, FileNotFoundError):
    pass


class RenderError(AssetError):
    pass


class OutputWriteError(AssetError, OSError):
    pass
