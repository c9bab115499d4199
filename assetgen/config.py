import os
from pathlib import Path

from pydantic import BaseModel, ConfigDict, field_validator

from .fragment import StripStrategy

DEFAULT_ASSET_DIR = Path("website") / "public"


def _parse_strategy(raw: str | None) -> StripStrategy:
    value = (raw or StripStrategy.EXACT.value).strip().lower()
    try:
        return StripStrategy(value)
    except ValueError:
        choices = ", ".join(s.value for s in StripStrategy)
        raise RuntimeError(
            f"ASSETS_STRIP_TRANSFORM={raw!r} is invalid. Use one of: {choices}."
        ) from None


class Settings(BaseModel):
    model_config = ConfigDict(frozen=True)

    source_dir: Path
    output_dir: Path
    icon_template: str = "favicon.svg"
    logo_template: str = "logo.svg"
    site_title: str = "Claudex"
    site_url: str = "claudex.space"
    strip_strategy: StripStrategy = StripStrategy.EXACT
    # Logging
    log_file: Path | None = None
    log_level: str = "INFO"
    log_max_bytes: int = 5 * 1024 * 1024
    log_backups: int = 5

    @field_validator("log_level", mode="before")
    @classmethod
    def _upper_level(cls, v: str) -> str:
        return (v or "INFO").upper()

    @field_validator("source_dir", "output_dir", mode="before")
    @classmethod
    def _ensure_path(cls, v: Path | str) -> Path:
        return Path(v).expanduser().resolve()

    @field_validator("log_file", mode="before")
    @classmethod
    def _ensure_log_path(cls, v: str | Path | None) -> Path | None:
        if not v:
            return None
        return Path(v).expanduser().resolve()

    @property
    def icon_path(self) -> Path:
        return self.source_dir / self.icon_template

    @property
    def logo_path(self) -> Path:
        return self.source_dir / self.logo_template


def load_settings() -> Settings:
    source_dir = Path(os.getenv("ASSETS_SOURCE_DIR", "") or DEFAULT_ASSET_DIR)
    output_dir = Path(os.getenv("ASSETS_OUTPUT_DIR", "") or DEFAULT_ASSET_DIR)

    icon_template = os.getenv("ASSETS_ICON_TEMPLATE", "").strip() or "favicon.svg"
    logo_template = os.getenv("ASSETS_LOGO_TEMPLATE", "").strip() or "logo.svg"
    site_title = os.getenv("ASSETS_SITE_TITLE", "").strip() or "Claudex"
    site_url = os.getenv("ASSETS_SITE_URL", "").strip() or "claudex.space"
    strip_strategy = _parse_strategy(os.getenv("ASSETS_STRIP_TRANSFORM"))

    # Logging
    log_file_raw = os.getenv("LOG_FILE", "").strip()
    log_file = Path(log_file_raw).expanduser().resolve() if log_file_raw else None
    log_level = (os.getenv("LOG_LEVEL", "INFO") or "INFO").upper()
    log_max_bytes = int(os.getenv("LOG_MAX_BYTES", str(5 * 1024 * 1024)))
    log_backups = int(os.getenv("LOG_BACKUPS", "5"))

    return Settings(
        source_dir=source_dir,
        output_dir=output_dir,
        icon_template=icon_template,
        logo_template=logo_template,
        site_title=site_title,
        site_url=site_url,
        strip_strategy=strip_strategy,
        log_file=log_file,
        log_level=log_level,
        log_max_bytes=log_max_bytes,
        log_backups=log_backups,
    )
