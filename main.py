from __future__ import annotations

import asyncio
import logging
import sys
from logging.handlers import RotatingFileHandler

from dotenv import load_dotenv

from assetgen.config import Settings, load_settings
from assetgen.errors import AssetError
from assetgen.pipeline import AssetBatch


def _configure_logging(settings: Settings) -> None:
    # Console (stderr) always; optional rotating file
    log_format = "%(asctime)s %(levelname)s %(name)s %(message)s"
    level = getattr(logging, settings.log_level.upper(), logging.INFO)
    logging.basicConfig(level=level, format=log_format)
    if settings.log_file:
        try:
            settings.log_file.parent.mkdir(parents=True, exist_ok=True)
            fh = RotatingFileHandler(
                settings.log_file,
                maxBytes=settings.log_max_bytes,
                backupCount=settings.log_backups,
                encoding="utf-8",
            )
            fh.setLevel(level)
            fh.setFormatter(logging.Formatter(log_format))
            root = logging.getLogger()
            root.addHandler(fh)
        except Exception:
            logging.exception("Failed to set up file logging")


async def main() -> None:
    # Load .env if present
    load_dotenv()

    settings = load_settings()
    _configure_logging(settings)

    logging.info(
        "Generating assets. Source dir: %s, output dir: %s",
        settings.source_dir,
        settings.output_dir,
    )
    await AssetBatch(settings).run()


def run() -> int:
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        return 130
    except AssetError as e:
        logging.error("Asset generation failed: %s", e)
        return 1
    except Exception:
        logging.exception("Asset generation failed")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(run())
