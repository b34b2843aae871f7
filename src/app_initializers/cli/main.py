# src/app_initializers/cli/main.py

"""
CLI entrypoint.

Initializes logging, loads the initializer manifest (or the built-in sample),
creates an InitManager and hands control to the console driver.
"""

from __future__ import annotations

import argparse
import asyncio
import logging
from collections.abc import Sequence
from pathlib import Path

from ..config import Settings, get_settings
from ..core.initializers import FunctionInitializer
from ..core.observers import LoggingEventsObserver
from ..logging_setup import setup_logging
from ..manager import InitManager
from .console import run_console_loop
from .manifest import SAMPLE_MANIFEST, ManifestError, load_manifest, parse_manifest

logger = logging.getLogger(__name__)


def _load_initializers(manifest_path: Path | None) -> list[FunctionInitializer]:
    if manifest_path is None:
        logger.info("No manifest given; using the built-in sample.")
        return parse_manifest(SAMPLE_MANIFEST)
    return load_manifest(manifest_path)


async def _run(settings: Settings, initializers: list[FunctionInitializer]) -> None:
    manager = InitManager(initializers, observer=LoggingEventsObserver())
    if settings.autostart_foreground:
        manager.on_foreground()

    await run_console_loop(manager)

    # Let an in-flight run() finish instead of tearing it down mid-way.
    manager.on_background()
    await manager.wait_for_active()


def main(argv: Sequence[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="app-initializers", description="Drive app initializers by hand.")
    parser.add_argument("manifest", nargs="?", type=Path, help="JSON manifest of simulated initializers.")
    args = parser.parse_args(argv)

    settings = get_settings()

    console_level = getattr(logging, settings.log_level, logging.INFO)
    setup_logging(
        console_level=console_level,
        log_dir=settings.log_dir if settings.file_logging else None,
    )

    logger.info("Starting %s...", settings.app_name)

    try:
        initializers = _load_initializers(args.manifest or settings.manifest_path)
    except ManifestError as e:
        logger.error("%s", e)
        return 2

    try:
        asyncio.run(_run(settings, initializers))
    except KeyboardInterrupt:
        logger.info("Interrupted.")

    logger.info("Bye.")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
