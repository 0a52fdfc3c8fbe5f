#!/usr/bin/env python3
# -*- coding: utf-8 -*-
from __future__ import annotations

import argparse
import logging
import sys
from typing import Optional

from .app import StoriesApp
from .config import (
    STORAGE_DIR,
    load_config,
    search_settings,
    setup_logging,
)
from .controller import StoriesController
from .sources.manager import AVAILABLE_SOURCES, get_source
from .storage import FileStore, KeyValueStore, MemoryStore, PersistedCell, StorageError

logger = logging.getLogger("hacker_stories")


def open_store(storage_dir: str, persist: bool = True) -> KeyValueStore:
    """Durable store under storage_dir, or memory when unavailable or disabled."""
    if not persist:
        return MemoryStore()
    try:
        return FileStore(storage_dir)
    except StorageError as e:
        logger.warning("Search term will not persist: %s", e)
        return MemoryStore()


# --- Entrypoint ---
def main(argv: Optional[list[str]] = None) -> None:
    parser = argparse.ArgumentParser(description="Hacker Stories TUI")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    parser.add_argument(
        "--source",
        choices=sorted(AVAILABLE_SOURCES),
        help="Story source for this run (overrides config)",
    )
    parser.add_argument(
        "--delay", type=float, help="Simulated fetch delay in seconds"
    )
    parser.add_argument(
        "--fail", action="store_true", help="Make the simulated fetch fail"
    )
    parser.add_argument(
        "--no-persist",
        action="store_true",
        help="Keep the search term in memory only",
    )
    args = parser.parse_args(argv)

    debug_path = setup_logging(args.debug)
    if debug_path:
        print(f"Debug logging enabled: {debug_path}", file=sys.stderr)

    config = load_config()
    if args.source:
        config["source"] = args.source
    simulated = config.setdefault("sources", {}).setdefault("simulated", {})
    if args.delay is not None:
        simulated["delay"] = args.delay
    if args.fail:
        simulated["fail"] = True

    store = open_store(STORAGE_DIR, persist=not args.no_persist)
    search = search_settings(config)
    cell = PersistedCell(store, key=search["key"], fallback=search["fallback"])

    controller: Optional[StoriesController] = None
    startup_error: Optional[str] = None
    try:
        controller = StoriesController(source=get_source(config), search=cell)
    except ValueError as e:
        logger.error("Could not create story source: %s", e)
        startup_error = str(e)

    logger.info("Using source: %s", config.get("source", "simulated"))

    try:
        app = StoriesApp(controller=controller, config=config, startup_error=startup_error)
        app.run()
    except Exception as e:
        logger.exception("Application crashed: %s", e)
        print(f"Application crashed: {e}", file=sys.stderr)
    finally:
        if controller is not None:
            controller.close()


if __name__ == "__main__":
    main()
