from __future__ import annotations

import copy
import json
import logging
import os
from datetime import datetime
from typing import Any, Dict, Optional

# --- Configuration ---
CONFIG_DIR = os.path.expanduser("~/.config/hacker_stories")
CONFIG_PATH = os.path.join(CONFIG_DIR, "config.json")
STORAGE_DIR = os.path.join(CONFIG_DIR, "storage")

SEARCH_KEY = "search"
DEFAULT_SEARCH_TERM = "React"
SIMULATED_DELAY = 2.0

RSS_FEED_URL = "https://hnrss.org/frontpage"
ALGOLIA_SEARCH_URL = "https://hn.algolia.com/api/v1/search"
HN_ITEM_URL = "https://news.ycombinator.com/item?id={id}"
HTTP_TIMEOUT = 15

REQUEST_HEADERS = {
    "User-Agent": (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64; rv:115.0) "
        "Gecko/20100101 Firefox/115.0"
    )
}

DEFAULT_CONFIG: Dict[str, Any] = {
    "source": "simulated",
    "sources": {
        "simulated": {"delay": SIMULATED_DELAY, "fail": False},
        "rss": {"url": RSS_FEED_URL},
        "algolia": {"query": DEFAULT_SEARCH_TERM, "hits_per_page": 20},
    },
    "search": {"key": SEARCH_KEY, "fallback": DEFAULT_SEARCH_TERM},
}

# Default UI settings
UI_DEFAULTS = {
    "statusbar_keybindings": (
        "[b {color}]/[/] search  [b {color}]d[/] remove  "
        "[b {color}]R[/] reset  [b {color}]r[/] reload"
    ),
}

# --- Logging ---
logger = logging.getLogger("hacker_stories")

def setup_logging(debug: bool = False) -> Optional[str]:
    """Configure logging."""
    if not debug:
        logging.basicConfig(level=logging.CRITICAL, handlers=[logging.NullHandler()])
        return None

    ts = datetime.now().strftime("%Y%m%dT%H%M%S")
    pid = os.getpid()
    debug_path = f"/tmp/hacker_stories_debug_{ts}_{pid}.log"

    logging.basicConfig(
        level=logging.DEBUG,
        filename=debug_path,
        filemode="a",
        format="%(asctime)s - %(levelname)s - %(name)s - %(message)s",
    )

    logger.debug("Debug logging enabled to %s", debug_path)
    return debug_path


def ensure_config_file_exists() -> None:
    """Write the default config if the user's config file is not found."""
    if not os.path.exists(CONFIG_PATH):
        logger.info("Config file not found at %s, creating default.", CONFIG_PATH)
        try:
            os.makedirs(os.path.dirname(CONFIG_PATH), exist_ok=True)
            with open(CONFIG_PATH, "w") as f:
                json.dump(DEFAULT_CONFIG, f, indent=2)
        except (IOError, OSError) as e:
            logger.error("Failed to create default config file: %s", e)


def load_config() -> Dict[str, Any]:
    """Load the main configuration file."""
    ensure_config_file_exists()
    try:
        with open(CONFIG_PATH, "r", encoding="utf-8") as f:
            config = json.load(f)
            logger.info("Loaded config from %s", CONFIG_PATH)
            return config
    except (OSError, ValueError) as e:
        logger.error("Failed to load config from %s: %s", CONFIG_PATH, e)
        return {}


def source_config(config: Dict[str, Any], name: str) -> Dict[str, Any]:
    """Settings for source ``name``, layered over the defaults."""
    merged = copy.deepcopy(DEFAULT_CONFIG["sources"].get(name, {}))
    merged.update(config.get("sources", {}).get(name, {}))
    return merged


def search_settings(config: Dict[str, Any]) -> Dict[str, str]:
    settings = dict(DEFAULT_CONFIG["search"])
    settings.update(config.get("search", {}))
    return settings
