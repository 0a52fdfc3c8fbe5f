from __future__ import annotations

from typing import Any, Dict, Type

from ..config import source_config
from .algolia import AlgoliaSource
from .base import BaseSource
from .rss import RSSSource
from .simulated import SimulatedSource

AVAILABLE_SOURCES: Dict[str, Type[BaseSource]] = {
    "simulated": SimulatedSource,
    "rss": RSSSource,
    "algolia": AlgoliaSource,
}


def get_source(config: Dict[str, Any]) -> BaseSource:
    source_name = config.get("source", "simulated")
    source_class = AVAILABLE_SOURCES.get(source_name)
    if not source_class:
        raise ValueError(f"Unknown source: {source_name}")
    return source_class(source_config(config, source_name))
