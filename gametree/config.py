from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

import logging
import os
import tomllib

logger = logging.getLogger(__name__)

# Bounds must sit well outside the material range (about +/-2000).
MIN_BOUND = -1_000_000
MAX_BOUND = 1_000_000


@dataclass
class SearchConfig:
    depth: int = 5  # total lookahead in plies
    tree_depth: int = 1  # plies built eagerly before alpha-beta starts
    alpha_bound: int = MIN_BOUND
    beta_bound: int = MAX_BOUND


@dataclass
class PlayConfig:
    ai_side: str = "white"
    against_random_cpu: bool = False


@dataclass
class Config:
    search: SearchConfig = field(default_factory=SearchConfig)
    play: PlayConfig = field(default_factory=PlayConfig)
    log_level: str = "INFO"

    @staticmethod
    def load_from_toml(path: str = "gametree.toml") -> "Config":
        cfg = Config()
        if not os.path.exists(path):
            return cfg
        with open(path, "rb") as f:
            raw = tomllib.load(f)
        for section_name in ("search", "play"):
            section = getattr(cfg, section_name)
            for k, v in raw.get(section_name, {}).items():
                if hasattr(section, k):
                    setattr(section, k, v)
                else:
                    logger.warning("Ignoring unknown config key %s.%s", section_name, k)
        if "log_level" in raw:
            cfg.log_level = str(raw["log_level"])
        return cfg


def load_config(path: Optional[str] = None) -> Config:
    """Load the TOML config and apply environment overrides."""
    cfg = Config.load_from_toml(path or os.environ.get("GAMETREE_CONFIG_TOML", "gametree.toml"))

    override_depth = os.environ.get("GAMETREE_SEARCH_DEPTH")
    if override_depth:
        try:
            cfg.search.depth = int(override_depth)
        except ValueError:
            logger.warning("Ignoring invalid GAMETREE_SEARCH_DEPTH=%r", override_depth)

    override_side = os.environ.get("GAMETREE_AI_SIDE")
    if override_side:
        cfg.play.ai_side = override_side.lower()
    return cfg
