# checkers_engine/config.py
import logging
import os
import tomllib
from dataclasses import dataclass, field
from typing import Optional

logger = logging.getLogger(__name__)

# Score of a won position; a lost one is its negation.
WIN_SCORE = 10


@dataclass
class SearchConfig:
    depth: int = 5
    pruning: bool = True


@dataclass
class EvalConfig:
    win_score: int = WIN_SCORE


@dataclass
class UIConfig:
    engine_name: str = "CheckersEngine"
    human_side: str = "light"
    clear_screen: bool = True
    api_port: int = 8000


@dataclass
class Config:
    search: SearchConfig = field(default_factory=SearchConfig)
    eval: EvalConfig = field(default_factory=EvalConfig)
    ui: UIConfig = field(default_factory=UIConfig)
    log_level: str = "INFO"
    log_file: Optional[str] = None

    @staticmethod
    def load_from_toml(path: str = "config.toml") -> "Config":
        cfg = Config()
        if not os.path.exists(path):
            return cfg
        with open(path, "rb") as f:
            raw = tomllib.load(f)
        for section in ("search", "eval", "ui"):
            target = getattr(cfg, section)
            for k, v in raw.get(section, {}).items():
                if hasattr(target, k):
                    setattr(target, k, v)
        for k in ("log_level", "log_file"):
            if k in raw:
                setattr(cfg, k, raw[k])
        return cfg


# single globally importable config instance
CONFIG = Config.load_from_toml(os.environ.get("CHECKERS_CONFIG_TOML", "config.toml"))
# allow env override of depth for quick debugging
_override_depth = os.environ.get("CHECKERS_SEARCH_DEPTH")
if _override_depth:
    try:
        CONFIG.search.depth = int(_override_depth)
    except ValueError:
        logger.warning("Ignoring CHECKERS_SEARCH_DEPTH=%r: not an integer", _override_depth)
