"""Engine configuration loaded from the environment (and a local .env)."""
from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import find_dotenv, load_dotenv


def _i(name: str, default: int) -> int:
    try:
        return int(os.getenv(name, default))
    except (TypeError, ValueError):
        return default


def _s(name: str, default: str) -> str:
    value = os.getenv(name)
    return value if value else default


_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


def _level(name: str, default: str) -> str:
    value = _s(name, default).upper()
    return value if value in _LEVELS else default


@dataclass(frozen=True)
class EngineConfig:
    # Default depth when a caller passes max_generations <= 0
    pedigree_generations: int = 5
    descendancy_generations: int = 4

    # Hard cap for pedigree, descendancy and Ahnentafel queries
    generation_cap: int = 10

    # Ancestor-map bound for relationship lookups
    relationship_generations: int = 15

    log_level: str = "INFO"
    sqlite_path: str = "./myfamily.db"

    @classmethod
    def from_env(cls) -> EngineConfig:
        return cls(
            pedigree_generations=_i("FAMILY_GRAPH_PEDIGREE_GENERATIONS", 5),
            descendancy_generations=_i("FAMILY_GRAPH_DESCENDANCY_GENERATIONS", 4),
            generation_cap=_i("FAMILY_GRAPH_GENERATION_CAP", 10),
            relationship_generations=_i("FAMILY_GRAPH_RELATIONSHIP_GENERATIONS", 15),
            log_level=_level("FAMILY_GRAPH_LOG_LEVEL", "INFO"),
            sqlite_path=_s("SQLITE_PATH", "./myfamily.db"),
        )


def load_config() -> EngineConfig:
    """Load configuration, reading a .env file first if one is present."""
    load_dotenv(find_dotenv(usecwd=True))
    return EngineConfig.from_env()


CONFIG = EngineConfig()
