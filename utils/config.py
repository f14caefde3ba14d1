"""
Workbench configuration.

Defaults can be overridden with ``AUDIO_EVAL_*`` environment variables.
"""

import os
from dataclasses import dataclass
from typing import Optional


def _env_int(key: str, default: int) -> int:
    """Convert an environment variable to int"""
    val = os.environ.get(key)
    if val is None or val == "":
        return default
    try:
        return int(val)
    except ValueError:
        raise ValueError(f"The value '{val}' of environment variable '{key}' cannot be converted to an integer.")


def _env_optional_int(key: str) -> Optional[int]:
    val = os.environ.get(key)
    if val is None or val == "":
        return None
    return _env_int(key, 0)


def _env_str(key: str, default: str) -> str:
    """Get an environment variable as a string"""
    return os.environ.get(key, default)


DEFAULT_PREFS_PATH = os.path.join(os.path.expanduser("~"), ".audio_eval_workbench", "preferences.json")


@dataclass
class AppConfig:
    """
    Runtime settings.

    Attributes:
        data_path: Results file loaded at startup
        audio_dir: Directory holding ``sample_NNNNN.wav`` files
        cards_per_page: Cards shown per page
        max_retries: Load retries allowed before giving up
        repair_attempts: Attempt budget for the adjacency repair
        prefs_path: JSON file storing display preferences
        seed: Fixed shuffle seed, or None for a fresh order every load
    """

    data_path: str = "evaluation_results_clean.json"
    audio_dir: str = "audio_fixed"
    cards_per_page: int = 10
    max_retries: int = 3
    repair_attempts: int = 100
    prefs_path: str = DEFAULT_PREFS_PATH
    seed: Optional[int] = None

    @classmethod
    def from_env(cls) -> "AppConfig":
        """Build a config from the environment, falling back to defaults."""
        config = cls(
            data_path=_env_str("AUDIO_EVAL_DATA_PATH", cls.data_path),
            audio_dir=_env_str("AUDIO_EVAL_AUDIO_DIR", cls.audio_dir),
            cards_per_page=_env_int("AUDIO_EVAL_CARDS_PER_PAGE", cls.cards_per_page),
            max_retries=_env_int("AUDIO_EVAL_MAX_RETRIES", cls.max_retries),
            repair_attempts=_env_int("AUDIO_EVAL_REPAIR_ATTEMPTS", cls.repair_attempts),
            prefs_path=_env_str("AUDIO_EVAL_PREFS_PATH", DEFAULT_PREFS_PATH),
            seed=_env_optional_int("AUDIO_EVAL_SEED"),
        )
        if config.cards_per_page < 1:
            raise ValueError("AUDIO_EVAL_CARDS_PER_PAGE must be at least 1")
        return config
