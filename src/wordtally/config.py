# src/wordtally/config.py
import os
from typing import Optional

# Default paths of the bundled sample run, relative to the working directory
DEFAULT_INPUT_PATH = os.path.join("Assets", "Input.txt")
DEFAULT_OUTPUT_PATH = os.path.join("Assets", "Output.txt")

# None means the platform default text encoding
DEFAULT_ENCODING: Optional[str] = None

DEFAULT_TOP_N = 10

DEBUG_ENV_VAR = "WORDTALLY_DEBUG"
WORKERS_ENV_VAR = "WORDTALLY_WORKERS"

_TRUTHY = {"1", "true", "yes", "on"}


def debug_from_env() -> bool:
    return os.environ.get(DEBUG_ENV_VAR, "").strip().lower() in _TRUTHY


def workers_from_env() -> Optional[int]:
    """Worker count from the environment, or None to use every CPU."""
    raw = os.environ.get(WORKERS_ENV_VAR, "").strip()
    if not raw:
        return None
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{WORKERS_ENV_VAR} must be an integer, got '{raw}'") from None
