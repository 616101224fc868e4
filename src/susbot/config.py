"""Runtime configuration for Susbot.

Values are read from the process environment after loading an optional
``.env`` file, so local development and deployment share one mechanism.
"""

import logging
import os
from typing import Optional

from dotenv import load_dotenv

# Load environment variables once at module level
load_dotenv()

logger = logging.getLogger(__name__)


def _optional_env(name: str) -> Optional[str]:
    value = os.getenv(name)
    if value is None:
        return None
    value = value.strip()
    return value or None


def _int_env(name: str, default: int) -> int:
    value = _optional_env(name)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        logger.warning(f"Ignoring non-integer value for {name}: {value!r}; using {default}")
        return default


def _float_env(name: str, default: float) -> float:
    value = _optional_env(name)
    if value is None:
        return default
    try:
        return float(value)
    except ValueError:
        logger.warning(f"Ignoring non-numeric value for {name}: {value!r}; using {default}")
        return default


class Settings:
    """Environment-backed settings.

    Instantiate again (or call :meth:`reload`) after changing the environment,
    e.g. when the CLI receives ``--api-key``.
    """

    def __init__(self):
        self.reload()

    def reload(self) -> None:
        # Block explorer (source provider)
        self.ETHERSCAN_API_KEY = _optional_env('ETHERSCAN_API_KEY')
        self.ETHERSCAN_API_URL = _optional_env('ETHERSCAN_API_URL') or 'https://api.etherscan.io/v2/api'
        self.ETHERSCAN_CHAIN_ID = _int_env('ETHERSCAN_CHAIN_ID', 1)
        self.ETHERSCAN_MAX_RETRIES = max(1, _int_env('ETHERSCAN_MAX_RETRIES', 3))
        self.ETHERSCAN_MAX_RESPONSE_BYTES = _int_env('ETHERSCAN_MAX_RESPONSE_BYTES', 2_000_000)
        self.REQUEST_TIMEOUT = _float_env('REQUEST_TIMEOUT', 30.0)

        # Narrative generator
        self.OPENAI_API_KEY = _optional_env('OPENAI_API_KEY')
        self.OPENAI_API_URL = _optional_env('OPENAI_API_URL') or 'https://api.openai.com/v1/chat/completions'
        self.OPENAI_MODEL = _optional_env('OPENAI_MODEL') or 'gpt-3.5-turbo'
        self.NARRATIVE_TIMEOUT = _float_env('NARRATIVE_TIMEOUT', 30.0)

        # Logging
        self.LOG_LEVEL = (_optional_env('LOG_LEVEL') or 'INFO').upper()
        self.LOG_FILE = _optional_env('LOG_FILE')

    @property
    def narrative_enabled(self) -> bool:
        return self.OPENAI_API_KEY is not None


settings = Settings()
