"""Bootstrap module for devscripts - plain env loading.

Usage:
    from devscripts.bootstrap import env, print_config

    # Access env vars directly
    print(env('BOT_TOKEN'))
    print(env('OPTIONAL_VAR', 'default'))

All scripts should:
1. Import from this module (not ents_bot.config, which requires the full bot config)
2. Access env vars via env() helper
"""

import logging
import os
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root (once at import time)
_PROJECT_ROOT = Path(__file__).parent.parent
load_dotenv(_PROJECT_ROOT / '.env')

# Suppress noisy HTTP logs by default
logging.getLogger('aiohttp').setLevel(logging.WARNING)


def env(key: str, default: str | None = None) -> str:
    """Get environment variable with optional default.

    Args:
        key: Environment variable name
        default: Default value if not set (None means required)

    Returns:
        Environment variable value

    Raises:
        KeyError: If variable not set and no default provided
    """
    value = os.environ.get(key)
    if value is None:
        if default is None:
            raise KeyError(f'{key} not set in environment')
        return default
    return value


def print_config(**extra: object) -> None:
    """Print the configuration a script runs with, hiding secrets."""
    token = env('BOT_TOKEN', '')
    masked = f'{token[:6]}...' if token else '(not set)'
    print(f'Bot token: {masked}')
    for key, value in extra.items():
        print(f'{key}: {value}')
