# config.py

"""
Settings for the calculator session.

Values are layered from lowest to highest priority: field defaults, a .env
file, the process environment (RPNCALC_* variables), then explicit overrides
such as command-line options.
"""

import logging
import os
from typing import Dict, Optional

from dotenv import dotenv_values, find_dotenv
from pydantic import BaseModel, Field, field_validator

from .stack import DEFAULT_SEGMENT_CAPACITY

DEFAULT_HISTORY_FILE = "~/.rpncalc_history"

ENV_VARS: Dict[str, str] = {
    'segment_capacity': 'RPNCALC_SEGMENT_CAPACITY',
    'precision': 'RPNCALC_PRECISION',
    'history_file': 'RPNCALC_HISTORY_FILE',
    'log_level': 'RPNCALC_LOG_LEVEL',
}

_LOG_LEVELS = ('CRITICAL', 'ERROR', 'WARNING', 'INFO', 'DEBUG')


class Settings(BaseModel):
    """Validated session settings."""
    segment_capacity: int = Field(DEFAULT_SEGMENT_CAPACITY, ge=1, description="Slots per stack segment")
    precision: int = Field(6, ge=0, le=17, description="Decimal places when printing the stack")
    history_file: str = Field(DEFAULT_HISTORY_FILE, validate_default=True, description="Interactive history file")
    log_level: str = Field('WARNING', description="Logging level name")

    @field_validator('history_file')
    @classmethod
    def history_file_must_not_be_empty(cls, v: str) -> str:
        if not v.strip():
            raise ValueError('History file cannot be empty')
        return os.path.expanduser(v.strip())

    @field_validator('log_level')
    @classmethod
    def log_level_must_be_known(cls, v: str) -> str:
        level = v.strip().upper()
        if level not in _LOG_LEVELS:
            raise ValueError(f"Log level must be one of {', '.join(_LOG_LEVELS)}")
        return level

    @property
    def log_level_number(self) -> int:
        return getattr(logging, self.log_level)


def load_settings(env_file: Optional[str] = None, **overrides) -> Settings:
    """
    Build Settings from a .env file, the environment and overrides.

    Without ``env_file`` the nearest .env from the working directory is used,
    if there is one. Overrides that are None are ignored so argparse defaults
    can be passed straight through. Raises pydantic.ValidationError on bad
    values.
    """
    path = env_file if env_file is not None else find_dotenv(usecwd=True)
    file_values = dotenv_values(path) if path else {}

    values = {}
    for name, var in ENV_VARS.items():
        raw = os.getenv(var)
        if raw is None or raw == '':
            raw = file_values.get(var)
        if raw is not None and raw != '':
            values[name] = raw
    values.update({k: v for k, v in overrides.items() if v is not None})
    return Settings(**values)
