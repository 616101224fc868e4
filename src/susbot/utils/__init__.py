"""
Susbot Utils Package

- Logger: consistent logging setup for the CLI and the API
- Error handling: exception taxonomy and HTTP mapping
"""

from .logger import setup_logger
from .error_handling import (
    CatalogueError,
    ErrorSeverity,
    EtherscanError,
    NarrativeError,
    SusbotError,
    ValidationError,
)

__all__ = [
    'setup_logger',
    'CatalogueError',
    'ErrorSeverity',
    'EtherscanError',
    'NarrativeError',
    'SusbotError',
    'ValidationError',
]
