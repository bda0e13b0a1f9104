"""Sous-package CLI commands - re-exporte les commandes publiques."""

from src.adapters.cli.commands.cache_commands import (
    cache_app,
    cache_clear,
    cache_status,
)
from src.adapters.cli.commands.match_command import (
    match,
)
from src.adapters.cli.commands.verify_command import (
    verify,
)

__all__ = [
    # match
    "match",
    # verify
    "verify",
    # cache
    "cache_app",
    "cache_clear",
    "cache_status",
]
