"""Scheduled maintenance jobs for the creator store"""

from .maintenance import run_creator_purge

__all__ = [
    "run_creator_purge",
]
