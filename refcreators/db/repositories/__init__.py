"""Repository pattern for database abstraction"""

from .base import (
    CreatorRepository,
    ItemCreatorRepository,
    CreatorTypeRepository,
    PreferenceRepository,
    UnitOfWork,
)

__all__ = [
    "CreatorRepository",
    "ItemCreatorRepository",
    "CreatorTypeRepository",
    "PreferenceRepository",
    "UnitOfWork",
]
