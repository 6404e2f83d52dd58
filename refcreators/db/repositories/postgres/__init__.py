"""PostgreSQL repository implementations"""

from .creator import PostgresCreatorRepository
from .item_creator import PostgresItemCreatorRepository
from .creator_type import PostgresCreatorTypeRepository
from .preference import PostgresPreferenceRepository
from .unit_of_work import PostgresUnitOfWork

__all__ = [
    "PostgresCreatorRepository",
    "PostgresItemCreatorRepository",
    "PostgresCreatorTypeRepository",
    "PostgresPreferenceRepository",
    "PostgresUnitOfWork",
]
