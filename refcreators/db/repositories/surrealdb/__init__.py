"""SurrealDB repository implementations"""

from .creator import SurrealCreatorRepository
from .item_creator import SurrealItemCreatorRepository
from .creator_type import SurrealCreatorTypeRepository
from .preference import SurrealPreferenceRepository
from .unit_of_work import SurrealUnitOfWork

__all__ = [
    "SurrealCreatorRepository",
    "SurrealItemCreatorRepository",
    "SurrealCreatorTypeRepository",
    "SurrealPreferenceRepository",
    "SurrealUnitOfWork",
]
