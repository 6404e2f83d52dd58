"""Domain entities - backend-agnostic data models"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass
class CreatorEntity:
    """Persisted creator row"""
    id: Optional[int] = None
    first_name: str = ""
    last_name: str = ""
    field_mode: int = 0


@dataclass
class ItemCreatorEntity:
    """Association between an item and a creator, with the role for that usage"""
    item_id: int
    creator_id: int
    creator_type_id: Optional[int] = None
    order_index: int = 0


@dataclass
class CreatorTypeEntity:
    """Creator role label"""
    id: int
    name: str
