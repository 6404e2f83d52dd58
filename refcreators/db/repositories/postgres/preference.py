"""PostgreSQL implementation of PreferenceRepository"""

from __future__ import annotations

from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ...models import Setting
from ..base import PreferenceRepository


class PostgresPreferenceRepository(PreferenceRepository):
    """PostgreSQL implementation using SQLAlchemy"""

    def __init__(self, session: AsyncSession):
        self._session = session

    async def get(self, key: str) -> Optional[str]:
        """Get raw value for key"""
        result = await self._session.execute(
            select(Setting.value).where(Setting.key == key)
        )
        return result.scalar_one_or_none()

    async def set(self, key: str, value: str) -> None:
        """Set value for key"""
        model = await self._session.get(Setting, key)
        if model:
            model.value = value
        else:
            self._session.add(Setting(key=key, value=value))
        await self._session.flush()
