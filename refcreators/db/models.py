"""SQLAlchemy models for the creator store"""

from typing import Optional

from sqlalchemy import (
    ForeignKey,
    Index,
    Integer,
    Text,
    CheckConstraint,
    UniqueConstraint,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship


class Base(DeclarativeBase):
    """Base class for all models"""
    pass


class Creator(Base):
    """Creator identity rows, unique per (lastName, firstName, fieldMode)"""
    __tablename__ = "creators"

    creator_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=False)
    first_name: Mapped[str] = mapped_column(Text, nullable=False, default="")
    last_name: Mapped[str] = mapped_column(Text, nullable=False, default="")
    field_mode: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    # Relationships
    associations: Mapped[list["ItemCreator"]] = relationship(
        "ItemCreator", back_populates="creator"
    )

    __table_args__ = (
        UniqueConstraint("last_name", "first_name", "field_mode", name="uq_creators_name"),
        CheckConstraint("field_mode IN (0, 1)", name="check_creator_field_mode"),
    )


class CreatorType(Base):
    """Creator roles (author, editor, ...)"""
    __tablename__ = "creator_types"

    creator_type_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=False)
    name: Mapped[str] = mapped_column(Text, unique=True, nullable=False)


class ItemCreator(Base):
    """Per-item creator usage; the role is stored here, not on the creator"""
    __tablename__ = "item_creators"

    item_id: Mapped[int] = mapped_column(Integer, primary_key=True)
    order_index: Mapped[int] = mapped_column(Integer, primary_key=True, default=0)
    creator_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("creators.creator_id"), nullable=False
    )
    creator_type_id: Mapped[Optional[int]] = mapped_column(
        Integer, ForeignKey("creator_types.creator_type_id"), nullable=True
    )

    # Relationships
    creator: Mapped["Creator"] = relationship("Creator", back_populates="associations")

    __table_args__ = (
        Index("idx_item_creators_creator_id", creator_id),
    )


class Setting(Base):
    """Persistent key/value flags"""
    __tablename__ = "settings"

    key: Mapped[str] = mapped_column(Text, primary_key=True)
    value: Mapped[str] = mapped_column(Text, nullable=False)
