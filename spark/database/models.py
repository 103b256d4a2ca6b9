"""
SQLAlchemy models for PostgreSQL database.

Schema includes:
- Profiles keyed by the identity provider's user id
- Goals owned by a user
- Sparks generated for a goal, ordered by sequence number
- Spark completions, one per (user, spark)
"""

import enum
import uuid
from datetime import datetime, timezone
from typing import Optional, List

from sqlalchemy import (
    String,
    Text,
    Integer,
    Boolean,
    DateTime,
    ForeignKey,
    Index,
    UniqueConstraint,
)
from sqlalchemy.orm import DeclarativeBase, relationship, Mapped, mapped_column


class Base(DeclarativeBase):
    """Base class for all models."""
    pass


def _new_id() -> str:
    return str(uuid.uuid4())


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


# ==================== ENUMS ====================

class GoalStatusEnum(str, enum.Enum):
    ACTIVE = "active"
    PAUSED = "paused"
    COMPLETED = "completed"
    ARCHIVED = "archived"


class PremiumTierEnum(str, enum.Enum):
    FREE = "free"
    PREMIUM = "premium"


# ==================== PROFILES ====================

class ProfileDB(Base):
    """Per-user profile, created on first access."""
    __tablename__ = "profiles"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    display_name: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    avatar_url: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    premium_tier: Mapped[str] = mapped_column(String(20), default=PremiumTierEnum.FREE.value)
    subscription_ends_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)


# ==================== GOALS ====================

class GoalDB(Base):
    """A user-defined objective."""
    __tablename__ = "goals"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_new_id)
    user_id: Mapped[str] = mapped_column(String(36), nullable=False)

    title: Mapped[str] = mapped_column(String(500), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    status: Mapped[str] = mapped_column(String(20), default=GoalStatusEnum.ACTIVE.value)
    # Only ever changed through GoalRepository.increment_sparks_completed
    total_sparks_completed: Mapped[int] = mapped_column(Integer, default=0, nullable=False)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)

    sparks: Mapped[List["SparkDB"]] = relationship(
        "SparkDB",
        back_populates="goal",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="SparkDB.sequence_number",
    )

    __table_args__ = (
        Index("idx_goals_user", "user_id"),
        Index("idx_goals_created", "created_at"),
    )


# ==================== SPARKS ====================

class SparkDB(Base):
    """A single small next action toward a goal. Immutable once created."""
    __tablename__ = "sparks"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_new_id)
    goal_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("goals.id", ondelete="CASCADE"), nullable=False
    )

    title: Mapped[str] = mapped_column(String(500), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    effort_minutes: Mapped[int] = mapped_column(Integer, default=3, nullable=False)
    resource_link: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    ai_generated: Mapped[bool] = mapped_column(Boolean, default=True)
    sequence_number: Mapped[int] = mapped_column(Integer, nullable=False)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)

    goal: Mapped["GoalDB"] = relationship("GoalDB", back_populates="sparks")

    __table_args__ = (
        UniqueConstraint("goal_id", "sequence_number", name="uq_sparks_goal_sequence"),
        Index("idx_sparks_goal", "goal_id"),
    )


# ==================== COMPLETIONS ====================

class SparkCompletionDB(Base):
    """Record that a user performed a spark."""
    __tablename__ = "spark_completions"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_new_id)
    user_id: Mapped[str] = mapped_column(String(36), nullable=False)
    spark_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("sparks.id", ondelete="CASCADE"), nullable=False
    )
    goal_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("goals.id", ondelete="CASCADE"), nullable=False
    )

    completed_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)
    session_id: Mapped[Optional[str]] = mapped_column(String(36), nullable=True)
    notes: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    spark: Mapped["SparkDB"] = relationship("SparkDB")

    __table_args__ = (
        UniqueConstraint("user_id", "spark_id", name="uq_completions_user_spark"),
        Index("idx_completions_goal_user", "goal_id", "user_id"),
    )
