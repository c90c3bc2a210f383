import uuid
from datetime import date, datetime

from sqlalchemy import Date, DateTime, ForeignKey, Index, Integer, String, Text, Uuid, func
from sqlalchemy.orm import Mapped, mapped_column

from choreinsights.database import Base


class ChoreTransaction(Base):
    """Append-only points ledger row. Positive deltas are chore completions."""

    __tablename__ = "chore_transactions"
    __table_args__ = (
        Index("ix_chore_transactions_family_created", "family_id", "created_at"),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid, primary_key=True, default=uuid.uuid4,
    )
    family_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("families.id"), nullable=False
    )
    profile_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("family_profiles.id"), nullable=False
    )
    # chore_completed | adjustment | payout | reward_claimed
    transaction_type: Mapped[str] = mapped_column(
        String(30), nullable=False, default="chore_completed"
    )
    points_change: Mapped[int] = mapped_column(Integer, nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )

    def __repr__(self) -> str:
        return (
            f"<ChoreTransaction(id={self.id}, profile_id={self.profile_id}, "
            f"points_change={self.points_change})>"
        )


class ChoreAssignment(Base):
    """A chore manually assigned to a child for a given local date."""

    __tablename__ = "chore_assignments"
    __table_args__ = (
        Index("ix_chore_assignments_family_date", "family_id", "assigned_date"),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid, primary_key=True, default=uuid.uuid4,
    )
    family_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("families.id"), nullable=False
    )
    assigned_to_profile_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("family_profiles.id"), nullable=False
    )
    chore_name: Mapped[str] = mapped_column(String(100), nullable=False)
    assigned_date: Mapped[date] = mapped_column(Date, nullable=False)

    def __repr__(self) -> str:
        return f"<ChoreAssignment(id={self.id}, assigned_date={self.assigned_date})>"
