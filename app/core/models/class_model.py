"""Weekly dance class. Model named DanceClass to avoid Python 'class' keyword."""
import uuid
from datetime import datetime

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Index, Integer, String, Uuid, text
from sqlalchemy.orm import relationship

from app.db.session import Base


class DanceClass(Base):
    """One recurring weekly slot at a branch. Soft delete via is_active.

    Only one active class may hold a (day, time, branch) slot; the partial
    unique index enforces it even when two writers race past the service check.
    """

    __tablename__ = "classes"
    __table_args__ = (
        Index(
            "uq_class_active_slot",
            "day",
            "time",
            "branch_id",
            unique=True,
            postgresql_where=text("is_active"),
            sqlite_where=text("is_active"),
        ),
        Index("ix_classes_day", "day"),
        Index("ix_classes_branch_id", "branch_id"),
        Index("ix_classes_teacher_id", "teacher_id"),
    )

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    day = Column(String(10), nullable=False)  # Weekday label
    time = Column(String(5), nullable=False)  # HH:MM, zero padded
    branch_id = Column(Uuid, ForeignKey("branches.id"), nullable=False)
    teacher_id = Column(Uuid, ForeignKey("teachers.id"), nullable=False)
    description = Column(String(200), nullable=False)
    level = Column(String(20), nullable=True)
    max_students = Column(Integer, nullable=False, default=20)
    duration = Column(Integer, nullable=False, default=60)  # minutes
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime(timezone=True), default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    # Loaded only when a query asks for it (selectinload); lazy="raise" keeps
    # an accidental implicit load from hitting the async session.
    branch = relationship("Branch", lazy="raise")
    teacher = relationship("Teacher", lazy="raise")

    @property
    def formatted_schedule(self) -> str:
        return f"{self.day} {self.time}"
