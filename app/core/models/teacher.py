import uuid
from datetime import datetime

from sqlalchemy import JSON, Boolean, Column, DateTime, String, UniqueConstraint, Uuid

from app.db.session import Base


class Teacher(Base):
    """Dance teacher. Email is unique across all rows, active or not."""

    __tablename__ = "teachers"
    __table_args__ = (
        UniqueConstraint("email", name="uq_teacher_email"),
    )

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    name = Column(String(100), nullable=False, index=True)
    phone = Column(String(50), nullable=False)
    # Always stored lowercased
    email = Column(String(255), nullable=False)
    # Ordered list of style names, e.g. ["Hip Hop", "Jazz"]
    specialties = Column(JSON, nullable=False, default=list)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime(timezone=True), default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)
