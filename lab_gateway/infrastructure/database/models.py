"""SQLAlchemy ORM models for gateway-owned state"""

import uuid
from sqlalchemy import Column, DateTime, JSON, Text
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import declarative_base
from sqlalchemy.sql import func

Base = declarative_base()


class UserSession(Base):
    """Session opened by a successful login"""

    __tablename__ = "user_session"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    token = Column(Text, nullable=False, unique=True, index=True)
    user_id = Column(Text, nullable=False, index=True)
    email = Column(Text, nullable=False)
    name = Column(Text, nullable=False, default="")
    user_data = Column(JSON, nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    expires_at = Column(DateTime(timezone=True), nullable=False)
    revoked_at = Column(DateTime(timezone=True), nullable=True)
