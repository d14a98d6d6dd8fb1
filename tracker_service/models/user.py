from sqlalchemy import Column, String, DateTime

from ..core.database import Base
from ..utils.identifiers import new_identifier
from ..utils.timeutils import utcnow


class User(Base):
    __tablename__ = "users"
    id = Column(String(32), primary_key=True, default=new_identifier)
    name = Column(String(100), nullable=False, index=True)
    email = Column(String(320), unique=True, index=True, nullable=False)
    hashed_password = Column(String, nullable=False)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)
