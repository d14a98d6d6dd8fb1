from sqlalchemy import Column, String

from ..core.database import Base
from ..utils.identifiers import new_identifier


class Tag(Base):
    """Tag model for database"""
    __tablename__ = "tags"

    id = Column(String(32), primary_key=True, default=new_identifier)
    name = Column(String(100), nullable=False, unique=True, index=True)

    def __repr__(self):
        return f"<Tag(id={self.id}, name='{self.name}')>"
