from sqlalchemy import Column, String, Text, JSON

from ..core.database import Base
from ..utils.identifiers import new_identifier


class Team(Base):
    """Team model for database"""
    __tablename__ = "teams"

    id = Column(String(32), primary_key=True, default=new_identifier)
    name = Column(String(200), nullable=False, unique=True, index=True)
    description = Column(Text, nullable=True)
    # Free-text labels, not references to users
    owners = Column(JSON, nullable=False, default=list)

    def __repr__(self):
        return f"<Team(id={self.id}, name='{self.name}')>"
