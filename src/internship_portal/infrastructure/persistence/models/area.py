"""
Area ORM Model
"""
from sqlalchemy import Column, Integer, String

from internship_portal.core.database import Base


class AreaModel(Base):
    """Area table ORM model"""

    __tablename__ = "areas"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(120), unique=True, nullable=False, index=True)

    def __repr__(self):
        return f"<AreaModel {self.id} - {self.name}>"
