"""
Job Offer ORM Model
"""
from sqlalchemy import Column, Integer, String, Boolean, DateTime, Text, ForeignKey
from sqlalchemy.orm import relationship

from internship_portal.core.database import Base


class JobOfferModel(Base):
    """Job offer table ORM model"""

    __tablename__ = "job_offers"

    # Primary Key
    id = Column(Integer, primary_key=True, autoincrement=True)

    # Foreign Keys
    company_id = Column(Integer, ForeignKey("companies.id", ondelete="CASCADE"), nullable=False, index=True)
    area_id = Column(Integer, ForeignKey("areas.id"), nullable=False, index=True)

    # Offer Details
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=False)
    location = Column(String(255), nullable=False)
    modality = Column(String(20), nullable=False)
    weekly_hours = Column(Integer, nullable=False)
    requirements = Column(Text, nullable=False)

    # Lifecycle
    is_active = Column(Boolean, nullable=False, default=True, index=True)
    created_at = Column(DateTime, nullable=False)
    updated_at = Column(DateTime, nullable=True)
    closed_at = Column(DateTime, nullable=True)

    company = relationship("CompanyModel", lazy="joined", innerjoin=True)
    area = relationship("AreaModel", lazy="joined", innerjoin=True)

    def __repr__(self):
        return f"<JobOfferModel {self.id} - {self.title}>"
