"""
Application ORM Model
"""
from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship

from internship_portal.core.database import Base


class ApplicationModel(Base):
    """Application table ORM model"""

    __tablename__ = "applications"
    __table_args__ = (
        UniqueConstraint("student_id", "job_offer_id", name="uq_applications_student_id_job_offer_id"),
    )

    # Primary Key
    id = Column(Integer, primary_key=True, autoincrement=True)

    # Foreign Keys
    student_id = Column(Integer, ForeignKey("students.id", ondelete="CASCADE"), nullable=False, index=True)
    job_offer_id = Column(Integer, ForeignKey("job_offers.id", ondelete="CASCADE"), nullable=False, index=True)

    # Application Details
    status = Column(String(20), nullable=False, default="PENDENTE", index=True)
    submitted_at = Column(DateTime, nullable=False)

    student = relationship("StudentModel", lazy="joined", innerjoin=True)
    job_offer = relationship("JobOfferModel", lazy="joined", innerjoin=True)

    def __repr__(self):
        return f"<ApplicationModel {self.id} - {self.status}>"
