"""
Identity ORM Models
Joined tables sharing the users.id key; users.role is the discriminant
"""
from sqlalchemy import Column, Integer, String, Date, DateTime, Text, JSON, ForeignKey, Table
from sqlalchemy.orm import relationship

from internship_portal.core.database import Base


company_areas = Table(
    "company_areas",
    Base.metadata,
    Column("company_id", Integer, ForeignKey("companies.id", ondelete="CASCADE"), primary_key=True),
    Column("area_id", Integer, ForeignKey("areas.id", ondelete="CASCADE"), primary_key=True),
)

student_areas = Table(
    "student_areas",
    Base.metadata,
    Column("student_id", Integer, ForeignKey("students.id", ondelete="CASCADE"), primary_key=True),
    Column("area_id", Integer, ForeignKey("areas.id", ondelete="CASCADE"), primary_key=True),
)


class UserModel(Base):
    """Shared identity payload"""

    __tablename__ = "users"

    # Primary Key
    id = Column(Integer, primary_key=True, autoincrement=True)

    # Authentication
    email = Column(String(255), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)
    role = Column(String(20), nullable=False, index=True)

    # Personal Information
    name = Column(String(255), nullable=False)
    phone = Column(String(40), nullable=False)

    # Timestamps
    created_at = Column(DateTime, nullable=False)
    updated_at = Column(DateTime, nullable=True)

    def __repr__(self):
        return f"<UserModel {self.id} - {self.email} ({self.role})>"


class CompanyModel(Base):
    """Company-specific record"""

    __tablename__ = "companies"

    id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), primary_key=True)
    tax_id = Column(String(18), unique=True, nullable=False, index=True)
    address = Column(String(500), nullable=False)

    user = relationship("UserModel", lazy="joined", innerjoin=True)
    areas = relationship("AreaModel", secondary=company_areas, lazy="selectin", order_by="AreaModel.name")

    def __repr__(self):
        return f"<CompanyModel {self.id} - {self.tax_id}>"


class StudentModel(Base):
    """Student-specific record; resume sections are stored as JSON lists"""

    __tablename__ = "students"

    id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), primary_key=True)
    national_id = Column(String(14), unique=True, nullable=False, index=True)
    course = Column(String(255), nullable=False)
    birthdate = Column(Date, nullable=True)

    # Links
    linkedin = Column(String(500), nullable=True)
    github = Column(String(500), nullable=True)
    portfolio = Column(String(500), nullable=True)

    # Resume
    bio = Column(Text, nullable=True)
    education = Column(JSON, nullable=False, default=list)
    experience = Column(JSON, nullable=False, default=list)
    skills = Column(JSON, nullable=False, default=list)

    user = relationship("UserModel", lazy="joined", innerjoin=True)
    interest_areas = relationship(
        "AreaModel", secondary=student_areas, lazy="selectin", order_by="AreaModel.name"
    )

    def __repr__(self):
        return f"<StudentModel {self.id} - {self.national_id}>"
