"""
Repository Interfaces (Abstract Base Classes)
Define contracts for data access without implementation details
"""
from abc import ABC, abstractmethod
from typing import Optional, List, Sequence, Tuple

from internship_portal.domain.entities import Area, Identity, JobOffer, Application
from internship_portal.domain.enums import Role, ApplicationStatus


class IAreaRepository(ABC):
    """Area repository interface"""

    @abstractmethod
    async def list_all(self) -> List[Area]:
        """List areas ordered by name"""
        pass

    @abstractmethod
    async def get_by_id(self, area_id: int) -> Optional[Area]:
        pass

    @abstractmethod
    async def get_by_ids(self, area_ids: Sequence[int]) -> List[Area]:
        """Areas for the given ids; unknown ids are skipped"""
        pass

    @abstractmethod
    async def exists_by_name(self, name: str) -> bool:
        pass

    @abstractmethod
    async def create(self, area: Area) -> Area:
        pass

    @abstractmethod
    async def update(self, area: Area) -> Area:
        pass

    @abstractmethod
    async def delete(self, area_id: int) -> bool:
        pass


class IIdentityRepository(ABC):
    """
    Identity repository interface

    Identities are stored with their role-specific profile; lookups return the
    tagged entity with `profile` populated when the specialized record exists.
    """

    @abstractmethod
    async def get_by_id(self, identity_id: int) -> Optional[Identity]:
        pass

    @abstractmethod
    async def get_by_email(self, email: str) -> Optional[Identity]:
        pass

    @abstractmethod
    async def exists_by_email(self, email: str) -> bool:
        pass

    @abstractmethod
    async def get_company(self, company_id: int) -> Optional[Identity]:
        """Company identity by id; None unless the company record exists"""
        pass

    @abstractmethod
    async def get_student(self, student_id: int) -> Optional[Identity]:
        """Student identity by id; None unless the student record exists"""
        pass

    @abstractmethod
    async def get_company_by_tax_id(self, tax_id: str) -> Optional[Identity]:
        pass

    @abstractmethod
    async def get_student_by_national_id(self, national_id: str) -> Optional[Identity]:
        pass

    @abstractmethod
    async def exists_by_tax_id(self, tax_id: str) -> bool:
        pass

    @abstractmethod
    async def exists_by_national_id(self, national_id: str) -> bool:
        pass

    @abstractmethod
    async def list_by_role(self, role: Role) -> List[Identity]:
        pass

    @abstractmethod
    async def count_by_role(self, role: Role) -> int:
        pass

    @abstractmethod
    async def create(self, identity: Identity) -> Identity:
        """Persist identity and its profile record"""
        pass

    @abstractmethod
    async def update(self, identity: Identity) -> Identity:
        """Overwrite identity and profile fields (role is never changed)"""
        pass

    @abstractmethod
    async def delete(self, identity_id: int) -> bool:
        """Delete identity, its profile and dependent offers/applications"""
        pass


class IJobOfferRepository(ABC):
    """Job offer repository interface"""

    @abstractmethod
    async def get_by_id(self, offer_id: int, for_update: bool = False) -> Optional[JobOffer]:
        """With for_update the offer row stays locked until the transaction ends"""
        pass

    @abstractmethod
    async def list_all(self) -> List[JobOffer]:
        pass

    @abstractmethod
    async def list_active(self) -> List[JobOffer]:
        pass

    @abstractmethod
    async def list_active_by_company(self, company_id: int) -> List[JobOffer]:
        pass

    @abstractmethod
    async def list_active_by_area(self, area_id: int) -> List[JobOffer]:
        pass

    @abstractmethod
    async def list_active_by_areas(self, area_ids: Sequence[int]) -> List[JobOffer]:
        pass

    @abstractmethod
    async def count_by_active(self, is_active: bool) -> int:
        pass

    @abstractmethod
    async def count_active_by_area(self) -> List[Tuple[str, int]]:
        """(area name, active offer count) for areas with open offers"""
        pass

    @abstractmethod
    async def exists_by_area(self, area_id: int) -> bool:
        pass

    @abstractmethod
    async def create(self, offer: JobOffer) -> JobOffer:
        pass

    @abstractmethod
    async def update(self, offer: JobOffer) -> JobOffer:
        """Persist mutable fields and lifecycle state; company is never reassigned"""
        pass

    @abstractmethod
    async def delete(self, offer_id: int) -> bool:
        """Delete offer and its applications"""
        pass


class IApplicationRepository(ABC):
    """Application repository interface"""

    @abstractmethod
    async def get_by_id(self, application_id: int) -> Optional[Application]:
        pass

    @abstractmethod
    async def get_by_student_and_offer(
        self,
        student_id: int,
        job_offer_id: int
    ) -> Optional[Application]:
        pass

    @abstractmethod
    async def exists_by_student_and_offer(self, student_id: int, job_offer_id: int) -> bool:
        pass

    @abstractmethod
    async def list_all(self) -> List[Application]:
        pass

    @abstractmethod
    async def list_by_student(self, student_id: int) -> List[Application]:
        pass

    @abstractmethod
    async def list_by_job_offer(self, job_offer_id: int) -> List[Application]:
        pass

    @abstractmethod
    async def list_by_company(self, company_id: int) -> List[Application]:
        pass

    @abstractmethod
    async def count_by_student(self, student_id: int) -> int:
        pass

    @abstractmethod
    async def count_by_job_offer(self, job_offer_id: int) -> int:
        pass

    @abstractmethod
    async def create(self, application: Application) -> Application:
        """
        Persist a new application

        Raises:
            DuplicateResourceException: (student, job offer) pair already stored
        """
        pass

    @abstractmethod
    async def update_status(
        self,
        application_id: int,
        status: ApplicationStatus
    ) -> Application:
        pass

    @abstractmethod
    async def delete(self, application_id: int) -> bool:
        pass
