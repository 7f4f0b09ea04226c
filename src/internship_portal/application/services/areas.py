"""
Area Service
Shared catalogue of practice/interest areas
"""
from typing import List

from loguru import logger

from internship_portal.core.exceptions import (
    DuplicateResourceException,
    InvalidStateException,
    ResourceNotFoundException,
)
from internship_portal.domain.entities import Area
from internship_portal.application.repositories.interfaces import (
    IAreaRepository,
    IJobOfferRepository,
)


class AreaService:

    def __init__(self, area_repository: IAreaRepository, offer_repository: IJobOfferRepository):
        self.area_repo = area_repository
        self.offer_repo = offer_repository

    async def list_all(self) -> List[Area]:
        return await self.area_repo.list_all()

    async def get(self, area_id: int) -> Area:
        area = await self.area_repo.get_by_id(area_id)
        if area is None:
            raise ResourceNotFoundException("Area", area_id)
        return area

    async def create(self, name: str) -> Area:
        name = name.strip()
        if await self.area_repo.exists_by_name(name):
            raise DuplicateResourceException("Area", "name", name)
        area = await self.area_repo.create(Area(id=None, name=name))
        logger.info(f"Area created: {area.name} ({area.id})")
        return area

    async def update(self, area_id: int, name: str) -> Area:
        area = await self.get(area_id)
        name = name.strip()
        if name != area.name and await self.area_repo.exists_by_name(name):
            raise DuplicateResourceException("Area", "name", name)
        return await self.area_repo.update(Area(id=area.id, name=name))

    async def delete(self, area_id: int) -> None:
        await self.get(area_id)
        if await self.offer_repo.exists_by_area(area_id):
            raise InvalidStateException(f"Area {area_id} is referenced by job offers")
        await self.area_repo.delete(area_id)
        logger.info(f"Area {area_id} deleted")


async def resolve_areas(area_repo: IAreaRepository, area_ids) -> tuple:
    """Areas for the ids, preserving request order; unknown ids are an error"""
    unique_ids = list(dict.fromkeys(area_ids or []))
    if not unique_ids:
        return ()
    found = {area.id: area for area in await area_repo.get_by_ids(unique_ids)}
    missing = [area_id for area_id in unique_ids if area_id not in found]
    if missing:
        raise ResourceNotFoundException("Area", ", ".join(str(i) for i in missing))
    return tuple(found[area_id] for area_id in unique_ids)
