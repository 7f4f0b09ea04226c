"""
Area Repository Implementation
SQLAlchemy-based area repository
"""
from typing import List, Optional, Sequence

from sqlalchemy import select, delete
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from loguru import logger

from internship_portal.core.exceptions import (
    DuplicateResourceException,
    RepositoryException,
)
from internship_portal.domain.entities import Area
from internship_portal.application.repositories.interfaces import IAreaRepository
from internship_portal.infrastructure.persistence.models import (
    AreaModel,
    company_areas,
    student_areas,
)
from internship_portal.infrastructure.persistence.mappers import area_to_entity


class SQLAlchemyAreaRepository(IAreaRepository):
    """SQLAlchemy implementation of area repository"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def list_all(self) -> List[Area]:
        try:
            result = await self.session.execute(select(AreaModel).order_by(AreaModel.name))
            return [area_to_entity(m) for m in result.scalars().all()]

        except Exception as e:
            logger.error(f"Failed to list areas: {str(e)}")
            raise RepositoryException(f"Failed to list areas: {str(e)}")

    async def get_by_id(self, area_id: int) -> Optional[Area]:
        try:
            model = await self.session.get(AreaModel, area_id)
            return area_to_entity(model) if model else None

        except Exception as e:
            logger.error(f"Failed to get area {area_id}: {str(e)}")
            raise RepositoryException(f"Failed to get area: {str(e)}")

    async def get_by_ids(self, area_ids: Sequence[int]) -> List[Area]:
        try:
            result = await self.session.execute(
                select(AreaModel).where(AreaModel.id.in_(list(area_ids)))
            )
            return [area_to_entity(m) for m in result.scalars().all()]

        except Exception as e:
            logger.error(f"Failed to get areas {list(area_ids)}: {str(e)}")
            raise RepositoryException(f"Failed to get areas: {str(e)}")

    async def exists_by_name(self, name: str) -> bool:
        try:
            result = await self.session.execute(
                select(AreaModel.id).where(AreaModel.name == name)
            )
            return result.scalar_one_or_none() is not None

        except Exception as e:
            logger.error(f"Failed to check area existence {name}: {str(e)}")
            raise RepositoryException(f"Failed to check area existence: {str(e)}")

    async def create(self, area: Area) -> Area:
        try:
            model = AreaModel(name=area.name)
            self.session.add(model)
            await self.session.flush()
            return area_to_entity(model)

        except IntegrityError:
            raise DuplicateResourceException("Area", "name", area.name)
        except Exception as e:
            logger.error(f"Failed to create area {area.name}: {str(e)}")
            raise RepositoryException(f"Failed to create area: {str(e)}")

    async def update(self, area: Area) -> Area:
        try:
            model = await self.session.get(AreaModel, area.id)
            if not model:
                raise RepositoryException(f"Area not found: {area.id}")

            model.name = area.name
            await self.session.flush()
            return area_to_entity(model)

        except RepositoryException:
            raise
        except IntegrityError:
            raise DuplicateResourceException("Area", "name", area.name)
        except Exception as e:
            logger.error(f"Failed to update area {area.id}: {str(e)}")
            raise RepositoryException(f"Failed to update area: {str(e)}")

    async def delete(self, area_id: int) -> bool:
        try:
            await self.session.execute(delete(company_areas).where(company_areas.c.area_id == area_id))
            await self.session.execute(delete(student_areas).where(student_areas.c.area_id == area_id))
            result = await self.session.execute(delete(AreaModel).where(AreaModel.id == area_id))
            await self.session.flush()
            return result.rowcount > 0

        except Exception as e:
            logger.error(f"Failed to delete area {area_id}: {str(e)}")
            raise RepositoryException(f"Failed to delete area: {str(e)}")
