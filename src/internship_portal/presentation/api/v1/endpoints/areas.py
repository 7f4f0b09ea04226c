"""
Area Endpoints
/api/areas/* routes
"""
from typing import List

from fastapi import APIRouter, Depends, Response, status

from internship_portal.application.services.areas import AreaService
from internship_portal.presentation.api.v1.container import get_area_service
from internship_portal.presentation.api.v1.schemas.area import AreaRequest, AreaResponse
from internship_portal.presentation.api.v1.validators import ensure_valid, validate_area


router = APIRouter()


@router.get("", response_model=List[AreaResponse])
async def list_areas(service: AreaService = Depends(get_area_service)):
    return [AreaResponse.from_entity(a) for a in await service.list_all()]


@router.get("/{area_id}", response_model=AreaResponse)
async def get_area(area_id: int, service: AreaService = Depends(get_area_service)):
    return AreaResponse.from_entity(await service.get(area_id))


@router.post("", response_model=AreaResponse, status_code=status.HTTP_201_CREATED)
async def create_area(request: AreaRequest, service: AreaService = Depends(get_area_service)):
    ensure_valid(validate_area(request))
    return AreaResponse.from_entity(await service.create(request.name))


@router.put("/{area_id}", response_model=AreaResponse)
async def update_area(
    area_id: int,
    request: AreaRequest,
    service: AreaService = Depends(get_area_service)
):
    ensure_valid(validate_area(request))
    return AreaResponse.from_entity(await service.update(area_id, request.name))


@router.delete("/{area_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_area(area_id: int, service: AreaService = Depends(get_area_service)):
    await service.delete(area_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
