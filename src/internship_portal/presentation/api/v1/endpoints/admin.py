"""
Admin Endpoints
/api/admin/* routes, administrators only
"""
from typing import List

from fastapi import APIRouter, Depends, Response, status

from internship_portal.domain.enums import Role
from internship_portal.application.services.admin import AdminService
from internship_portal.application.services.areas import AreaService
from internship_portal.presentation.api.v1.container import get_admin_service, get_area_service
from internship_portal.presentation.api.v1.dependencies import require_roles
from internship_portal.presentation.api.v1.schemas.admin import (
    AdminCreateRequest,
    AdminResponse,
    DashboardResponse,
)
from internship_portal.presentation.api.v1.schemas.area import AreaRequest, AreaResponse
from internship_portal.presentation.api.v1.validators import ensure_valid, validate_admin, validate_area


router = APIRouter(dependencies=[Depends(require_roles(Role.ADMIN))])


@router.post("", response_model=AdminResponse, status_code=status.HTTP_201_CREATED)
async def create_admin(request: AdminCreateRequest, service: AdminService = Depends(get_admin_service)):
    ensure_valid(validate_admin(request))
    admin = await service.create_admin(
        name=request.name,
        email=request.email.strip(),
        password=request.password,
        phone=request.phone,
    )
    return AdminResponse.from_entity(admin)


@router.get("/dashboard", response_model=DashboardResponse)
async def dashboard(service: AdminService = Depends(get_admin_service)):
    return DashboardResponse.from_summary(await service.dashboard())


@router.get("/areas", response_model=List[AreaResponse])
async def list_areas(service: AreaService = Depends(get_area_service)):
    return [AreaResponse.from_entity(a) for a in await service.list_all()]


@router.get("/areas/{area_id}", response_model=AreaResponse)
async def get_area(area_id: int, service: AreaService = Depends(get_area_service)):
    return AreaResponse.from_entity(await service.get(area_id))


@router.post("/areas", response_model=AreaResponse, status_code=status.HTTP_201_CREATED)
async def create_area(request: AreaRequest, service: AreaService = Depends(get_area_service)):
    ensure_valid(validate_area(request))
    return AreaResponse.from_entity(await service.create(request.name))


@router.put("/areas/{area_id}", response_model=AreaResponse)
async def update_area(
    area_id: int,
    request: AreaRequest,
    service: AreaService = Depends(get_area_service)
):
    ensure_valid(validate_area(request))
    return AreaResponse.from_entity(await service.update(area_id, request.name))


@router.delete("/areas/{area_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_area(area_id: int, service: AreaService = Depends(get_area_service)):
    await service.delete(area_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
