"""
Job Offer Endpoints
/api/job-offers/* routes
"""
from typing import List

from fastapi import APIRouter, Depends, Query, Response, status

from internship_portal.domain.enums import Modality
from internship_portal.application.services.job_offers import JobOfferData, JobOfferService
from internship_portal.application.services.security.context import CallerContext
from internship_portal.presentation.api.v1.container import get_job_offer_service
from internship_portal.presentation.api.v1.dependencies import get_caller_context
from internship_portal.presentation.api.v1.schemas.job_offer import (
    JobOfferRequest,
    JobOfferResponse,
    JobOfferStatisticsResponse,
)
from internship_portal.presentation.api.v1.validators import ensure_valid, validate_job_offer


router = APIRouter()


def _to_data(request: JobOfferRequest) -> JobOfferData:
    return JobOfferData(
        title=request.title,
        description=request.description,
        modality=Modality(request.modality),
        area_id=request.area.id,
        location=request.location,
        weekly_hours=request.weekly_hours,
        requirements=request.requirements,
    )


def _many(offers) -> List[JobOfferResponse]:
    return [JobOfferResponse.from_entity(o) for o in offers]


@router.get("", response_model=List[JobOfferResponse])
async def list_job_offers(service: JobOfferService = Depends(get_job_offer_service)):
    """Every offer, open or closed"""
    return _many(await service.list_all())


@router.get("/ativas", response_model=List[JobOfferResponse])
async def list_active_job_offers(service: JobOfferService = Depends(get_job_offer_service)):
    return _many(await service.list_active())


@router.get("/estatisticas", response_model=JobOfferStatisticsResponse)
async def job_offer_statistics(service: JobOfferService = Depends(get_job_offer_service)):
    return JobOfferStatisticsResponse.from_statistics(await service.statistics())


@router.get("/areas", response_model=List[JobOfferResponse])
async def list_job_offers_by_areas(
    ids: List[int] = Query(default=[]),
    service: JobOfferService = Depends(get_job_offer_service)
):
    """Open offers in any of the given areas, e.g. ?ids=1&ids=2"""
    return _many(await service.list_active_by_areas(ids))


@router.get("/company/{company_id}", response_model=List[JobOfferResponse])
async def list_job_offers_by_company(
    company_id: int,
    service: JobOfferService = Depends(get_job_offer_service)
):
    return _many(await service.list_active_by_company(company_id))


@router.get("/area/{area_id}", response_model=List[JobOfferResponse])
async def list_job_offers_by_area(area_id: int, service: JobOfferService = Depends(get_job_offer_service)):
    return _many(await service.list_active_by_area(area_id))


@router.get("/{offer_id}", response_model=JobOfferResponse)
async def get_job_offer(offer_id: int, service: JobOfferService = Depends(get_job_offer_service)):
    return JobOfferResponse.from_entity(await service.get(offer_id))


@router.post("", response_model=JobOfferResponse, status_code=status.HTTP_201_CREATED)
async def create_job_offer(
    request: JobOfferRequest,
    caller: CallerContext = Depends(get_caller_context),
    service: JobOfferService = Depends(get_job_offer_service)
):
    """Publish an offer for the calling company"""
    ensure_valid(validate_job_offer(request))
    return JobOfferResponse.from_entity(await service.create(_to_data(request), caller))


@router.put("/{offer_id}", response_model=JobOfferResponse)
async def update_job_offer(
    offer_id: int,
    request: JobOfferRequest,
    service: JobOfferService = Depends(get_job_offer_service)
):
    ensure_valid(validate_job_offer(request))
    return JobOfferResponse.from_entity(await service.update(offer_id, _to_data(request)))


@router.patch("/{offer_id}/encerrar", response_model=JobOfferResponse)
async def close_job_offer(offer_id: int, service: JobOfferService = Depends(get_job_offer_service)):
    return JobOfferResponse.from_entity(await service.close(offer_id))


@router.delete("/{offer_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_job_offer(offer_id: int, service: JobOfferService = Depends(get_job_offer_service)):
    await service.delete(offer_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
