"""
Application Endpoints
/api/applications/* routes (also mounted at the legacy /api/application)
"""
from typing import List

from fastapi import APIRouter, Depends, Query, Response, status

from internship_portal.core.exceptions import AuthorizationException, ResourceNotFoundException
from internship_portal.domain.enums import Role
from internship_portal.application.services.applications import ApplicationService
from internship_portal.application.services.security.context import CallerContext
from internship_portal.presentation.api.v1.container import get_application_service
from internship_portal.presentation.api.v1.dependencies import get_caller_context, require_roles
from internship_portal.presentation.api.v1.schemas.application import (
    ApplicationRequest,
    ApplicationResponse,
    ApplicationStatusRequest,
    CountResponse,
    ExistsResponse,
)
from internship_portal.presentation.api.v1.validators import (
    ensure_valid,
    parse_status,
    validate_application,
)


router = APIRouter()


def _many(applications) -> List[ApplicationResponse]:
    return [ApplicationResponse.from_entity(a) for a in applications]


@router.get("", response_model=List[ApplicationResponse])
async def list_applications(service: ApplicationService = Depends(get_application_service)):
    return _many(await service.list_all())


@router.get("/exists", response_model=ExistsResponse)
async def application_exists(
    student_id: int = Query(alias="studentId"),
    job_offer_id: int = Query(alias="jobOfferId"),
    service: ApplicationService = Depends(get_application_service)
):
    return ExistsResponse(exists=await service.exists(student_id, job_offer_id))


@router.get("/student/{student_id}", response_model=List[ApplicationResponse])
async def list_applications_by_student(
    student_id: int,
    service: ApplicationService = Depends(get_application_service)
):
    return _many(await service.list_by_student(student_id))


@router.get("/student/{student_id}/count", response_model=CountResponse)
async def count_applications_by_student(
    student_id: int,
    service: ApplicationService = Depends(get_application_service)
):
    return CountResponse(total=await service.count_by_student(student_id))


@router.get("/student/{student_id}/job-offer/{job_offer_id}", response_model=ApplicationResponse)
async def get_application_by_student_and_offer(
    student_id: int,
    job_offer_id: int,
    service: ApplicationService = Depends(get_application_service)
):
    application = await service.find(student_id, job_offer_id)
    if application is None:
        raise ResourceNotFoundException("Application", f"student={student_id}, jobOffer={job_offer_id}")
    return ApplicationResponse.from_entity(application)


@router.get("/job-offer/{job_offer_id}", response_model=List[ApplicationResponse])
async def list_applications_by_job_offer(
    job_offer_id: int,
    service: ApplicationService = Depends(get_application_service)
):
    return _many(await service.list_by_job_offer(job_offer_id))


@router.get("/job-offer/{job_offer_id}/count", response_model=CountResponse)
async def count_applications_by_job_offer(
    job_offer_id: int,
    service: ApplicationService = Depends(get_application_service)
):
    return CountResponse(total=await service.count_by_job_offer(job_offer_id))


@router.get(
    "/company/{company_id}",
    response_model=List[ApplicationResponse],
    dependencies=[Depends(require_roles(Role.ADMIN, Role.COMPANY))],
)
async def list_applications_by_company(
    company_id: int,
    service: ApplicationService = Depends(get_application_service)
):
    """Applications to any offer of the company"""
    return _many(await service.list_by_company(company_id))


@router.get("/{application_id}", response_model=ApplicationResponse)
async def get_application(application_id: int, service: ApplicationService = Depends(get_application_service)):
    return ApplicationResponse.from_entity(await service.get(application_id))


@router.post("", response_model=ApplicationResponse, status_code=status.HTTP_201_CREATED)
async def create_application(
    request: ApplicationRequest,
    caller: CallerContext = Depends(get_caller_context),
    service: ApplicationService = Depends(get_application_service)
):
    """
    Apply to a job offer

    Students apply as themselves; status and dataInscricao from the body
    are ignored.
    """
    ensure_valid(validate_application(request))

    own_id = caller.identity.id
    student_id = request.student.id if request.student and request.student.id is not None else own_id
    if student_id != own_id:
        raise AuthorizationException("Students can only apply on their own behalf")

    application = await service.create(student_id, request.job_offer.id)
    return ApplicationResponse.from_entity(application)


@router.patch("/{application_id}/status", response_model=ApplicationResponse)
async def update_application_status(
    application_id: int,
    request: ApplicationStatusRequest,
    service: ApplicationService = Depends(get_application_service)
):
    new_status = parse_status(request.status)
    return ApplicationResponse.from_entity(await service.set_status(application_id, new_status))


@router.delete("/{application_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_application(application_id: int, service: ApplicationService = Depends(get_application_service)):
    await service.delete(application_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
