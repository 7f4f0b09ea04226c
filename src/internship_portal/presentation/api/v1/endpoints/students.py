"""
Student Endpoints
/api/students/* routes
"""
from typing import List

from fastapi import APIRouter, Depends, Response, status

from internship_portal.application.services.students import StudentData, StudentService
from internship_portal.infrastructure.services.resume_renderer import RESUME_FILENAME
from internship_portal.presentation.api.v1.container import get_student_service
from internship_portal.presentation.api.v1.schemas.student import StudentRequest, StudentResponse
from internship_portal.presentation.api.v1.validators import ensure_valid, validate_student


router = APIRouter()


def _to_data(request: StudentRequest) -> StudentData:
    return StudentData(
        name=request.name,
        email=request.email.strip(),
        national_id=request.national_id.strip(),
        password=request.password,
        phone=request.phone,
        course=request.course,
        birthdate=request.birthdate,
        linkedin=request.linkedin,
        github=request.github,
        portfolio=request.portfolio,
        bio=request.bio,
        education=[e.to_entity() for e in request.education],
        experience=[e.to_entity() for e in request.experience],
        skills=[s.to_entity() for s in request.skills],
        interest_area_ids=[ref.id for ref in request.interest_areas],
    )


@router.get("", response_model=List[StudentResponse])
async def list_students(service: StudentService = Depends(get_student_service)):
    return [StudentResponse.from_entity(s) for s in await service.list_all()]


@router.get("/cpf/{cpf}", response_model=StudentResponse)
async def get_student_by_cpf(cpf: str, service: StudentService = Depends(get_student_service)):
    return StudentResponse.from_entity(await service.get_by_national_id(cpf))


@router.get("/{student_id}", response_model=StudentResponse)
async def get_student(student_id: int, service: StudentService = Depends(get_student_service)):
    return StudentResponse.from_entity(await service.get(student_id))


@router.get("/{student_id}/resume")
async def download_resume(student_id: int, service: StudentService = Depends(get_student_service)):
    """PDF resume as an attachment"""
    pdf = await service.render_resume(student_id)
    return Response(
        content=pdf,
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="{RESUME_FILENAME}"'},
    )


@router.post("", response_model=StudentResponse, status_code=status.HTTP_201_CREATED)
async def register_student(request: StudentRequest, service: StudentService = Depends(get_student_service)):
    ensure_valid(validate_student(request, creating=True))
    return StudentResponse.from_entity(await service.register(_to_data(request)))


@router.put("/{student_id}", response_model=StudentResponse)
async def update_student(
    student_id: int,
    request: StudentRequest,
    service: StudentService = Depends(get_student_service)
):
    ensure_valid(validate_student(request, creating=False))
    return StudentResponse.from_entity(await service.update(student_id, _to_data(request)))


@router.delete("/{student_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_student(student_id: int, service: StudentService = Depends(get_student_service)):
    await service.delete(student_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
