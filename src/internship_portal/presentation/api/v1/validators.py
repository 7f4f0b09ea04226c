"""
Request Validation
Explicit checks on write payloads; each returns a list of field errors
"""
from typing import List, Optional

from internship_portal.core.exceptions import FieldError, ValidationException
from internship_portal.domain.enums import ApplicationStatus, Modality
from internship_portal.domain.value_objects import Email
from .schemas.admin import AdminCreateRequest
from .schemas.application import ApplicationRequest
from .schemas.area import AreaRequest
from .schemas.auth import LoginRequest
from .schemas.company import CompanyRequest
from .schemas.job_offer import JobOfferRequest
from .schemas.student import StudentRequest


def _blank(value: Optional[str]) -> bool:
    return value is None or not value.strip()


def _required(errors: List[FieldError], field: str, value: Optional[str]) -> None:
    if _blank(value):
        errors.append(FieldError(field, "is required"))


def _email(errors: List[FieldError], value: Optional[str]) -> None:
    if _blank(value):
        errors.append(FieldError("email", "is required"))
    elif not Email.is_valid(value.strip()):
        errors.append(FieldError("email", "must be a valid e-mail address"))


def _area_refs(errors: List[FieldError], field: str, refs) -> None:
    for index, ref in enumerate(refs):
        if ref.id is None:
            errors.append(FieldError(f"{field}[{index}].id", "is required"))


def ensure_valid(errors: List[FieldError]) -> None:
    if errors:
        raise ValidationException(errors)


def validate_login(request: LoginRequest) -> List[FieldError]:
    errors: List[FieldError] = []
    _required(errors, "email", request.email)
    _required(errors, "senha", request.password)
    return errors


def validate_area(request: AreaRequest) -> List[FieldError]:
    errors: List[FieldError] = []
    _required(errors, "nome", request.name)
    if request.name and len(request.name.strip()) > 120:
        errors.append(FieldError("nome", "must have at most 120 characters"))
    return errors


def validate_admin(request: AdminCreateRequest) -> List[FieldError]:
    errors: List[FieldError] = []
    _required(errors, "nome", request.name)
    _email(errors, request.email)
    _required(errors, "senha", request.password)
    _required(errors, "telefone", request.phone)
    return errors


def validate_company(request: CompanyRequest, creating: bool) -> List[FieldError]:
    errors: List[FieldError] = []
    _required(errors, "nome", request.name)
    _email(errors, request.email)
    if creating:
        _required(errors, "senha", request.password)
    _required(errors, "cnpj", request.tax_id)
    _required(errors, "telefone", request.phone)
    _required(errors, "endereco", request.address)
    _area_refs(errors, "areasAtuacao", request.practice_areas)
    return errors


def validate_student(request: StudentRequest, creating: bool) -> List[FieldError]:
    errors: List[FieldError] = []
    _required(errors, "nome", request.name)
    _email(errors, request.email)
    if creating:
        _required(errors, "senha", request.password)
    _required(errors, "cpf", request.national_id)
    _required(errors, "telefone", request.phone)
    _required(errors, "curso", request.course)

    for index, item in enumerate(request.education):
        _required(errors, f"educacao[{index}].instituicao", item.institution)
        _required(errors, f"educacao[{index}].curso", item.course)
        if item.start_date and item.end_date and item.end_date < item.start_date:
            errors.append(FieldError(f"educacao[{index}].dataFim", "must not be before dataInicio"))

    for index, item in enumerate(request.experience):
        _required(errors, f"experiencia[{index}].empresa", item.company)
        _required(errors, f"experiencia[{index}].cargo", item.role_title)
        if item.start_date and item.end_date and item.end_date < item.start_date:
            errors.append(FieldError(f"experiencia[{index}].dataFim", "must not be before dataInicio"))

    for index, item in enumerate(request.skills):
        _required(errors, f"habilidades[{index}].nome", item.name)
        if item.level is not None and not 1 <= item.level <= 5:
            errors.append(FieldError(f"habilidades[{index}].nivel", "must be between 1 and 5"))

    _area_refs(errors, "areasInteresse", request.interest_areas)
    return errors


def validate_job_offer(request: JobOfferRequest) -> List[FieldError]:
    errors: List[FieldError] = []
    _required(errors, "titulo", request.title)
    _required(errors, "descricao", request.description)

    if _blank(request.modality):
        errors.append(FieldError("modalidade", "is required"))
    elif request.modality not in {m.value for m in Modality}:
        allowed = ", ".join(m.value for m in Modality)
        errors.append(FieldError("modalidade", f"must be one of {allowed}"))

    _required(errors, "localizacao", request.location)
    _required(errors, "requisitos", request.requirements)

    if request.weekly_hours is None:
        errors.append(FieldError("cargaHoraria", "is required"))
    elif request.weekly_hours <= 0:
        errors.append(FieldError("cargaHoraria", "must be positive"))

    if request.area is None or request.area.id is None:
        errors.append(FieldError("area.id", "is required"))
    return errors


def validate_application(request: ApplicationRequest) -> List[FieldError]:
    errors: List[FieldError] = []
    if request.job_offer is None or request.job_offer.id is None:
        errors.append(FieldError("jobOffer.id", "is required"))
    return errors


def parse_status(value: Optional[str]) -> ApplicationStatus:
    """Application status from its wire name"""
    if _blank(value):
        raise ValidationException.single("status", "is required")
    try:
        return ApplicationStatus(value.strip().upper())
    except ValueError:
        allowed = ", ".join(s.value for s in ApplicationStatus)
        raise ValidationException.single("status", f"must be one of {allowed}")
