"""
Company Endpoints
/api/companies/* routes
"""
from typing import List

from fastapi import APIRouter, Depends, Response, status

from internship_portal.application.services.companies import CompanyData, CompanyService
from internship_portal.presentation.api.v1.container import get_company_service
from internship_portal.presentation.api.v1.schemas.company import CompanyRequest, CompanyResponse
from internship_portal.presentation.api.v1.validators import ensure_valid, validate_company


router = APIRouter()


def _to_data(request: CompanyRequest) -> CompanyData:
    return CompanyData(
        name=request.name,
        email=request.email.strip(),
        tax_id=request.tax_id.strip(),
        password=request.password,
        phone=request.phone,
        address=request.address,
        area_ids=[ref.id for ref in request.practice_areas],
    )


@router.get("", response_model=List[CompanyResponse])
async def list_companies(service: CompanyService = Depends(get_company_service)):
    return [CompanyResponse.from_entity(c) for c in await service.list_all()]


@router.get("/cnpj/{cnpj:path}", response_model=CompanyResponse)
async def get_company_by_cnpj(cnpj: str, service: CompanyService = Depends(get_company_service)):
    """CNPJ may be formatted (12.345.678/0001-99), hence the path converter"""
    return CompanyResponse.from_entity(await service.get_by_tax_id(cnpj))


@router.get("/{company_id}", response_model=CompanyResponse)
async def get_company(company_id: int, service: CompanyService = Depends(get_company_service)):
    return CompanyResponse.from_entity(await service.get(company_id))


@router.post("", response_model=CompanyResponse, status_code=status.HTTP_201_CREATED)
async def register_company(request: CompanyRequest, service: CompanyService = Depends(get_company_service)):
    ensure_valid(validate_company(request, creating=True))
    return CompanyResponse.from_entity(await service.register(_to_data(request)))


@router.put("/{company_id}", response_model=CompanyResponse)
async def update_company(
    company_id: int,
    request: CompanyRequest,
    service: CompanyService = Depends(get_company_service)
):
    ensure_valid(validate_company(request, creating=False))
    return CompanyResponse.from_entity(await service.update(company_id, _to_data(request)))


@router.delete("/{company_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_company(company_id: int, service: CompanyService = Depends(get_company_service)):
    await service.delete(company_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
