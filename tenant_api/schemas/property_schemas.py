from pydantic import Field

from tenant_api.schemas.common_schemas import CamelModel


class PropertyCreate(CamelModel):
    name: str = Field(..., min_length=1, max_length=255)
    address: str = Field(..., min_length=1, max_length=500)
    map_link: str | None = Field(None, max_length=1000)
    manager_owner_name: str = Field(..., min_length=1, max_length=255)
    number_of_units: int = Field(..., ge=0)


class PropertyUpdate(CamelModel):
    name: str | None = Field(None, min_length=1, max_length=255)
    address: str | None = Field(None, min_length=1, max_length=500)
    map_link: str | None = Field(None, max_length=1000)
    manager_owner_name: str | None = Field(None, min_length=1, max_length=255)
    number_of_units: int | None = Field(None, ge=0)


class PropertyResponse(CamelModel):
    """Property with occupancy figures"""

    id: int
    name: str
    address: str
    map_link: str | None = None
    manager_owner_name: str
    number_of_units: int
    current_tenants_count: int
    vacancies_count: int
