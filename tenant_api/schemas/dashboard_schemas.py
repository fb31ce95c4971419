from tenant_api.schemas.common_schemas import CamelModel
from tenant_api.schemas.maintenance_schemas import MaintenanceRequestResponse


class AdminDashboardResponse(CamelModel):
    total_tenants: int
    pending_maintenance_requests: int
    total_properties: int


class ProfileData(CamelModel):
    name: str
    email: str
    property_address: str | None = None


class MaintenanceData(CamelModel):
    active_requests: int
    pending_requests: int
    completed_requests: int
    recent_requests: list[MaintenanceRequestResponse]


class TenantDashboardResponse(CamelModel):
    profile: ProfileData
    maintenance: MaintenanceData
