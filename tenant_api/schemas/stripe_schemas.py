from tenant_api.schemas.common_schemas import CamelModel


class ConnectAccountResponse(CamelModel):
    onboarding_url: str
    account_id: str
