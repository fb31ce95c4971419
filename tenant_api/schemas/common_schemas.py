from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from tenant_api.models.base import utcnow


class CamelModel(BaseModel):
    """Base schema: camelCase on the wire, snake_case in Python"""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


class MessageResponse(CamelModel):
    message: str
    timestamp: datetime = Field(default_factory=utcnow)


class ErrorResponse(CamelModel):
    """Body of every handled error response"""

    error: bool = True
    message: str
    error_code: str
    timestamp: datetime = Field(default_factory=utcnow)


class PageInfo(CamelModel):
    """Paging fields shared by list responses"""

    current_page: int
    total_items: int
    total_pages: int
    page_size: int
