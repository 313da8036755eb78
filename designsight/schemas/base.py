# designsight/schemas/base.py
from datetime import datetime
from typing import Generic, Optional, TypeVar

from pydantic import BaseModel
from pydantic.alias_generators import to_camel

DataT = TypeVar("DataT")


class BaseSchema(BaseModel):
    """Base schema with common configuration: camelCase on the wire, snake_case in Python"""
    class Config:
        from_attributes = True
        alias_generator = to_camel
        populate_by_name = True


class TimestampMixin(BaseSchema):
    """Timestamp fields for database models"""
    created_at: datetime
    updated_at: datetime


class ApiResponse(BaseModel, Generic[DataT]):
    """Envelope for every successful response"""
    success: bool = True
    message: Optional[str] = None
    count: Optional[int] = None
    data: Optional[DataT] = None
