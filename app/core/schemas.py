from typing import Generic, List, TypeVar

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

T = TypeVar("T")


class CamelModel(BaseModel):
    """Base for API payloads: camelCase on the wire, snake_case in Python.

    Request bodies may use either spelling.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
        str_strip_whitespace=True,
    )


class DataResponse(BaseModel, Generic[T]):
    """Single-record envelope: {success, data}."""

    success: bool = True
    data: T


class WriteResponse(BaseModel, Generic[T]):
    """Envelope for create/update/delete: {success, message, data}."""

    success: bool = True
    message: str
    data: T


class ListResponse(BaseModel, Generic[T]):
    """List envelope: {success, count, data}."""

    success: bool = True
    count: int
    data: List[T]
