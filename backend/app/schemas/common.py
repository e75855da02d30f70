from datetime import datetime
from typing import Annotated, Any, Generic, Literal, TypeVar

from pydantic import AfterValidator, BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from app.core.clock import as_utc

T = TypeVar("T")

UtcDatetime = Annotated[datetime, AfterValidator(as_utc)]


class ApiModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


class Envelope(BaseModel, Generic[T]):
    status: Literal["success", "error"] = "success"
    data: T | None = None
    message: str | None = None


def success(data: Any = None, message: str | None = None) -> dict:
    return {"status": "success", "data": data, "message": message}


def failure(message: str, details: dict | None = None) -> dict:
    content: dict = {"status": "error", "message": message}
    if details:
        content["details"] = details
    return content
