from datetime import datetime
from typing import Annotated

from pydantic import AfterValidator, BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from ..models import as_utc

# Timestamps read back from SQLite carry no offset; they are UTC.
UtcDatetime = Annotated[datetime, AfterValidator(as_utc)]


class CamelModel(BaseModel):
    """Base schema speaking camelCase on the wire and snake_case in Python."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class ErrorResponse(BaseModel):
    error: str
