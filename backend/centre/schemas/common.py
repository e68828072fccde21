# backend/centre/schemas/common.py

from datetime import datetime
from typing import Annotated

from pydantic import AfterValidator, BaseModel, PlainSerializer

from ..utils.time import as_utc

# Naive datetimes from the database are UTC; expose them as aware ISO strings.
UtcDateTime = Annotated[
    datetime,
    AfterValidator(as_utc),
    PlainSerializer(lambda dt: dt.isoformat(), return_type=str, when_used="json"),
]


class Message(BaseModel):
    message: str


def reject_null(value):
    """For partial updates: a field may be omitted but not cleared."""
    if value is None:
        raise ValueError("cannot be null")
    return value
