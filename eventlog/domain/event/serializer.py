"""Canonical serialization of event data."""

import json
from typing import Any, Protocol

from pydantic import BaseModel
from pydantic_core import to_jsonable_python

from eventlog.domain.shared.error import SerializationError


class Serializer(Protocol):
    """Turns domain data into the canonical string stored in the log."""

    def serialize(self, data: Any) -> str: ...


class JsonSerializer:
    """Deterministic JSON: sorted keys, compact separators, no NaN.

    Pydantic models, dataclasses, datetimes, UUIDs and enums are converted
    with pydantic's JSON-mode encoder before dumping.
    """

    def serialize(self, data: Any) -> str:
        try:
            if isinstance(data, BaseModel):
                data = data.model_dump(mode="json")
            return json.dumps(
                data,
                sort_keys=True,
                separators=(",", ":"),
                ensure_ascii=False,
                allow_nan=False,
                default=to_jsonable_python,
            )
        except (TypeError, ValueError) as e:
            raise SerializationError(f"could not map object to json: {data!r}") from e
