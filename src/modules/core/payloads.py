"""Turning DRF request bodies into validated DTOs."""

from __future__ import annotations

from typing import Any, Dict, Type, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError
from rest_framework.request import Request

from modules.core.errors import ValidationError

DTO = TypeVar("DTO", bound=BaseModel)


def request_payload(request: Request) -> Dict[str, Any]:
    """The request body as a plain dict.

    Form-encoded bodies (``QueryDict``) are flattened to their last value
    per key, which is what the jQuery admin forms send.
    """
    data = request.data
    if hasattr(data, "dict"):
        return data.dict()
    if isinstance(data, dict):
        return dict(data)
    raise ValidationError("Request body must be an object.")


def build_dto(dto_class: Type[DTO], data: Dict[str, Any]) -> DTO:
    """Validate ``data`` into ``dto_class`` or raise an operational 400."""
    try:
        return dto_class.model_validate(data)
    except PydanticValidationError as exc:
        problems = "; ".join(
            f"{'.'.join(str(part) for part in error['loc']) or 'body'}: {error['msg']}"
            for error in exc.errors()
        )
        raise ValidationError(problems) from exc
