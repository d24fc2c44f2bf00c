"""Conversion of pydantic validation failures into board errors."""

from typing import Any, TypeVar

import pydantic
from pydantic import BaseModel

from ..errors import ValidationError

M = TypeVar("M", bound=BaseModel)


def format_errors(exc: pydantic.ValidationError) -> str:
    """Flatten pydantic errors into 'field: message; ...'."""
    parts = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err["loc"]) or "value"
        msg = err["msg"].removeprefix("Value error, ")
        parts.append(f"{loc}: {msg}")
    return "; ".join(parts)


def build(model_cls: type[M], **data: Any) -> M:
    """Construct a model, raising ValidationError instead of pydantic's."""
    try:
        return model_cls.model_validate(data)
    except pydantic.ValidationError as e:
        raise ValidationError(format_errors(e)) from e
