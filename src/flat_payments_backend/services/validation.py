'''
Input validation that runs before any database access:
identifier format checks and command model validation.
'''
import re
from typing import Any, TypeVar
from uuid import UUID

from pydantic import BaseModel, ValidationError

from ..common.exceptions import InvalidFormatError, InvalidInputError

UUID_PATTERN = re.compile(
    r'[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}',
    re.IGNORECASE
)

ModelT = TypeVar('ModelT', bound=BaseModel)


def validate_id(value: Any, field: str = "ID") -> UUID:
    """
    Checks that value is a canonical 8-4-4-4-12 hex identifier and returns
    it as a UUID. Anything else raises InvalidFormatError.
    """
    if isinstance(value, UUID):
        return value
    if not isinstance(value, str) or not UUID_PATTERN.fullmatch(value):
        raise InvalidFormatError(field, value)
    return UUID(value)


def validate_command(model_cls: type[ModelT], data: Any) -> ModelT:
    """
    Validates a command payload (dict or already-built model) against its
    model. Validation errors are reported per field.
    """
    if isinstance(data, BaseModel):
        data = data.model_dump(exclude_unset=True)
    try:
        return model_cls.model_validate(data)
    except ValidationError as e:
        errors: dict[str, str] = {}
        for err in e.errors():
            field = str(err['loc'][0]) if err['loc'] else '__root__'
            errors.setdefault(field, err['msg'])
        raise InvalidInputError(errors) from e
