import json
from enum import Enum
from typing import Optional, Type, TypeVar

from pydantic import BaseModel, ConfigDict, ValidationError
from pydantic.alias_generators import to_camel

E = TypeVar('E', bound='RichEnum')


###################################
# BASE MODELS
###################################
class RichBaseModel(BaseModel):
    """Base class for all rollscope records"""

    model_config = ConfigDict(extra='forbid')

    def __repr__(self) -> str:
        """Returns a detailed JSON representation for debugging."""
        return f'{self.__class__.__name__}(\n{self.model_dump_json(indent=4, exclude_none=True, by_alias=True)}\n)'

    def __str__(self) -> str:
        """Returns a more concise, user-friendly string representation."""
        return f'{self.__class__.__name__}: {json.dumps(self.model_dump(mode="json", exclude_none=True, by_alias=True), indent=2)}'

    @classmethod
    def format_validation_error(cls, error: ValidationError) -> str:
        """Format validation errors with the failing location and message."""
        error_details = []

        for err in error.errors():
            field = '.'.join(str(loc) for loc in err['loc'])
            suggestion = ''
            if err['type'] == 'missing':
                suggestion = '\n  This field is required and must be provided.'
            elif err['type'] == 'literal_error':
                allowed_values = err.get('ctx', {}).get('expected')
                if allowed_values:
                    suggestion = f'\n  Allowed values: {allowed_values}'
            error_details.append(f'❌ {field}:\n  Error: {err["msg"]}{suggestion}')

        return (
            f'ValidationError: {len(error_details)} error(s) for {cls.__name__}:\n\n'
            + '\n\n'.join(error_details)
        )


class ResourceModel(RichBaseModel):
    """
    Base class for records decoded from the upstream analysis resources.

    Upstream documents use camelCase keys; both those and the snake_case
    field names are accepted, and unknown keys are dropped.
    """

    model_config = ConfigDict(
        extra='ignore',
        alias_generator=to_camel,
        populate_by_name=True,
    )


###################################
# ENUMS
###################################
class RichEnum(Enum):
    """
    Enum with case-insensitive lookup by value and string conversion.
    """

    @classmethod
    def from_str(cls: Type[E], string: str, default: Optional[E] = None) -> E:
        """
        Retrieve enum member by string value (case-insensitive for strings).
        """
        if string is None:
            if default is not None:
                return default
            raise ValueError(f'Cannot look up None in {cls.__name__}')

        for member in cls:
            val = member.value
            if string == val or (
                isinstance(val, str) and string.lower() == val.lower()
            ):
                return member

        if default is not None:
            return default

        raise KeyError(f"'{string}' not found in {cls.__name__}")

    def __str__(self) -> str:
        return str(self.value)
