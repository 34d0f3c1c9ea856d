"""Base model for all data models in the analytics core.

This module provides a base Pydantic model with common configuration
for reading records in the camelCase JSON wire format while exposing
snake_case attributes to Python code.
"""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class BaseDataModel(BaseModel):
    """Base class for all data models.

    Provides common configuration for:
    - camelCase aliases matching the JSON records of the storage layer
    - Population by either the field name or its alias
    - Validation with type coercion
    - Ignoring storage columns the analytics core does not read

    Example:
        >>> class Owner(BaseDataModel):
        ...     display_name: str
        >>> owner = Owner(displayName="Alice")
        >>> owner.display_name
        'Alice'
        >>> owner.model_dump(by_alias=True)
        {'displayName': 'Alice'}
    """

    model_config = ConfigDict(
        # Allow arbitrary types like Decimal, date, datetime
        arbitrary_types_allowed=True,
        # Accept "timeLogged" as well as "time_logged"
        alias_generator=to_camel,
        populate_by_name=True,
        validate_assignment=True,
        strict=False,
        # Storage rows carry columns (tags, imageUrl, ...) the core never reads
        extra="ignore",
        frozen=False,
    )
