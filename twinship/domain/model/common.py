"""Entity base."""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class DomainModel(BaseModel):
    """Immutable entity serialized with camelCase keys.

    Persisted records keep the host app's camelCase shape; snake_case field
    names are still accepted when constructing models in Python.
    """

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )
