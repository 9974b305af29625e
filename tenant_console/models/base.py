"""
Shared pydantic base for models exchanged with the platform backend.
"""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """
    Base model whose wire format uses camelCase keys.

    Fields are declared in snake_case and can be populated by either name.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )
