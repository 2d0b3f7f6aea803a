"""Shared pydantic base for models exchanged with the editor.

The editor speaks camelCase JSON (isValid, recipientType, createdAt);
Python code uses snake_case attributes. Both spellings are accepted
on input.
"""

from pydantic import BaseModel
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = {
        "alias_generator": to_camel,
        "populate_by_name": True,
    }
