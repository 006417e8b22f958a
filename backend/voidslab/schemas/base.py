"""
Base schema: camelCase on the wire (fullName, isAdmin, ...), snake_case in Python.
Inputs accept either spelling.
"""
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


class MessageResponse(BaseModel):
    message: str
