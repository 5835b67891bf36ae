"""Shared Pydantic base for API payloads.

Field names stay snake_case in Python; JSON uses camelCase keys and both
spellings are accepted on input.
"""
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class OrmCamelModel(CamelModel):
    model_config = ConfigDict(from_attributes=True)
