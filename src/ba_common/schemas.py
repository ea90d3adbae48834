"""Shared pydantic base and pagination schema.

Wire format is camelCase (``nftId``, ``royaltyPercentage``); snake_case keys
are accepted on input so Python callers can build models by field name.
"""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_wire(self) -> dict:
        return self.model_dump(by_alias=True, mode="json")


class Pagination(CamelModel):
    page: int
    limit: int
    total: int
    pages: int
