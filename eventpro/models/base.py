# eventpro/models/base.py
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class WireModel(BaseModel):
    """Snake_case attributes, camelCase on the wire and in the database."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)
