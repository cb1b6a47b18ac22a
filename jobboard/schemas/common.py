from pydantic import BaseModel
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Response base: snake_case in Python, camelCase on the wire"""

    class Config:
        from_attributes = True  # Allows conversion from SQLAlchemy models
        alias_generator = to_camel
        populate_by_name = True
