from pydantic import BaseModel
from pydantic.alias_generators import to_camel

class CamelModel(BaseModel):
    """Схема с camelCase-именами в JSON (совместимость с фронтом); принимает и snake_case."""

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        from_attributes = True
