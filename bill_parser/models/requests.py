from typing import Literal
from pydantic import BaseModel, Field

class ItemUpdateRequest(BaseModel):
    field: Literal["name", "price"]
    value: str = Field(default="")
