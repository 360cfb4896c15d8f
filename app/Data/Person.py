from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class Person(BaseModel):
    """Person value object, constructible from a single name."""
    
    model_config = ConfigDict(frozen=True)
    
    name: str = Field(..., min_length=1, max_length=255, description="Person name")
    
    def __init__(self, name: str, **data: Any) -> None:
        super().__init__(name=name, **data)
    
    def __str__(self) -> str:
        return self.name
