from typing import Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, StrictStr, field_validator


def _display(value) -> str:
    """JSON-style cell text: null for missing, 12 rather than 12.0."""
    if value is None:
        return "null"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


class ChatRequest(BaseModel):
    model_config = ConfigDict(extra="ignore")

    text: StrictStr = Field(min_length=1)
    lang: Optional[str] = None

    @field_validator("lang", mode="before")
    @classmethod
    def _loose_lang(cls, value):
        # lang is a hint only; anything falsy means "no hint"
        if not value:
            return None
        return value if isinstance(value, str) else str(value)


class KnowledgeRow(BaseModel):
    model_config = ConfigDict(extra="ignore")

    block: Union[str, int, float, None] = None
    state: Union[str, int, float, None] = None
    year: Union[int, str, None] = None
    metric: Union[str, int, float, None] = None
    value: Union[int, float, str, None] = None

    def render(self) -> str:
        return (f"{_display(self.block)}, {_display(self.state)}, {_display(self.year)}: "
                f"{_display(self.metric)} = {_display(self.value)}")


class ChatResponse(BaseModel):
    type: Literal["text", "table", "chart"] = "text"
    text: str
