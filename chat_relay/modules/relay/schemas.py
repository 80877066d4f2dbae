from typing import Any

from pydantic import BaseModel, Field


class ChatRequest(BaseModel):
    # Elements ({"role": ..., "content": ...}) are forwarded verbatim;
    # only the array itself is checked.
    messages: list[Any]


class ChatReply(BaseModel):
    reply: str


class ErrorResponse(BaseModel):
    error: Any = Field(..., description="Error message or the upstream error object")
