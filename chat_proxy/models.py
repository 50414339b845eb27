"""Pydantic models shared across application layers."""

from pydantic import BaseModel, ConfigDict, StrictStr


class ChatRequest(BaseModel):
    """Incoming chat payload posted by the website widget."""

    model_config = ConfigDict(extra="ignore")

    message: StrictStr


class ContentBlock(BaseModel):
    text: str


class ChatReply(BaseModel):
    """Reply shape shared by upstream responses and synthesized errors."""

    content: list[ContentBlock]

    @classmethod
    def from_text(cls, text: str) -> "ChatReply":
        return cls(content=[ContentBlock(text=text)])
