from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class MessageRole(str, Enum):
    HUMAN = "Human"
    AI = "AI"
    TOOL = "Tool"


class Message(BaseModel):
    """One conversation turn. Immutable once stored."""

    model_config = ConfigDict(frozen=True)

    role: MessageRole
    content: str
    session_id: str | None = None
    is_final_answer: bool = False
    created_at: datetime = Field(default_factory=datetime.now)

    def __str__(self) -> str:
        return f"{self.role.value}: {self.content}"


def human_message(content: str, session_id: str | None = None) -> Message:
    return Message(role=MessageRole.HUMAN, content=content, session_id=session_id)


def ai_message(
    content: str, session_id: str | None = None, is_final_answer: bool = False
) -> Message:
    return Message(
        role=MessageRole.AI,
        content=content,
        session_id=session_id,
        is_final_answer=is_final_answer,
    )


def tool_message(content: str, session_id: str | None = None) -> Message:
    return Message(role=MessageRole.TOOL, content=content, session_id=session_id)
