"""NoteTube schemas — intents, content hints and the note result."""

from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import BaseModel


class Intent(str, Enum):
    LEARN = "learn"
    REFERENCE = "reference"
    ACTION = "action"
    OVERVIEW = "overview"

    @classmethod
    def _missing_(cls, value: object) -> "Intent | None":
        # "skim" is the older name of the overview intent
        if isinstance(value, str):
            lowered = value.strip().lower()
            if lowered == "skim":
                return cls.OVERVIEW
            for member in cls:
                if member.value == lowered:
                    return member
        return None


class ContentType(str, Enum):
    EDUCATIONAL = "educational"
    ENTERTAINMENT = "entertainment"


class NoteFormat(str, Enum):
    MARKDOWN = "markdown"
    SENTENCE = "sentence"


class NoteResult(BaseModel):
    text: str
    intent: Intent
    content_type: Optional[ContentType] = None
    format: NoteFormat = NoteFormat.MARKDOWN
    fallback_used: bool = False
    completion_calls: int = 1


class NotesRequest(BaseModel):
    url: str
    intent: Intent
    content_type: Optional[ContentType] = None


class NotesResponse(BaseModel):
    notes: str
    intent: Intent
    format: NoteFormat
    fallback_used: bool = False


class ErrorResponse(BaseModel):
    error: str
    kind: str
