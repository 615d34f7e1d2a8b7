"""
NoteTube — intent-based notes from YouTube captions.

Usage:
    from notetube import OpenAICompletionClient, generate_notes, load_settings

    settings = load_settings()
    client = OpenAICompletionClient.from_settings(settings)

    # Study notes (Markdown)
    notes = generate_notes("https://youtu.be/dQw4w9WgXcQ", "learn", client=client, settings=settings)
    print(notes.text)

    # One neutral sentence
    overview = generate_notes(
        "https://www.youtube.com/watch?v=dQw4w9WgXcQ",
        "overview",
        content_type="entertainment",
        client=client,
        settings=settings,
    )
"""

from .completion import CompletionClient, OpenAICompletionClient
from .config import Settings, load_settings
from .errors import (
    ConfigurationError,
    ErrorKind,
    ExtractionFailed,
    GenerationFailed,
    InvalidReference,
    NoCaptionsAvailable,
    NoteTubeError,
)
from .extractors import VideoReference
from .extractors.video import Transcript, extract, normalize_vtt
from .schemas import ContentType, Intent, NoteFormat, NoteResult
from .service import generate_notes
from .synthesizer import synthesize

__all__ = [
    "CompletionClient",
    "ConfigurationError",
    "ContentType",
    "ErrorKind",
    "ExtractionFailed",
    "GenerationFailed",
    "Intent",
    "InvalidReference",
    "NoCaptionsAvailable",
    "NoteFormat",
    "NoteResult",
    "NoteTubeError",
    "OpenAICompletionClient",
    "Settings",
    "Transcript",
    "VideoReference",
    "extract",
    "generate_notes",
    "load_settings",
    "normalize_vtt",
    "synthesize",
]
