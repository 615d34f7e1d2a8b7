"""Error taxonomy shared by the extractor, the synthesizer and the outer surfaces.

Each exception carries a fixed ``kind`` so callers match structurally
(``exc.kind is ErrorKind.NO_CAPTIONS``) instead of comparing messages.
Messages are user-safe: no tool output, no stack detail.
"""

from __future__ import annotations

from enum import Enum


class ErrorKind(str, Enum):
    INVALID_REFERENCE = "invalid_reference"
    NO_CAPTIONS = "no_captions"
    EXTRACTION_FAILED = "extraction_failed"
    GENERATION_FAILED = "generation_failed"
    CONFIGURATION = "configuration"


class NoteTubeError(Exception):
    kind: ErrorKind = ErrorKind.EXTRACTION_FAILED
    default_message = "Something went wrong."

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.default_message)

    @property
    def message(self) -> str:
        return str(self)


class InvalidReference(NoteTubeError):
    """The input is not a recognizable YouTube video URL. Never retryable."""

    kind = ErrorKind.INVALID_REFERENCE
    default_message = "Invalid YouTube URL"


class NoCaptionsAvailable(NoteTubeError):
    """No usable caption track, or the track normalized to nothing."""

    kind = ErrorKind.NO_CAPTIONS
    default_message = "No transcript available for this video. The video may not have captions."


class ExtractionFailed(NoteTubeError):
    """Unclassified caption-tool failure. The caller may retry."""

    kind = ErrorKind.EXTRACTION_FAILED
    default_message = "Could not fetch transcript. Please try again."


class GenerationFailed(NoteTubeError):
    """The completion service returned nothing usable at some stage."""

    kind = ErrorKind.GENERATION_FAILED
    default_message = "Failed to generate notes"


class ConfigurationError(NoteTubeError):
    kind = ErrorKind.CONFIGURATION
    default_message = "NoteTube is not configured."
