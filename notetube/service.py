"""NoteTube service — the entry point.

Callers hand over a URL and an intent; the transcript is extracted once and
fed straight into the synthesizer. Nothing is cached between requests.
"""

from __future__ import annotations

import logging

from .completion import CompletionClient
from .config import Settings
from .extractors.video import extract
from .schemas import ContentType, Intent, NoteResult
from .synthesizer import synthesize

logger = logging.getLogger(__name__)


def generate_notes(
    url: str,
    intent: Intent | str,
    content_type: ContentType | str | None = None,
    *,
    client: CompletionClient,
    settings: Settings,
) -> NoteResult:
    """Main entry point: URL + intent → notes.

    Extraction errors (InvalidReference, NoCaptionsAvailable, ExtractionFailed)
    are raised before any completion call; GenerationFailed comes from the
    synthesizer.
    """
    intent = Intent(intent)
    transcript = extract(url, settings)
    logger.info("Generating %s notes for %s", intent.value, transcript.video_id)
    return synthesize(transcript.text, intent, content_type, client=client)
