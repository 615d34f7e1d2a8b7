"""Note synthesizer — turns a transcript into intent-specific notes.

learn / reference / action: one completion call, Markdown out.

overview: one sentence, produced by a fast single call. If that call returns
nothing, or its text trips the family's forbidden-word pattern, the fast text
is discarded and a two-step fallback runs instead:

  Start → FastAttempt → Accepted
                      → NeedsFallback → ExtractSubjects → RewriteFromSubjects → Accepted

The rewrite only sees the extracted subjects, never the raw transcript.
Either fallback step returning nothing raises GenerationFailed. The word
check is a cheap post-hoc guard, not a guarantee.
"""

from __future__ import annotations

import logging

from .completion import CompletionClient, Message
from .errors import GenerationFailed, NoteTubeError
from .prompts import INTENT_PROMPTS, OverviewTemplates, overview_templates
from .schemas import ContentType, Intent, NoteFormat, NoteResult

logger = logging.getLogger(__name__)

NOTES_TEMPERATURE = 0.7
NOTES_MAX_TOKENS = 2000
OVERVIEW_TEMPERATURE = 0.4
OVERVIEW_MAX_TOKENS = 150
SUBJECTS_TEMPERATURE = 0.0
SUBJECTS_MAX_TOKENS = 200


class _Session:
    """Counts calls for one synthesize() run and normalizes failures."""

    def __init__(self, client: CompletionClient) -> None:
        self.client = client
        self.calls = 0

    def complete(self, messages: list[Message], temperature: float, max_tokens: int) -> str | None:
        self.calls += 1
        try:
            content = self.client.complete(messages, temperature=temperature, max_tokens=max_tokens)
        except NoteTubeError:
            raise
        except Exception as exc:
            logger.warning("Completion call failed: %s", exc)
            raise GenerationFailed() from exc
        if content is None or not content.strip():
            return None
        return content


def _single_shot(session: _Session, transcript: str, intent: Intent) -> NoteResult:
    notes = session.complete(
        [
            {"role": "system", "content": INTENT_PROMPTS[intent]},
            {"role": "user", "content": transcript},
        ],
        NOTES_TEMPERATURE,
        NOTES_MAX_TOKENS,
    )
    if notes is None:
        logger.warning("No content returned for intent=%s", intent.value)
        raise GenerationFailed()
    return NoteResult(text=notes, intent=intent, format=NoteFormat.MARKDOWN, completion_calls=session.calls)


def _overview(session: _Session, transcript: str, templates: OverviewTemplates) -> tuple[str, bool]:
    """Run the overview state machine. Returns (sentence, fallback_used)."""
    overview = session.complete(
        [
            {"role": "system", "content": templates.fast},
            {"role": "user", "content": transcript},
        ],
        OVERVIEW_TEMPERATURE,
        OVERVIEW_MAX_TOKENS,
    )
    if overview is not None and not templates.is_tainted(overview):
        return overview, False

    logger.info(
        "Overview fallback (%s family): %s",
        templates.name, "empty output" if overview is None else "forbidden words detected",
    )
    logger.debug("Fast-path output: %s", overview or "(empty)")

    subjects = session.complete(
        [
            {"role": "system", "content": templates.scope},
            {"role": "user", "content": transcript},
        ],
        SUBJECTS_TEMPERATURE,
        SUBJECTS_MAX_TOKENS,
    )
    if subjects is None:
        logger.warning("Subject extraction returned nothing")
        raise GenerationFailed()
    logger.debug("Extracted subjects: %s", subjects)

    rewritten = session.complete(
        [{"role": "system", "content": templates.rewrite + "\n" + subjects}],
        OVERVIEW_TEMPERATURE,
        OVERVIEW_MAX_TOKENS,
    )
    if rewritten is None:
        logger.warning("Overview rewrite returned nothing")
        raise GenerationFailed()
    logger.debug("Fallback overview: %s", rewritten)
    return rewritten, True


def synthesize(
    transcript: str,
    intent: Intent | str,
    content_type: ContentType | str | None = None,
    *,
    client: CompletionClient,
) -> NoteResult:
    """Generate notes for a transcript.

    Args:
        transcript: Plain transcript text.
        intent: learn, reference, action or overview ("skim" is accepted too).
        content_type: Optional educational/entertainment hint. Only the
            overview intent uses it; without it the general family applies.
        client: Completion client, built once by the caller.

    Raises GenerationFailed when any required call yields no content.
    """
    intent = Intent(intent)
    hint = ContentType(content_type) if content_type else None
    session = _Session(client)

    if intent is not Intent.OVERVIEW:
        return _single_shot(session, transcript, intent)

    text, fallback_used = _overview(session, transcript, overview_templates(hint))
    return NoteResult(
        text=text,
        intent=intent,
        content_type=hint,
        format=NoteFormat.SENTENCE,
        fallback_used=fallback_used,
        completion_calls=session.calls,
    )
