"""Tests for the note synthesizer (single-shot intents and the overview fallback)."""

import pytest
from conftest import FakeCompletionClient

from notetube.errors import ErrorKind, GenerationFailed
from notetube.prompts import EDUCATIONAL, ENTERTAINMENT, GENERAL, INTENT_PROMPTS, overview_templates
from notetube.schemas import ContentType, Intent, NoteFormat
from notetube.synthesizer import synthesize

TRANSCRIPT = "today we bake sourdough bread from scratch and shape the loaf"
CLEAN = "The video walks through mixing sourdough, explains proofing times, and shows how to shape a loaf."
TAINTED = "The video highlights the important steps of baking sourdough bread at home."
SUBJECTS = "- Sourdough mixing\n- Proofing times\n- Loaf shaping"
REWRITE = "The video covers sourdough mixing, explains proofing times, and demonstrates loaf shaping."


@pytest.mark.parametrize("intent", [Intent.LEARN, Intent.REFERENCE, Intent.ACTION])
def test_single_shot_intents_make_one_call(intent) -> None:
    client = FakeCompletionClient("# Notes\n\n- sourdough")

    result = synthesize(TRANSCRIPT, intent, client=client)

    assert result.text == "# Notes\n\n- sourdough"
    assert result.format is NoteFormat.MARKDOWN
    assert result.completion_calls == 1
    assert len(client.calls) == 1
    call = client.calls[0]
    assert call["temperature"] == 0.7
    assert call["max_tokens"] == 2000
    assert call["messages"] == [
        {"role": "system", "content": INTENT_PROMPTS[intent]},
        {"role": "user", "content": TRANSCRIPT},
    ]


def test_single_shot_ignores_content_hint() -> None:
    client = FakeCompletionClient("1. Mix\n2. Bake")
    synthesize(TRANSCRIPT, "action", "entertainment", client=client)
    assert len(client.calls) == 1


@pytest.mark.parametrize("empty", [None, "", "   \n"])
def test_single_shot_without_content_fails(empty) -> None:
    client = FakeCompletionClient(empty)
    with pytest.raises(GenerationFailed) as excinfo:
        synthesize(TRANSCRIPT, "learn", client=client)
    assert excinfo.value.kind is ErrorKind.GENERATION_FAILED


def test_client_exception_is_generation_failed_without_retry() -> None:
    client = FakeCompletionClient(RuntimeError("503 upstream"), "never used")
    with pytest.raises(GenerationFailed):
        synthesize(TRANSCRIPT, "reference", client=client)
    assert len(client.calls) == 1


def test_overview_clean_fast_path_is_one_call() -> None:
    client = FakeCompletionClient(CLEAN)

    result = synthesize(TRANSCRIPT, Intent.OVERVIEW, ContentType.EDUCATIONAL, client=client)

    assert result.text == CLEAN
    assert result.format is NoteFormat.SENTENCE
    assert result.fallback_used is False
    assert result.content_type is ContentType.EDUCATIONAL
    assert len(client.calls) == 1
    call = client.calls[0]
    assert call["temperature"] == 0.4
    assert call["max_tokens"] == 150
    assert call["messages"][0] == {"role": "system", "content": EDUCATIONAL.fast}
    assert call["messages"][1] == {"role": "user", "content": TRANSCRIPT}


def test_overview_tainted_fast_path_runs_two_step_fallback() -> None:
    client = FakeCompletionClient(TAINTED, SUBJECTS, REWRITE)

    result = synthesize(TRANSCRIPT, "overview", "educational", client=client)

    assert result.text == REWRITE
    assert result.text != TAINTED
    assert result.fallback_used is True
    assert result.completion_calls == 3
    assert len(client.calls) == 3

    extract_call = client.calls[1]
    assert extract_call["temperature"] == 0
    assert extract_call["max_tokens"] == 200
    assert extract_call["messages"] == [
        {"role": "system", "content": EDUCATIONAL.scope},
        {"role": "user", "content": TRANSCRIPT},
    ]

    rewrite_call = client.calls[2]
    assert rewrite_call["temperature"] == 0.4
    assert rewrite_call["messages"] == [{"role": "system", "content": EDUCATIONAL.rewrite + "\n" + SUBJECTS}]
    assert TRANSCRIPT not in rewrite_call["messages"][0]["content"]


def test_overview_empty_fast_path_runs_fallback() -> None:
    client = FakeCompletionClient(None, SUBJECTS, REWRITE)
    result = synthesize(TRANSCRIPT, "overview", "entertainment", client=client)
    assert result.text == REWRITE
    assert client.calls[0]["messages"][0]["content"] == ENTERTAINMENT.fast


def test_overview_subject_extraction_failure() -> None:
    client = FakeCompletionClient(TAINTED, None)
    with pytest.raises(GenerationFailed):
        synthesize(TRANSCRIPT, "overview", "educational", client=client)
    assert len(client.calls) == 2


def test_overview_rewrite_failure() -> None:
    client = FakeCompletionClient(TAINTED, SUBJECTS, "")
    with pytest.raises(GenerationFailed):
        synthesize(TRANSCRIPT, "overview", "educational", client=client)
    assert len(client.calls) == 3


def test_skim_is_overview() -> None:
    client = FakeCompletionClient(CLEAN)
    result = synthesize(TRANSCRIPT, "skim", client=client)
    assert result.intent is Intent.OVERVIEW
    assert Intent("skim") is Intent.OVERVIEW


def test_overview_without_hint_uses_general_family() -> None:
    client = FakeCompletionClient(CLEAN)
    result = synthesize(TRANSCRIPT, "overview", client=client)
    assert result.content_type is None
    assert client.calls[0]["messages"][0]["content"] == GENERAL.fast


def test_general_family_has_its_own_forbidden_words() -> None:
    client = FakeCompletionClient(
        "The video is a comprehensive look at sourdough baking, proofing and shaping loaves.",
        SUBJECTS,
        REWRITE,
    )
    result = synthesize(TRANSCRIPT, "overview", client=client)
    assert result.fallback_used is True
    assert not EDUCATIONAL.is_tainted("The video is a comprehensive look at sourdough baking.")


def test_overview_template_selection() -> None:
    assert overview_templates(ContentType.EDUCATIONAL) is EDUCATIONAL
    assert overview_templates(ContentType.ENTERTAINMENT) is ENTERTAINMENT
    assert overview_templates(None) is GENERAL


@pytest.mark.parametrize(
    "text",
    [
        "It is IMPORTANT to knead.",
        "The creator is empowering bakers.",
        "The video Highlights flour types.",
        "Key steps are shown.",
        "It emphasized hydration.",
        "Nothing else matters here.",
        "The benefits of rye flour.",
        "Importantly, the dough rests overnight.",
        "The video, highlighting rye, covers bread.",
        "It covers bread, emphasizing hydration.",
        "The loaf was successfully shaped.",
        "The baker values slow proofing.",
        "Rye is valued for flavour.",
        "The criticality of timing is shown.",
        "Temperature significantly changes the crumb.",
        "The baker overcomes a sticky dough.",
        "The starter benefited from feeding.",
        "The bakers are empowered to experiment.",
    ],
)
def test_evaluative_words_are_caught(text) -> None:
    assert EDUCATIONAL.is_tainted(text)
    assert ENTERTAINMENT.is_tainted(text)


@pytest.mark.parametrize("text", [CLEAN, "The video shows a keyboard build and a monkey puppet show."])
def test_descriptive_sentences_pass(text) -> None:
    assert not EDUCATIONAL.is_tainted(text)


@pytest.mark.parametrize(
    "text",
    [
        "The video shares insights on sourdough.",
        "The host engages viewers with a bake-off.",
        "It will engage home bakers.",
        "The crumb fascinated the judges.",
        "Importantly, the loaf is scored.",
    ],
)
def test_general_forbidden_word_inflections_are_caught(text) -> None:
    assert GENERAL.is_tainted(text)
