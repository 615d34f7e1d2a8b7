"""Prompt templates for every intent.

learn, reference and action each use one system prompt. The overview intent
uses a family of three prompts (fast single-step, subject extraction, rewrite
from subjects) plus the forbidden-word pattern that guards the fast path.
Families are picked by the content-type hint:

  educational    instructional verbs, shared evaluative-word list
  entertainment  experiential verbs, shared evaluative-word list
  (no hint)      general family: experiential verbs only, its own word list
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from .schemas import ContentType, Intent

INTENT_PROMPTS: dict[Intent, str] = {
    Intent.LEARN: """
You are a learning assistant.

Given a video transcript, create structured study notes that include:
- Key concepts with clear explanations
- Important definitions
- Main ideas and insights
- Logical organization with headers and subheaders

Format the notes in Markdown.
""",
    Intent.REFERENCE: """
You are a reference assistant.

Given a video transcript, create a concise reference document that includes:
- Bullet-point summary of key facts
- Important terms and definitions
- Notable quotes or statistics (if present)

Format the notes in Markdown for quick lookup.
""",
    Intent.ACTION: """
You are a how-to assistant.

Given a video transcript, extract actionable steps that include:
- Numbered step-by-step instructions
- Prerequisites or requirements (if mentioned)
- Tips or warnings (only if explicitly stated)

Format the output in Markdown using numbered lists.
""",
}


@dataclass(frozen=True)
class OverviewTemplates:
    name: str
    fast: str
    scope: str
    rewrite: str
    forbidden: re.Pattern[str]

    def is_tainted(self, text: str) -> bool:
        return bool(self.forbidden.search(text))


# ── Content-type-aware families ──────────────────────────────

_EVALUATIVE_WORDS = """
FORBIDDEN words (do NOT use these or their variants):
- important, importance, valuable, value, successful, success, beneficial, benefits
- emphasizes, emphasize, highlights, highlight, key, critical, critically
- significant, significance, essential, crucial, matters, matter
- empowers, empower, empowering, empowerment, overcome, overcoming
"""

_EVALUATIVE_RE = re.compile(
    r"\b(importan(ce|t|tly)|valu(e[sd]?|able)|success(ful|fully)?|benefit(s|ed|ing|ial)?|advice"
    r"|emphasi[sz](e[sd]?|ing)|highlight(s|ed|ing)?|keys?|critical(ly|ity)?|significan(ce|t|tly)"
    r"|essential(ly)?|crucial(ly)?|overcom(e|es|ing)|matter(s|ed)?|empower(s|ed|ing|ment)?)\b",
    re.IGNORECASE,
)

_INSTRUCTIONAL_VERBS = "demonstrates, teaches, explains, walks through, covers, discusses, goes over, shows"
_EXPERIENTIAL_VERBS = "follows, explores, showcases, depicts, chronicles, presents"

_NO_INSTRUCTIONAL_VERBS = """
DO NOT use instructional verbs:
- Do NOT use: demonstrates, teaches, explains, walks through, covers, discusses, goes over
- Even if the creator shares information, describe it as narrative or experience
- This is entertainment: describe what happens, not what is taught
"""

_SUBJECT_FORMAT = """
Format:
Return as bullet points using this exact format:
- [Noun phrase]
- [Noun phrase]
- [Noun phrase]
- [Noun phrase]
"""

_SUBJECT_RULES = """
- Use concrete NOUN PHRASES only (no verbs, no actions, no adjectives)
- Each subject must be a primary topic, not a brief mention
- Do NOT include evaluative words (important, key, critical, essential, etc.)
- Do NOT include opinions, advice, or recommendations
- Do NOT describe value, benefits, or significance
"""

EDUCATIONAL = OverviewTemplates(
    name="educational",
    fast=f"""
Task: Overview Writing (Educational Content)

Write ONE natural, conversational sentence (15-25 words) describing what this educational video covers.

Tone: Casual and conversational. Imagine telling a coworker what the video teaches or explains.

Guideline structure (flexible):
The video [verb] [topic], [verb] [topic], and [verb] [topic]

Instructional/explanatory verbs to use (pick 3 different ones):
- {_INSTRUCTIONAL_VERBS}

IMPORTANT:
- Use 3 different verbs for natural variety
- Feel free to vary the sentence structure if the template sounds stiff
- Write naturally, as if casually describing the video to someone
{_EVALUATIVE_WORDS}
Rules:
- Just describe WHAT the video covers, no opinions or why it matters
- Avoid stiff phrases like "various aspects of" or "for the purpose of"
- Don't use fancy academic language

Examples:
"The video demonstrates how to use React hooks, explains state management patterns, and walks through component lifecycle basics."
"The video teaches how photosynthesis works, explains what chloroplasts do, and covers how light becomes chemical energy."
"The video walks through time-blocking methods, explains the Pomodoro technique, and demonstrates different task management tools."

Transcript:
""",
    scope=f"""
Task: Subject Extraction (Educational Content)

From the transcript, identify exactly 3-4 main subjects being taught or explained.
{_SUBJECT_FORMAT}
Rules:{_SUBJECT_RULES}
Examples:

Tech Tutorial Transcript -> Subjects:
- React hooks
- State management
- Component lifecycle
- Custom hooks

Career Advice Transcript -> Subjects:
- Career transitions
- Resume writing strategies
- Networking approaches
- Interview preparation

Now extract 3-4 subjects from the transcript below.
""",
    rewrite=f"""
Task: Overview Writing (Educational Content)

Using ONLY the subjects listed below, write ONE natural, conversational sentence (15-25 words).

Tone: Casual and conversational, like you're telling someone what the video teaches or explains.

Guideline structure (flexible):
The video [verb] [topic], [verb] [topic], and [verb] [topic]

Instructional/explanatory verbs (pick 3 different ones):
- {_INSTRUCTIONAL_VERBS}

IMPORTANT:
- Use a different verb for each subject
- Write naturally, don't force a rigid structure if it sounds awkward
{_EVALUATIVE_WORDS}
Examples:

Subjects: React hooks, State management, Component lifecycle
-> "The video demonstrates React hooks, explains how to manage state, and covers component lifecycle basics."

Subjects: Career transitions, Resume strategies, Networking approaches
-> "The video discusses switching careers in tech, covers writing better resumes, and walks through networking approaches for interviews."

Now write the overview using these subjects:

Subjects:
""",
    forbidden=_EVALUATIVE_RE,
)

ENTERTAINMENT = OverviewTemplates(
    name="entertainment",
    fast=f"""
Task: Overview Writing (Entertainment Content)

Write ONE natural, conversational sentence (15-25 words) describing what this entertainment video is about.

Tone: Casual and conversational. Imagine telling a coworker what the video shows or follows.

Guideline structure (flexible):
The video [verb] [topic], [verb] [topic], and [verb] [topic]

Narrative/experiential verbs to use (pick 3 different ones):
- {_EXPERIENTIAL_VERBS}

IMPORTANT:
- Use 3 different verbs for natural variety
- Focus on describing the EXPERIENCE or NARRATIVE, not instruction
{_NO_INSTRUCTIONAL_VERBS}{_EVALUATIVE_WORDS}
Rules:
- Just describe WHAT the video is about, no opinions or why it matters
- Avoid stiff phrases like "various aspects of" or "for the purpose of"

Examples:
"The video follows a player exploring a new game world, showcases combat mechanics, and depicts multiplayer interactions."
"The video chronicles a trip through Japan, explores local cuisine, and showcases cultural experiences in Tokyo."
"The video depicts a group's road trip adventure, follows their challenges along the way, and explores small-town encounters."

Transcript:
""",
    scope=f"""
Task: Subject Extraction (Entertainment Content)

From the transcript, identify exactly 3-4 main subjects, experiences, or narrative elements.
{_SUBJECT_FORMAT}
Rules:{_SUBJECT_RULES}- Focus on experiences, activities, places, or narrative elements, not lessons

Examples:

Gaming Stream Transcript -> Subjects:
- Game world exploration
- Combat mechanics
- Multiplayer interactions
- Character progression

Travel Vlog Transcript -> Subjects:
- Japan trip
- Local cuisine experiences
- Tokyo cultural sites
- Travel challenges

Now extract 3-4 subjects from the transcript below.
""",
    rewrite=f"""
Task: Overview Writing (Entertainment Content)

Using ONLY the subjects listed below, write ONE natural, conversational sentence (15-25 words).

Tone: Casual and conversational, like you're telling someone what the video is about.

Guideline structure (flexible):
The video [verb] [topic], [verb] [topic], and [verb] [topic]

Narrative/experiential verbs (pick 3 different ones):
- {_EXPERIENTIAL_VERBS}

IMPORTANT:
- Use a different verb for each subject
- Focus on describing the EXPERIENCE or NARRATIVE, not instruction
{_NO_INSTRUCTIONAL_VERBS}{_EVALUATIVE_WORDS}
Examples:

Subjects: Game world exploration, Combat mechanics, Multiplayer interactions
-> "The video follows a player exploring a new game world, showcases combat mechanics, and depicts multiplayer interactions."

Subjects: Daily routine, Morning activities, Behind-the-scenes moments
-> "The video follows the creator's daily routine, presents morning activities, and showcases behind-the-scenes moments."

Now write the overview using these subjects:

Subjects:
""",
    forbidden=_EVALUATIVE_RE,
)


# ── General family (no content-type hint) ────────────────────

_GENERAL_VERBS = "follows, explores, looks at, showcases, presents, gets into"

_GENERAL_WORDS = """
FORBIDDEN words (do NOT use these or their variants):
- insightful, informative, comprehensive, in-depth, detailed, thorough
- fascinating, compelling, engaging, amazing, incredible, powerful
- must-watch, essential, crucial, vital, key, important
"""

_GENERAL_RE = re.compile(
    r"\b(insight(s|ful)?|informative|comprehensive(ly)?|in-depth|detailed|thorough(ly)?"
    r"|fascinat(e|es|ed|ing)|compelling|engag(e|es|ing)|amazing(ly)?|incredibl[ey]|powerful(ly)?"
    r"|must-(watch|see)|essential(ly)?|crucial(ly)?|vital(ly)?|keys?|importan(ce|t|tly))\b",
    re.IGNORECASE,
)

GENERAL = OverviewTemplates(
    name="general",
    fast=f"""
Task: Overview Writing

Write ONE plain sentence (15-25 words) describing what happens in this video.

Start with "The video" and use up to three different verbs from this list:
- {_GENERAL_VERBS}
{_GENERAL_WORDS}
Rules:
- Describe WHAT the video shows, never how good or useful it is
- No opinions, no recommendations, no audience advice
- Keep it casual; no academic phrasing

Example:
"The video follows a chef through a busy dinner service, looks at how the kitchen is organized, and explores plating techniques."

Transcript:
""",
    scope=f"""
Task: Subject Extraction

From the transcript, list exactly 3-4 things the video is about.
{_SUBJECT_FORMAT}
Rules:{_SUBJECT_RULES}
Now extract 3-4 subjects from the transcript below.
""",
    rewrite=f"""
Task: Overview Writing

Using ONLY the subjects listed below, write ONE plain sentence (15-25 words) starting with "The video".

Use a different verb for each subject, chosen from:
- {_GENERAL_VERBS}
{_GENERAL_WORDS}
Now write the overview using these subjects:

Subjects:
""",
    forbidden=_GENERAL_RE,
)

_FAMILIES: dict[ContentType | None, OverviewTemplates] = {
    ContentType.EDUCATIONAL: EDUCATIONAL,
    ContentType.ENTERTAINMENT: ENTERTAINMENT,
    None: GENERAL,
}


def overview_templates(content_type: ContentType | None) -> OverviewTemplates:
    return _FAMILIES[content_type]
