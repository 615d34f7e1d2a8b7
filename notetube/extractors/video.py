"""Video extractor — turn a YouTube URL into a clean plain-text transcript.

Captions come from yt-dlp as WebVTT files written next to a per-call random
prefix in the temp dir. English variants are tried first; otherwise the
caption listing is parsed and one other language is picked explicitly.
Every file under the prefix is removed before returning, success or not.
"""

from __future__ import annotations

import logging
import re
import shutil
import subprocess
import tempfile
import uuid
from dataclasses import dataclass
from pathlib import Path

from ..config import Settings
from ..errors import ExtractionFailed, NoCaptionsAvailable, NoteTubeError
from . import VideoReference

logger = logging.getLogger(__name__)

# Probe order when looking for the English download. First hit wins.
ENGLISH_VARIANTS = ("en", "en-US", "en-GB", "en-orig")


# ── Data classes ──────────────────────────────────────────────

@dataclass(slots=True)
class CaptionTrack:
    language: str
    path: Path
    fmt: str = "vtt"

    def read_text(self) -> str:
        return self.path.read_text(encoding="utf-8", errors="replace")


@dataclass(slots=True)
class CaptionListing:
    language: str
    automatic: bool
    formats: tuple[str, ...] = ()


@dataclass(slots=True)
class Transcript:
    video_id: str
    language: str
    text: str

    def __str__(self) -> str:
        return self.text


# ── VTT normalization ────────────────────────────────────────

_TAG_RE = re.compile(r"<[^>]+>")
_TIMING_RESIDUE_RE = re.compile(r"[\d:.,\s>-]+")
_ENTITIES = (
    ("&nbsp;", " "),
    ("&lt;", "<"),
    ("&gt;", ">"),
    ("&quot;", '"'),
    ("&#39;", "'"),
    ("&amp;", "&"),  # last, so "&amp;lt;" stays "&lt;"
)


def _clean_line(line: str) -> str:
    line = _TAG_RE.sub("", line)
    for entity, char in _ENTITIES:
        line = line.replace(entity, char)
    return line.strip()


def normalize_vtt(raw_text: str) -> str:
    """Reduce a WebVTT file to its spoken text.

    Header, metadata, cue indexes and timing lines are dropped, inline tags
    and the common HTML entities are cleaned, and lines already emitted are
    skipped (auto-generated captions repeat each line as they roll).

    A second pass returns its input unchanged only for clean text: no
    ``<...>`` spans and no entity references. Decoded ``&lt;``/``&gt;`` can
    form such a span, which a second pass strips as a tag.
    """
    kept: list[str] = []
    seen: set[str] = set()

    for original in raw_text.splitlines():
        line = original.strip()
        if line.startswith("WEBVTT") or line.startswith("Kind:") or line.startswith("Language:"):
            continue
        if "-->" in line:
            continue
        if not line or line.isdigit():
            continue
        if _TIMING_RESIDUE_RE.fullmatch(line):
            continue

        cleaned = _clean_line(line)
        if cleaned and cleaned not in seen:
            seen.add(cleaned)
            kept.append(cleaned)

    return " ".join(kept)


# ── Caption listing ──────────────────────────────────────────

_LISTING_ROW_RE = re.compile(r"^([a-z]{2,3}(?:-[A-Za-z0-9]+)*)\s+(.+)$")
_KNOWN_FORMATS = {"vtt", "ttml", "srv1", "srv2", "srv3", "json3", "srt"}


def parse_caption_listing(output: str) -> list[CaptionListing]:
    """Parse `yt-dlp --list-subs` output into rows, in listing order."""
    listings: list[CaptionListing] = []
    automatic: bool | None = None

    for line in output.splitlines():
        lowered = line.lower()
        if "available automatic captions" in lowered:
            automatic = True
            continue
        if "available subtitles" in lowered:
            automatic = False
            continue
        if automatic is None:
            continue

        match = _LISTING_ROW_RE.match(line.strip())
        if not match:
            continue
        tokens = match.group(2).replace(",", " ").split()
        formats = tuple(t for t in tokens if t in _KNOWN_FORMATS)
        if formats:
            listings.append(CaptionListing(language=match.group(1), automatic=automatic, formats=formats))

    return listings


def _is_english(language: str) -> bool:
    return language == "en" or language.startswith("en-")


def _listing_rank(listing: CaptionListing) -> int:
    if not listing.automatic:
        return 0
    if listing.language.endswith("-orig"):
        return 1
    return 2


def select_fallback_language(listings: list[CaptionListing]) -> CaptionListing | None:
    """Pick one non-English track that yt-dlp can deliver as WebVTT.

    Manual tracks beat automatic ones; among automatic tracks the "-orig"
    (spoken-language) track beats machine translations. Ties keep listing order.
    English rows are skipped, since the first download already asked for "en.*".
    """
    usable = [item for item in listings if "vtt" in item.formats and not _is_english(item.language)]
    return min(usable, key=_listing_rank, default=None)


# ── yt-dlp ───────────────────────────────────────────────────

def _run_tool(cmd: list[str], timeout: float) -> subprocess.CompletedProcess | None:
    """Run yt-dlp. A timeout returns None; the caller still probes for files."""
    try:
        result = subprocess.run(cmd, capture_output=True, text=True, timeout=timeout, check=False)
    except subprocess.TimeoutExpired:
        logger.warning("yt-dlp timed out after %.0fs (%s)", timeout, " ".join(cmd[1:3]))
        return None
    except OSError as exc:
        logger.error("Could not run yt-dlp: %s", exc)
        raise ExtractionFailed() from exc

    if result.returncode != 0:
        logger.warning("yt-dlp exited with status %d", result.returncode)
    return result


def _download_cmd(yt_dlp_path: str, langs: str, prefix: Path, url: str, *, manual: bool, auto: bool) -> list[str]:
    cmd = [yt_dlp_path]
    if auto:
        cmd.append("--write-auto-sub")
    if manual:
        cmd.append("--write-sub")
    cmd += [
        "--sub-langs", langs,
        "--skip-download",
        "--sub-format", "vtt",
        "--no-warnings",
        "-o", str(prefix),
        url,
    ]
    return cmd


def _probe(prefix: Path, languages: tuple[str, ...]) -> CaptionTrack | None:
    for language in languages:
        path = prefix.parent / f"{prefix.name}.{language}.vtt"
        if path.exists():
            return CaptionTrack(language=language, path=path)
    return None


def _find_caption_track(
    yt_dlp_path: str,
    reference: VideoReference,
    prefix: Path,
    settings: Settings,
) -> CaptionTrack | None:
    url = reference.watch_url

    # 1. English, manual and auto-generated. A non-zero exit may still leave a file.
    _run_tool(
        _download_cmd(yt_dlp_path, "en.*", prefix, url, manual=True, auto=True),
        settings.download_timeout,
    )
    track = _probe(prefix, ENGLISH_VARIANTS)
    if track:
        return track

    # 2. Any other language from the listing
    listed = _run_tool([yt_dlp_path, "--list-subs", url], settings.list_timeout)
    if listed is None or not listed.stdout:
        return None

    choice = select_fallback_language(parse_caption_listing(listed.stdout))
    if choice is None:
        logger.info("No WebVTT captions listed for %s", reference.video_id)
        return None

    logger.info(
        "No English captions for %s, falling back to %s (%s)",
        reference.video_id, choice.language, "auto" if choice.automatic else "manual",
    )
    _run_tool(
        _download_cmd(
            yt_dlp_path, choice.language, prefix, url,
            manual=not choice.automatic, auto=choice.automatic,
        ),
        settings.download_timeout,
    )
    return _probe(prefix, (choice.language,))


def _temp_prefix(settings: Settings) -> Path:
    base = Path(settings.temp_dir) if settings.temp_dir else Path(tempfile.gettempdir())
    return base / f"notetube-{uuid.uuid4().hex}"


def _cleanup(prefix: Path) -> None:
    """Best-effort removal of everything yt-dlp wrote under the prefix."""
    try:
        leftovers = list(prefix.parent.glob(f"{prefix.name}*"))
    except OSError as exc:
        logger.debug("Could not list temp files for %s: %s", prefix, exc)
        return
    for path in leftovers:
        try:
            path.unlink()
        except OSError as exc:
            logger.debug("Could not remove %s: %s", path, exc)


# ── Entry point ──────────────────────────────────────────────

def extract(url: str, settings: Settings) -> Transcript:
    """Extract a plain-text transcript for a YouTube URL.

    Raises InvalidReference, NoCaptionsAvailable or ExtractionFailed.
    """
    reference = VideoReference.from_url(url)

    yt_dlp_path = shutil.which(settings.yt_dlp)
    if not yt_dlp_path:
        logger.error("yt-dlp executable %r not found", settings.yt_dlp)
        raise ExtractionFailed()

    prefix = _temp_prefix(settings)
    try:
        track = _find_caption_track(yt_dlp_path, reference, prefix, settings)
        if track is None:
            raise NoCaptionsAvailable()

        text = normalize_vtt(track.read_text())
        if not text:
            logger.info("Captions for %s (%s) were empty after cleanup", reference.video_id, track.language)
            raise NoCaptionsAvailable()

        logger.info("Transcript for %s: %s captions, %d chars", reference.video_id, track.language, len(text))
        return Transcript(video_id=reference.video_id, language=track.language, text=text)
    except NoteTubeError:
        raise
    except Exception as exc:
        logger.warning("Caption extraction failed for %s: %s", reference.video_id, exc)
        raise ExtractionFailed() from exc
    finally:
        _cleanup(prefix)
