"""Shared fakes: a scripted yt-dlp and a scripted completion client."""

from __future__ import annotations

import subprocess
from pathlib import Path

import pytest

from notetube.config import Settings

ROLLING_VTT = """WEBVTT
Kind: captions
Language: en

00:00:00.000 --> 00:00:02.350 align:start position:0%

we're<00:00:00.560><c> no</c><00:00:00.880><c> strangers</c>

00:00:02.350 --> 00:00:02.360 align:start position:0%
we're no strangers


00:00:02.360 --> 00:00:05.000 align:start position:0%
we're no strangers
to<00:00:02.800><c> love</c>
"""


class FakeYtDlp:
    """Stands in for subprocess.run when the command is yt-dlp.

    english: files written by the "en.*" download, keyed by language tag.
    listing: stdout of --list-subs.
    others: files written by a single-language download, keyed by tag.
    """

    def __init__(
        self,
        english: dict[str, str] | None = None,
        listing: str = "",
        others: dict[str, str] | None = None,
        exit_code: int = 0,
        primary_timeout: bool = False,
        error: Exception | None = None,
    ) -> None:
        self.english = english or {}
        self.listing = listing
        self.others = others or {}
        self.exit_code = exit_code
        self.primary_timeout = primary_timeout
        self.error = error
        self.calls: list[list[str]] = []

    def __call__(self, command, *, capture_output=False, text=False, timeout=None, check=False):
        self.calls.append(command)
        if self.error is not None:
            raise self.error
        if "--list-subs" in command:
            return subprocess.CompletedProcess(command, 0, self.listing, "")

        prefix = command[command.index("-o") + 1]
        langs = command[command.index("--sub-langs") + 1]
        if langs == "en.*":
            files = self.english
        else:
            files = {langs: self.others[langs]} if langs in self.others else {}
        for language, content in files.items():
            Path(f"{prefix}.{language}.vtt").write_text(content, encoding="utf-8")

        if langs == "en.*" and self.primary_timeout:
            raise subprocess.TimeoutExpired(command, timeout)
        return subprocess.CompletedProcess(command, self.exit_code, "", "")


class FakeCompletionClient:
    """Returns scripted responses in order and records every call."""

    def __init__(self, *responses) -> None:
        self.responses = list(responses)
        self.calls: list[dict] = []

    def complete(self, messages, *, temperature, max_tokens):
        self.calls.append({"messages": messages, "temperature": temperature, "max_tokens": max_tokens})
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(api_key="test-key", temp_dir=str(tmp_path))


@pytest.fixture
def install_yt_dlp(monkeypatch):
    """Patch yt-dlp discovery and subprocess.run; returns the installed fake."""

    def install(fake: FakeYtDlp) -> FakeYtDlp:
        monkeypatch.setattr("notetube.extractors.video.shutil.which", lambda name: "/usr/bin/yt-dlp")
        monkeypatch.setattr("notetube.extractors.video.subprocess.run", fake)
        return fake

    return install
