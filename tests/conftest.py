"""Pytest configuration and fixtures."""

from __future__ import annotations

import os
from pathlib import Path

import pytest

from galscript.common.events import EventBus
from galscript.common.filesystem import ProjectPaths
from galscript.config import reset_settings
from galscript.project import GalProject

START_SCENE = """\
; Opening scene
label:start;
changeBg:bg1.jpg -next;
Alice:Hello there -v=hello.ogg;
setVar:score=10;
choose:Go left:left|Go right:right;
label:left;
jumpLabel:end_label -when=score>5;
label:right;
label:end_label;
changeScene:chapter1/a.txt;
end;
"""

CHAPTER_SCENE = """\
label:intro;
callScene:start -when=visited and not skipped;
jumpLabel:intro;
"""


def write_file(path: Path, content: str = "") -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    return path


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line("markers", "unit: mark test as unit test")
    config.addinivalue_line("markers", "integration: mark test as integration test")


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch, tmp_path):
    """Keep tests away from user config files and GALSCRIPT_ variables."""
    monkeypatch.setenv("HOME", str(tmp_path / "home"))
    for key in list(os.environ):
        if key.startswith("GALSCRIPT_"):
            monkeypatch.delenv(key, raising=False)
    reset_settings()
    yield
    reset_settings()


@pytest.fixture
def game_dir(tmp_path: Path) -> Path:
    """A small game directory with scenes and assets."""
    game = tmp_path / "project" / "game"
    write_file(game / "scene" / "start.txt", START_SCENE)
    write_file(game / "scene" / "chapter1" / "a.txt", CHAPTER_SCENE)
    write_file(game / "scene" / "chapter1" / "start.txt", "label:start;\nend;\n")
    write_file(game / "background" / "bg1.jpg")
    write_file(game / "background" / "notes.md")
    write_file(game / "figure" / "alice.png")
    write_file(game / "bgm" / "theme.mp3")
    write_file(game / "vocal" / "hello.ogg")
    (game / "video").mkdir()
    return game


@pytest.fixture
def project_paths(game_dir: Path) -> ProjectPaths:
    return ProjectPaths(game_dir)


@pytest.fixture
def event_bus() -> EventBus:
    return EventBus()


@pytest.fixture
def project(project_paths: ProjectPaths, event_bus: EventBus) -> GalProject:
    return GalProject(project_paths, events=event_bus)
