"""Shared fixtures. pygame runs against SDL's dummy drivers so no window opens."""

import os

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")

import random

import pygame
import pytest

from spacebreak.config.settings import Settings
from spacebreak.core.events import EventBus
from spacebreak.core.state import StateMachine
from spacebreak.game.session import GameSession


@pytest.fixture
def clean_env(tmp_path, monkeypatch):
    """Run from an empty directory with no SPACEBREAK_* variables set."""
    monkeypatch.chdir(tmp_path)
    for key in list(os.environ):
        if key.startswith("SPACEBREAK_"):
            monkeypatch.delenv(key)
    return tmp_path


@pytest.fixture
def settings(clean_env):
    return Settings(_env_file=None)


@pytest.fixture
def event_bus():
    return EventBus()


@pytest.fixture
def state_machine():
    return StateMachine()


@pytest.fixture
def session(settings, event_bus, state_machine):
    game = GameSession(event_bus, state_machine, settings=settings, rng=random.Random(1234))
    game.initialize()
    yield game
    game.close()


@pytest.fixture
def headless_pygame():
    pygame.init()
    yield
    pygame.quit()
