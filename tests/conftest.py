"""Shared pytest fixtures for ExpoHub tests.

pygame runs headless: the dummy video and audio drivers are selected
before anything imports pygame.
"""
import os

os.environ.setdefault('SDL_VIDEODRIVER', 'dummy')
os.environ.setdefault('SDL_AUDIODRIVER', 'dummy')

from random import Random

import pygame
import pytest

from expohub.games.game_state import GameState
from expohub.games.scoring import ScoreEngine
from expohub.games.session import Session
from expohub.storage import BestScoreStore


@pytest.fixture
def rng():
    """Seeded random source for reproducible spawns and shuffles."""
    return Random(1234)


@pytest.fixture
def playing_session():
    return Session(status=GameState.PLAYING)


@pytest.fixture
def score_store(tmp_path):
    return BestScoreStore(tmp_path / 'best_scores.json')


@pytest.fixture
def scores(score_store):
    return ScoreEngine(score_store)


@pytest.fixture
def surface():
    """Off-screen 800x600 drawing surface."""
    pygame.init()
    yield pygame.Surface((800, 600))
    pygame.quit()
