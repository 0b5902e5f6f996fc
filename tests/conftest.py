import os

# Headless: surfaces and draw calls need no real display.
os.environ.setdefault("SDL_VIDEODRIVER", "dummy")

import numpy as np
import pygame
import pytest


@pytest.fixture(scope="session", autouse=True)
def pygame_session():
    pygame.init()
    yield
    pygame.quit()


@pytest.fixture
def rng():
    return np.random.default_rng(12345)


@pytest.fixture
def surface():
    return pygame.Surface((200, 100))
