import os

# pygame surfaces are built headless in the preview tests
os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "1")

import pytest

from skyhorizon.core.config import RenderConfig


@pytest.fixture
def fast_config():
    """Low-cost render settings for tests that only check plumbing."""
    return RenderConfig(samples=4, march_steps=8, transmittance_steps=8)
