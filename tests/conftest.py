"""
Pytest configuration and shared fixtures.
"""

import pytest


@pytest.fixture
def fresh_agent():
    """A train freshly dropped at 0."""
    from railsim.core import create_agent
    return create_agent(0)


@pytest.fixture
def far_world():
    """A world whose trains are too far apart to meet in a short test."""
    from railsim.core import create_world
    return create_world(1000)


@pytest.fixture
def small_separations():
    """Separations of both signs, including zero."""
    return list(range(-10, 11))
