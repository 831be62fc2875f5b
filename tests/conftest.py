"""
depper Test Configuration and Fixtures
"""

import pytest

from depper import Dependencies, DepperConfig, reset_config


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch):
    """Clear DEPPER_* environment overrides and the cached global config."""
    import os

    for key in list(os.environ):
        if key.startswith("DEPPER_"):
            monkeypatch.delenv(key, raising=False)
    reset_config()
    yield
    reset_config()


@pytest.fixture
def config():
    """Default configuration, independent of the environment."""
    return DepperConfig()


@pytest.fixture
def deployment_builder(config):
    """
    Builder for a small deployment hierarchy.

    e and y have no dependencies, d needs e, and b, c, a all sit on top of d.
    """
    return (
        Dependencies.builder(config)
        .register("b", ["d"])
        .register("c", ["d"])
        .register("a", ["d", "e", "y"])
        .register("d", ["e"])
        .register("e", [])
        .register("y", [])
    )

