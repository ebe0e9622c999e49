"""Pytest configuration and shared fixtures for the sectionconf test suite.

This module provides shared fixtures, test configuration, and utilities
that are used across the entire test suite.
"""

import logging
from pathlib import Path
from typing import Generator

import pytest
from utils import SAMPLE_CONFIG_TEXT, cleanup_test_dir, create_test_temp_dir

from sectionconf.logging_utils import disable_logging
from sectionconf.model import Comment, Configuration
from sectionconf.options import ConfigurationOptions

# Configure Hypothesis for property-based testing
try:
    from hypothesis import Phase, Verbosity, settings

    # Register custom Hypothesis profiles
    settings.register_profile("ci", max_examples=100, verbosity=Verbosity.verbose)
    settings.register_profile("dev", max_examples=20)
    settings.register_profile(
        "debug", max_examples=10, verbosity=Verbosity.verbose, phases=[Phase.explicit, Phase.reuse, Phase.generate]
    )

    # Load profile from environment or use default
    import os

    profile = os.getenv("HYPOTHESIS_PROFILE", "dev")
    settings.load_profile(profile)
except ImportError:
    # Hypothesis not installed, skip configuration
    pass


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests - fast, isolated component tests")
    config.addinivalue_line("markers", "integration: Integration tests - component interaction tests")


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Provide a temporary directory for test files.

    Yields
    ------
    Path
        Temporary directory path that will be cleaned up after test.

    """
    temp_path = create_test_temp_dir()
    try:
        yield temp_path
    finally:
        cleanup_test_dir(temp_path)


@pytest.fixture
def sample_config_text() -> str:
    """Provide configuration text exercising comments, quotes and escapes.

    Returns
    -------
    str
        Standard sample configuration used across multiple tests.

    """
    return SAMPLE_CONFIG_TEXT


@pytest.fixture
def server_config() -> Configuration:
    """Provide a small configuration built through the model API.

    Returns
    -------
    Configuration
        ``[Server]`` with a trailing comment, a value holding a delimiter and
        a setting with a pre-comment.

    """
    config = Configuration()
    server = config["Server"]
    server.comment = Comment(";", "main")
    server["Host"].value = "local;host"
    port = server["Port"]
    port.value = "8080"
    port.pre_comments.append(Comment(";", "Listen port"))
    return config


@pytest.fixture
def implicit_options() -> ConfigurationOptions:
    """Provide options with the implicit global section enabled."""
    return ConfigurationOptions(implicit_section=True)


@pytest.fixture
def package_logger() -> Generator[logging.Logger, None, None]:
    """Provide the sectionconf logger and restore its handlers, level and propagation afterwards."""
    logger = logging.getLogger("sectionconf")
    handlers = list(logger.handlers)
    level = logger.level
    propagate = logger.propagate
    try:
        yield logger
    finally:
        disable_logging()
        logger.handlers[:] = handlers
        logger.setLevel(level)
        logger.propagate = propagate
