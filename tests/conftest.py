"""Shared fixtures for the PureTreeLib test suite."""

import pytest

from tree_builders import build_sample_tree


def pytest_configure(config):
    config.addinivalue_line(
        "markers", "slow: large-tree tests excluded from the default run"
    )


@pytest.fixture
def sample_tree():
    return build_sample_tree()
