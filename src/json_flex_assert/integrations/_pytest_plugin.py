"""pytest plugin for json-flex-assert.

Auto-discovered by pytest via the pytest11 entry point declared in pyproject.toml.
When the package is installed (even in editable mode), pytest discovers this plugin
automatically -- no conftest.py changes are needed.

Source: https://docs.pytest.org/en/stable/how-to/writing_plugins.html
"""

from __future__ import annotations

from typing import Any

import pytest

import json_flex_assert


@pytest.fixture(scope="session")
def assert_exact_match() -> Any:
    """Fixture returning ``json_flex_assert.assert_exact_match``.

    Usage in tests::

        def test_user(assert_exact_match):
            assert_exact_match({"id": 1}, response.json(), ValueTypeMatch("id"))
    """
    return json_flex_assert.assert_exact_match


@pytest.fixture(scope="session")
def assert_type_match() -> Any:
    """Fixture returning ``json_flex_assert.assert_type_match``."""
    return json_flex_assert.assert_type_match
