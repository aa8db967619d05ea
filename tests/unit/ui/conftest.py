"""Configuration for UI unit tests."""

from unittest.mock import MagicMock, patch

import pytest
import streamlit as st


@pytest.fixture(autouse=True)
def clear_streamlit_caches():
    """Drop any cached client between tests."""
    st.cache_resource.clear()
    yield
    st.cache_resource.clear()


@pytest.fixture
def session_state() -> dict:
    """Plain dict standing in for st.session_state."""
    return {}


@pytest.fixture
def mock_st(session_state):
    """Patch the streamlit module used by a UI module, backed by a dict session state."""

    def _patch(module_path: str):
        mock = MagicMock()
        mock.session_state = session_state
        mock.columns.side_effect = lambda spec, **kwargs: [
            MagicMock() for _ in range(spec if isinstance(spec, int) else len(spec))
        ]
        mock.button.return_value = False
        return patch(f"{module_path}.st", mock)

    return _patch
