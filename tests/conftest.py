import pytest
import streamlit as st


class FakeSessionState(dict):
    """Dict with attribute access, standing in for st.session_state outside `streamlit run`."""

    def __getattr__(self, key):
        try:
            return self[key]
        except KeyError as e:
            raise AttributeError(key) from e

    def __setattr__(self, key, value):
        self[key] = value


@pytest.fixture(autouse=True)
def session_state(monkeypatch):
    state = FakeSessionState()
    monkeypatch.setattr(st, "session_state", state)
    return state
