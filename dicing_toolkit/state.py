"""
State Management Module.
Implements the 'Store' pattern to unify access to Streamlit's session state.
Recipe widgets are bound to session keys named after the ProcessInputs fields,
so the store can rebuild the recipe on every rerun.
"""
import streamlit as st
from dataclasses import dataclass, fields
from typing import Any, Dict, Mapping, Optional

from dicing_toolkit.core.config import load_recipe_defaults, DEFAULT_EXPECTED_BLADE_LIFE_M, VACUUM_NOMINAL_KPA
from dicing_toolkit.core.models import ProcessInputs
from dicing_toolkit.io.ingestion import IngestionResult

RECIPE_KEYS = [f.name for f in fields(ProcessInputs)]
MEASUREMENT_KEY_PREFIX = "meas_"


def inputs_from_state(state: Mapping[str, Any]) -> ProcessInputs:
    """Builds the recipe from whatever recipe keys are present in a state mapping."""
    return ProcessInputs.from_dict({k: state[k] for k in RECIPE_KEYS if k in state})


@dataclass
class SessionStore:
    """
    Centralized store for application state.
    Wraps st.session_state to provide typed access and centralized modification logic.
    """

    def __post_init__(self):
        """Initialize default state values if they don't exist."""
        defaults: Dict[str, Any] = {
            key: float(value) if isinstance(value, (int, float)) else value
            for key, value in load_recipe_defaults().items()
        }
        defaults.update({
            'map_result': None,
            'expected_life_m': DEFAULT_EXPECTED_BLADE_LIFE_M,
            'cumulative_cut_mm': 0.0,
            'offset_x_um': 0.0,
            'offset_y_um': 0.0,
            'theta_deg': 0.0,
            'vacuum_kpa': VACUUM_NOMINAL_KPA,
            'report_bytes': None,
        })

        for key, value in defaults.items():
            if key not in st.session_state:
                st.session_state[key] = value

    # --- Properties for Typed Access ---

    @property
    def inputs(self) -> ProcessInputs:
        return inputs_from_state(st.session_state)

    @inputs.setter
    def inputs(self, value: ProcessInputs):
        # Only safe from widget callbacks, before the recipe widgets are drawn
        for key, item in value.to_dict().items():
            st.session_state[key] = item

    @property
    def map_result(self) -> Optional[IngestionResult]:
        return st.session_state.map_result

    @map_result.setter
    def map_result(self, val: Optional[IngestionResult]):
        st.session_state.map_result = val

    @property
    def expected_life_m(self) -> float:
        return st.session_state.expected_life_m

    @property
    def cumulative_cut_mm(self) -> float:
        return st.session_state.cumulative_cut_mm

    @cumulative_cut_mm.setter
    def cumulative_cut_mm(self, val: float):
        st.session_state.cumulative_cut_mm = val

    @property
    def offset_x_um(self) -> float:
        return st.session_state.offset_x_um

    @property
    def offset_y_um(self) -> float:
        return st.session_state.offset_y_um

    @property
    def theta_deg(self) -> float:
        return st.session_state.theta_deg

    @property
    def vacuum_kpa(self) -> float:
        return st.session_state.vacuum_kpa

    @property
    def report_bytes(self) -> Optional[bytes]:
        return st.session_state.report_bytes

    @report_bytes.setter
    def report_bytes(self, val: Optional[bytes]):
        st.session_state.report_bytes = val

    @property
    def measurements(self) -> Dict[str, str]:
        """Measurement text boxes are keyed 'meas_<spec key>'; returns spec key -> entered text."""
        return {
            key[len(MEASUREMENT_KEY_PREFIX):]: value
            for key, value in st.session_state.items()
            if isinstance(key, str) and key.startswith(MEASUREMENT_KEY_PREFIX)
        }
