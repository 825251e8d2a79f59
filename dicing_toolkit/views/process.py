import streamlit as st

from dicing_toolkit.state import SessionStore
from dicing_toolkit.core.models import DerivedMetrics
from dicing_toolkit.core.geometry import GeometryEngine
from dicing_toolkit.enums import Material, BladeBond
from dicing_toolkit.io.validation import validate_process_inputs, validate_vacuum_kpa
from dicing_toolkit.process.model import apply_suggestions
from dicing_toolkit.process.risk import risk_breakdown, risk_label
from dicing_toolkit.documentation import RISK_FACTORS, ACTION_HINTS, BOND_GUIDANCE
from dicing_toolkit.plotting import create_risk_gauge
from dicing_toolkit.utils.formatting import format_number


def apply_suggestions_callback(store: SessionStore):
    """Button callback: runs before the recipe widgets are drawn, so their keys may be written."""
    store.inputs = apply_suggestions(store.inputs)


def _material_label(key: str) -> str:
    member = Material.parse(key)
    return member.display_name if member else key


def _bond_label(key: str) -> str:
    member = BladeBond.parse(key)
    return member.display_name if member else key


def render_process_tab(store: SessionStore, metrics: DerivedMetrics):
    """Recipe entry, machine setpoints with suggestions, and blade evaluation."""
    st.subheader("Process Setup")

    left, right = st.columns(2)
    with left:
        st.selectbox("Material", Material.values(), key="material", format_func=_material_label)
        st.text_input("Internal Structure (notes)", placeholder="e.g. Backgrind + Ta barrier + Cu layer", key="notes_structure")
        st.number_input("Scrub Line Width (µm)", min_value=0.0, key="street_width_um")
        st.text_input("Orientation", placeholder="Notch @ 6 o'clock", key="notes_orientation")
        st.text_input("Fiducial Marks", placeholder="Box-in-box, cross, etc.", key="notes_fiducials")
        st.number_input("Vacuum Level (kPa)", min_value=0.0, step=1.0, key="vacuum_kpa")
    with right:
        st.number_input("Wafer Diameter (mm)", min_value=0.0, key="wafer_diameter_mm")
        st.number_input("Wafer Thickness (µm)", min_value=0.0, key="wafer_thickness_um")
        st.number_input("Die Width (mm)", min_value=0.0, step=0.1, key="die_width_mm")
        st.number_input("Die Height (mm)", min_value=0.0, step=0.1, key="die_height_mm")
        st.number_input("Blade Diameter (mm)", min_value=0.0, key="blade_diameter_mm")
        st.number_input("Blade Thickness (µm)", min_value=0.0, key="blade_thickness_um")
        st.selectbox("Blade Bond", BladeBond.values(), key="blade_bond", format_func=_bond_label)

    for warning in validate_process_inputs(store.inputs):
        st.warning(warning)
    vacuum_warning = validate_vacuum_kpa(store.vacuum_kpa)
    if vacuum_warning:
        st.warning(vacuum_warning)

    setpoints, evaluation = st.columns(2)
    with setpoints, st.container(border=True):
        st.markdown("**Machine Setpoints**")
        st.number_input(f"RPM (suggest {format_number(metrics.rpm_suggestion, 0)})", min_value=0.0, step=500.0, key="rpm")
        st.number_input(f"Feed (mm/s) (suggest {format_number(metrics.feed_suggestion_mm_per_s)})", min_value=0.0, step=0.1, key="feed_mm_per_s")
        st.number_input(f"Coolant (L/min) (suggest {format_number(metrics.coolant_suggestion_l_per_min, 1)})", min_value=0.0, step=0.5, key="coolant_l_per_min")
        st.number_input("Wear Factor (0–1)", min_value=0.0, max_value=1.0, step=0.01, key="wear_factor")
        c1, c2 = st.columns(2)
        tip_note = "Target 30–45" if GeometryEngine.tip_speed_in_window(metrics.tip_speed_mps) else "Outside 30–45"
        c1.metric("Tip Speed", f"{format_number(metrics.tip_speed_mps)} m/s", help=tip_note)
        c2.metric("Kerf (est)", f"{format_number(metrics.kerf_um)} µm", help="Grows with wear")
        st.caption(tip_note)

    with evaluation, st.container(border=True):
        st.markdown("**Blade Evaluation**")
        c1, c2 = st.columns(2)
        c1.metric("Spindle Power", f"{format_number(metrics.spindle_power_kw, 3)} kW", help="Approx.")
        c2.metric("Chipping Risk", f"{format_number(metrics.chipping_risk, 0)}/100", help=risk_label(metrics.chipping_risk))
        st.caption(BOND_GUIDANCE)
        st.button("Apply Suggested Setpoints", key="apply_suggestions_inline", on_click=apply_suggestions_callback, args=(store,))


def render_risk_tab(store: SessionStore, metrics: DerivedMetrics):
    """Risk score breakdown and what-to-adjust guidance."""
    inputs = store.inputs
    factors_col, actions_col = st.columns([1, 2])

    with factors_col, st.container(border=True):
        st.subheader("Risk Breakdown")
        st.markdown("\n".join(f"- {line}" for line in RISK_FACTORS))
        st.plotly_chart(create_risk_gauge(metrics.chipping_risk), width="stretch")
        terms = risk_breakdown(
            inputs.material, inputs.feed_mm_per_s, metrics.tip_speed_mps,
            inputs.wafer_thickness_um, inputs.blade_thickness_um, inputs.coolant_l_per_min
        )
        st.dataframe(
            {"Factor": [t.factor for t in terms], "Points": [format_number(t.points) for t in terms]},
            hide_index=True, width="stretch"
        )

    with actions_col, st.container(border=True):
        st.subheader("What to Adjust")
        hint_cols = st.columns(len(ACTION_HINTS))
        for col, (title, lines) in zip(hint_cols, ACTION_HINTS.items()):
            col.markdown(f"**{title}**\n\n" + "\n".join(f"- {line}" for line in lines))
