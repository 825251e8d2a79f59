import streamlit as st

from dicing_toolkit.state import SessionStore, MEASUREMENT_KEY_PREFIX
from dicing_toolkit.core.models import DerivedMetrics
from dicing_toolkit.analytics.verification import build_verification_specs, evaluate_measurements
from dicing_toolkit.analytics.self_check import run_self_checks
from dicing_toolkit.documentation import generate_sop, DISCLAIMER
from dicing_toolkit.enums import SpecStatus
from dicing_toolkit.utils.formatting import format_number
from dicing_toolkit.utils.telemetry import PerformanceMonitor


def _status_badge(status: SpecStatus) -> str:
    if status is SpecStatus.PASS:
        return ":green[**PASS**]"
    if status is SpecStatus.FAIL:
        return ":red[**FAIL**]"
    return status.value


def render_verification_tab(store: SessionStore, metrics: DerivedMetrics):
    """Spec table with a measurement box per parameter and live PASS/FAIL status."""
    i = store.inputs
    st.subheader("Verification & Dummy Run")

    specs = build_verification_specs(
        i.street_width_um, metrics.kerf_um, i.die_width_mm, i.die_height_mm,
        i.wafer_thickness_um, metrics.tip_speed_mps
    )
    # Widget values for this run are already in session state
    results = evaluate_measurements(specs, store.measurements)

    widths = [3, 2, 3, 2, 1]
    header = st.columns(widths)
    for col, label in zip(header, ["Parameter", "Nominal", "Spec (lo–hi)", "Measured", "Status"]):
        col.markdown(f"**{label}**")

    for spec, result in zip(specs, results):
        row = st.columns(widths)
        row[0].write(spec.name)
        row[1].write(format_number(spec.nominal))
        row[2].write(f"{format_number(spec.lower_bound)} – {format_number(spec.upper_bound)}")
        row[3].text_input(
            spec.name, placeholder="enter", key=f"{MEASUREMENT_KEY_PREFIX}{spec.key}",
            label_visibility="collapsed"
        )
        row[4].markdown(_status_badge(result.status))

    c1, c2 = st.columns(2)
    if c1.button("Run Dummy Sample"):
        st.info("Dummy sample queued with current setpoints.")
    if c2.button("Plan Repeat If OOS"):
        st.info("Repeat planned: adjust toward suggestions and re-measure.")


def render_sop_tab(store: SessionStore, metrics: DerivedMetrics):
    st.subheader("Generated SOP (Preview)")
    sop_text = generate_sop(store.inputs, metrics)
    st.code(sop_text, language=None)
    st.download_button("Download SOP", data=sop_text, file_name="dicing_sop.txt", mime="text/plain")
    st.caption(DISCLAIMER)


def render_self_check_tab():
    """Runtime self checks plus the recent performance log."""
    st.subheader("Internal Tests")
    st.caption("These basic checks help catch math/logic regressions at runtime.")
    for check in run_self_checks():
        marker = "green" if check.passed else "red"
        outcome = "PASS" if check.passed else "FAIL"
        info = f" ({check.info})" if check.info else ""
        st.markdown(f"- {check.name}: :{marker}[**{outcome}**]{info}")

    with st.expander("Performance Log"):
        logs = PerformanceMonitor.get_logs()
        if logs:
            st.dataframe(logs, hide_index=True, width="stretch")
        else:
            st.caption("No timed operations yet.")
        st.button("Clear Log", on_click=PerformanceMonitor.clear_logs)
