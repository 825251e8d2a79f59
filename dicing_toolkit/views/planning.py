import streamlit as st

from dicing_toolkit.state import SessionStore
from dicing_toolkit.core.models import DieLayout
from dicing_toolkit.analytics.planning import (
    estimate_throughput, blade_life_status, check_alignment, wafer_cycle_length_mm
)
from dicing_toolkit.analytics.yield_analysis import usable_die_count
from dicing_toolkit.plotting import create_die_grid_figure
from dicing_toolkit.utils.formatting import format_number, format_plain
from dicing_toolkit.views.utils import get_map_summary


def add_wafer_cycle_callback(store: SessionStore):
    """Adds the blade travel of one wafer to the accumulated cut length."""
    i = store.inputs
    store.cumulative_cut_mm = store.cumulative_cut_mm + wafer_cycle_length_mm(
        i.wafer_diameter_mm, i.die_width_mm, i.die_height_mm, i.street_width_um
    )


def render_planning_tab(store: SessionStore, layout: DieLayout):
    """Die grid, usable dies and throughput estimate."""
    i = store.inputs
    st.subheader("Die Planning")

    c1, c2, c3 = st.columns(3)
    c1.metric("Columns", format_plain(layout.columns))
    c2.metric("Rows", format_plain(layout.rows))
    c3.metric("Usable Dies", format_plain(usable_die_count(layout, get_map_summary(store))))

    t = estimate_throughput(i.wafer_diameter_mm, i.die_width_mm, i.die_height_mm, i.street_width_um, i.feed_mm_per_s)
    r1 = st.columns(3)
    r1[0].metric("Lanes X", format_plain(t.lanes_x))
    r1[1].metric("Lanes Y", format_plain(t.lanes_y))
    r1[2].metric("Total Cut Length", f"{format_number(t.total_cut_length_mm)} mm")
    r2 = st.columns(3)
    r2[0].metric("Cycle Time", f"{format_number(t.cycle_time_s)} s")
    r2[1].metric("Throughput", f"{format_number(t.wafers_per_hour, 1)} wafers/hr")
    st.caption("Throughput estimate excludes blade swaps and alignment time. Use for comparative tuning.")

    st.plotly_chart(
        create_die_grid_figure(i.wafer_diameter_mm, i.die_width_mm, i.die_height_mm, i.street_width_um, layout),
        width="stretch"
    )
    st.caption("Usable dies falls back to geometric estimate unless a wafer map is loaded.")


def render_life_tab(store: SessionStore):
    """Blade life tracking and alignment offset checks."""
    i = store.inputs
    life_col, align_col = st.columns(2)

    with life_col, st.container(border=True):
        st.subheader("Blade Life Tracking")
        st.number_input("Expected Life (m)", min_value=0.0, key="expected_life_m")
        st.number_input("Accumulated Cut (mm)", min_value=0.0, key="cumulative_cut_mm")
        life = blade_life_status(store.expected_life_m, store.cumulative_cut_mm)
        c1, c2 = st.columns(2)
        c1.metric("Life Used", f"{format_number(life.life_used_pct, 1)} %", help=life.note)
        c2.metric("Remaining", f"{format_number(life.remaining_m, 1)} m")
        if life.swap_soon:
            st.warning("Blade life above 90% - swap soon.")
        st.button("Add One Wafer Cycle", on_click=add_wafer_cycle_callback, args=(store,))

    with align_col, st.container(border=True):
        st.subheader("Alignment Offsets")
        st.number_input("Offset X (µm)", key="offset_x_um")
        st.number_input("Offset Y (µm)", key="offset_y_um")
        st.number_input("Theta (deg)", step=0.01, key="theta_deg")
        check = check_alignment(
            i.wafer_diameter_mm, i.die_width_mm, i.die_height_mm,
            store.offset_x_um, store.offset_y_um, store.theta_deg
        )
        c1, c2 = st.columns(2)
        c1.metric("Stage Shift", f"{format_number(check.stage_shift_mm, 3)} mm")
        c2.metric("Edge Clearance", f"{format_number(check.edge_clearance_mm, 2)} mm", help=check.note)
        if check.needs_attention:
            st.warning("Check lanes: edge clearance below 1 mm or theta above 0.1°.")
