import logging
import streamlit as st

from dicing_toolkit.state import SessionStore
from dicing_toolkit.core.config import MAP_FILE_TYPES
from dicing_toolkit.io.ingestion import IngestionResult, load_wafer_map
from dicing_toolkit.plotting import create_wafer_map_figure
from dicing_toolkit.views.utils import get_map_summary
from dicing_toolkit.utils.formatting import format_number

logger = logging.getLogger(__name__)

MAP_UPLOAD_KEY = "map_upload"


@st.cache_data(show_spinner="Parsing wafer map...")
def parse_uploaded_map(data: bytes, file_name: str) -> IngestionResult:
    """Cached on file contents so reruns do not re-parse the same upload."""
    return load_wafer_map(data, file_name=file_name)


def load_uploaded_map_callback(store: SessionStore):
    """
    Uploader callback: runs before the rerun draws the header and tabs, so the
    exports and the usable-die figures already see the new map.
    """
    uploaded = st.session_state.get(MAP_UPLOAD_KEY)
    store.report_bytes = None
    if uploaded is None:
        logger.info("Wafer map cleared")
        store.map_result = None
        return
    store.map_result = parse_uploaded_map(uploaded.getvalue(), uploaded.name)


def render_map_tab(store: SessionStore):
    st.subheader("Import Wafer Map (CSV)")
    st.file_uploader(
        "Wafer map", type=MAP_FILE_TYPES, key=MAP_UPLOAD_KEY,
        on_change=load_uploaded_map_callback, args=(store,)
    )

    result = store.map_result
    if result is not None:
        st.write(f"Uploaded: {result.file_name}")
        for msg in result.errors:
            st.error(f"Failed to parse map. Ensure CSV header has x,y,status. ({msg})")
        for msg in result.warnings:
            st.warning(msg)

    summary = get_map_summary(store)
    c1, c2, c3 = st.columns(3)
    c1.metric("Good Dies", "-" if summary is None else f"{summary.good:,}")
    c2.metric("Bad Dies", "-" if summary is None else f"{summary.bad:,}")
    c3.metric("Map Yield", "-" if summary is None else f"{format_number(summary.yield_pct, 1)} %")

    if summary is not None and summary.total:
        st.plotly_chart(create_wafer_map_figure(result.records), width="stretch")

    st.caption(
        "CSV columns: `x,y,status` or `die_x,die_y,status`. Status values: `good` / `bad`. "
        "The first line is always read as the header."
    )
