import logging
import streamlit as st

from dicing_toolkit.state import SessionStore
from dicing_toolkit.core.config import CSV_EXPORT_FILENAME, EXCEL_EXPORT_FILENAME
from dicing_toolkit.core.models import DerivedMetrics, DieLayout
from dicing_toolkit.enums import Tab
from dicing_toolkit.reporting import export_csv, generate_excel_report
from dicing_toolkit.views.utils import get_dashboard_snapshot
from dicing_toolkit.views.process import render_process_tab, render_risk_tab, apply_suggestions_callback
from dicing_toolkit.views.planning import render_planning_tab, render_life_tab
from dicing_toolkit.views.map_view import render_map_tab
from dicing_toolkit.views.verification import render_verification_tab, render_sop_tab, render_self_check_tab

logger = logging.getLogger(__name__)


class ViewManager:
    """
    Manages the header actions and tab routing.
    Decouples UI layout from the calculation model.
    """
    def __init__(self, store: SessionStore, metrics: DerivedMetrics, layout: DieLayout):
        self.store = store
        self.metrics = metrics
        self.layout = layout

    def _generate_report(self):
        snapshot = get_dashboard_snapshot(self.store, self.metrics, self.layout)
        map_result = self.store.map_result
        records = map_result.records if map_result is not None and map_result.ok else None
        self.store.report_bytes = generate_excel_report(snapshot, map_records=records)

    def render_header(self):
        """Title row with the apply/export actions."""
        title_col, actions_col = st.columns([3, 2])
        with title_col:
            st.title("Wafer Dicing Process Toolkit")
            st.caption("Process setpoints, blade selection, risk, die planning, verification and SOP in one place.")

        with actions_col:
            c1, c2, c3 = st.columns(3)
            c1.button(
                "Apply Suggestions", type="primary", width="stretch",
                on_click=apply_suggestions_callback, args=(self.store,)
            )
            snapshot = get_dashboard_snapshot(self.store, self.metrics, self.layout)
            c2.download_button(
                "Export CSV", data=export_csv(snapshot), file_name=CSV_EXPORT_FILENAME,
                mime="text/csv", width="stretch"
            )
            if c3.button("Excel Report", width="stretch"):
                with st.spinner("Generating Excel report..."):
                    self._generate_report()

            if self.store.report_bytes:
                st.download_button(
                    "Download Excel Report",
                    data=self.store.report_bytes,
                    file_name=EXCEL_EXPORT_FILENAME,
                    mime="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
                    width="stretch"
                )

    def render_main_view(self):
        """Dispatches each tab to its renderer."""
        renderers = {
            Tab.PROCESS: lambda: render_process_tab(self.store, self.metrics),
            Tab.PLANNING: lambda: render_planning_tab(self.store, self.layout),
            Tab.RISK: lambda: render_risk_tab(self.store, self.metrics),
            Tab.MAP: lambda: render_map_tab(self.store),
            Tab.LIFE: lambda: render_life_tab(self.store),
            Tab.VERIFY: lambda: render_verification_tab(self.store, self.metrics),
            Tab.SOP: lambda: render_sop_tab(self.store, self.metrics),
            Tab.TESTS: render_self_check_tab,
        }
        for tab, container in zip(Tab, st.tabs(Tab.values())):
            with container:
                renderers[tab]()
