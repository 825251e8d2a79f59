"""
Main Application File for the Wafer Dicing Process Toolkit.
Computes the calculation model once per rerun from the session recipe and
hands the results to the tabbed views.
"""
import logging
import streamlit as st

from dicing_toolkit.core.config import DEFAULT_THEME
from dicing_toolkit.core.geometry import GeometryEngine
from dicing_toolkit.process.model import derive_metrics
from dicing_toolkit.documentation import DISCLAIMER
from dicing_toolkit.state import SessionStore
from dicing_toolkit.views.manager import ViewManager
from dicing_toolkit.utils.logger import configure_logging, get_logger

logger = get_logger(__name__)


def load_css(file_path: str) -> None:
    """Loads a CSS file and injects it into the Streamlit app."""
    with open(file_path) as f:
        css = f.read()
        css_variables = f'''
        <style>
            :root {{
                --background-color: {DEFAULT_THEME.background_color};
                --text-color: {DEFAULT_THEME.text_color};
                --panel-color: {DEFAULT_THEME.wafer_color};
            }}
            {css}
        </style>
        '''
        st.markdown(css_variables, unsafe_allow_html=True)


def main() -> None:
    """Main function to configure and run the Streamlit application."""
    st.set_page_config(layout="wide", page_title="Wafer Dicing Process Toolkit")
    configure_logging(logging.INFO)
    load_css("assets/styles.css")

    store = SessionStore()
    inputs = store.inputs
    metrics = derive_metrics(inputs)
    layout = GeometryEngine.die_count(
        inputs.wafer_diameter_mm, inputs.die_width_mm, inputs.die_height_mm, inputs.street_width_um
    )

    manager = ViewManager(store, metrics, layout)
    manager.render_header()
    manager.render_main_view()

    st.divider()
    st.caption(f"{DISCLAIMER} All values are estimates for planning; confirm with vendor charts.")


if __name__ == "__main__":
    main()
