import io
import unittest
from pathlib import Path
from unittest.mock import MagicMock

from dicing_toolkit.state import SessionStore, inputs_from_state, RECIPE_KEYS
from dicing_toolkit.core.geometry import GeometryEngine
from dicing_toolkit.core.models import ProcessInputs
from dicing_toolkit.enums import Material
from dicing_toolkit.io.ingestion import IngestionResult, parse_wafer_map
from dicing_toolkit.analytics.models import MapSummary
from dicing_toolkit.process.model import derive_metrics
from dicing_toolkit.views.utils import get_map_summary, get_dashboard_snapshot
from dicing_toolkit.views.process import apply_suggestions_callback
from dicing_toolkit.views.planning import add_wafer_cycle_callback
from dicing_toolkit.views.map_view import load_uploaded_map_callback, MAP_UPLOAD_KEY
from dicing_toolkit.reporting import export_csv


class TestInputsFromState(unittest.TestCase):
    def test_partial_state_uses_defaults(self):
        inputs = inputs_from_state({'material': 'GaAs', 'rpm': 20000.0, 'meas_street': '60'})
        self.assertIs(inputs.material, Material.GAAS)
        self.assertEqual(inputs.rpm, 20000.0)
        self.assertEqual(inputs.wafer_diameter_mm, 300)

    def test_recipe_keys_match_fields(self):
        self.assertEqual(set(RECIPE_KEYS), set(ProcessInputs().to_dict()))


class TestSessionStore(unittest.TestCase):
    def test_seeds_defaults(self):
        store = SessionStore()
        self.assertEqual(store.inputs, ProcessInputs())
        self.assertIsNone(store.map_result)
        self.assertEqual(store.cumulative_cut_mm, 0.0)
        self.assertEqual(store.expected_life_m, 1200.0)
        self.assertEqual(store.offset_x_um, 0.0)

    def test_numbers_are_seeded_as_floats(self):
        import streamlit as st
        SessionStore()
        self.assertIsInstance(st.session_state['rpm'], float)
        self.assertEqual(st.session_state['material'], 'Si')

    def test_existing_values_are_kept(self):
        import streamlit as st
        st.session_state['rpm'] = 12000.0
        store = SessionStore()
        self.assertEqual(store.inputs.rpm, 12000.0)

    def test_measurements(self):
        import streamlit as st
        store = SessionStore()
        st.session_state['meas_street'] = '61'
        st.session_state['meas_vac'] = ''
        self.assertEqual(store.measurements, {'street': '61', 'vac': ''})

    def test_apply_suggestions_callback(self):
        store = SessionStore()
        apply_suggestions_callback(store)
        self.assertEqual(store.inputs.rpm, 12513)
        self.assertEqual(store.inputs.feed_mm_per_s, 2.35)
        self.assertEqual(store.inputs.coolant_l_per_min, 3.0)
        self.assertIs(store.inputs.material, Material.SI)

    def test_add_wafer_cycle_callback(self):
        store = SessionStore()
        add_wafer_cycle_callback(store)
        add_wafer_cycle_callback(store)
        self.assertEqual(store.cumulative_cut_mm, 2 * 34800)

    def test_seeds_nominal_vacuum(self):
        self.assertEqual(SessionStore().vacuum_kpa, 80.0)


class TestMapUpload(unittest.TestCase):
    def _upload(self, text: bytes, name: str):
        import streamlit as st
        uploaded = io.BytesIO(text)
        uploaded.name = name
        st.session_state[MAP_UPLOAD_KEY] = uploaded

    def test_upload_reaches_csv_export(self):
        store = SessionStore()
        self._upload(b"x,y,status\n0,0,good\n0,1,bad\n1,1,good", "map.csv")
        load_uploaded_map_callback(store)

        self.assertEqual(store.map_result.file_name, "map.csv")
        self.assertEqual(len(store.map_result.records), 3)

        snapshot = get_dashboard_snapshot(store, derive_metrics(store.inputs), GeometryEngine.die_count(300, 5, 5, 60))
        csv_text = export_csv(snapshot)
        self.assertIn("Map Good,2,pcs", csv_text)
        self.assertIn("Map Bad,1,pcs", csv_text)

    def test_clearing_upload_drops_map_and_report(self):
        import streamlit as st
        store = SessionStore()
        self._upload(b"x,y,status\n0,0,good", "map.csv")
        load_uploaded_map_callback(store)
        store.report_bytes = b"stale"

        st.session_state[MAP_UPLOAD_KEY] = None
        load_uploaded_map_callback(store)
        self.assertIsNone(store.map_result)
        self.assertIsNone(store.report_bytes)


class TestViewUtils(unittest.TestCase):
    def test_get_map_summary(self):
        store = MagicMock(spec=SessionStore)
        store.map_result = None
        self.assertIsNone(get_map_summary(store))

        store.map_result = IngestionResult(records=parse_wafer_map("x,y,status\n0,0,good\n0,1,bad"))
        self.assertEqual(get_map_summary(store), MapSummary(good=1, bad=1))

        store.map_result = IngestionResult(errors=["bad file"])
        self.assertIsNone(get_map_summary(store))

    def test_get_dashboard_snapshot(self):
        store = MagicMock(spec=SessionStore)
        store.inputs = ProcessInputs()
        store.map_result = None
        store.expected_life_m = 1200.0
        store.cumulative_cut_mm = 600_000.0
        store.offset_x_um = 5.0
        store.offset_y_um = -5.0
        store.theta_deg = 0.05
        store.measurements = {'street': '60'}

        metrics = derive_metrics(store.inputs)
        layout = GeometryEngine.die_count(300, 5, 5, 60)
        snapshot = get_dashboard_snapshot(store, metrics, layout)

        self.assertEqual(snapshot.life_used_pct, 50)
        self.assertEqual(snapshot.offset_y_um, -5.0)
        self.assertIsNone(snapshot.map_summary)
        self.assertEqual(snapshot.measurements, {'street': '60'})
        self.assertIs(snapshot.metrics, metrics)


class TestWidgetSizing(unittest.TestCase):
    def test_views_use_width_argument(self):
        root = Path(__file__).parent.parent
        sources = list((root / "dicing_toolkit" / "views").glob("*.py")) + [root / "app.py"]
        for source in sources:
            self.assertNotIn("use_container_width", source.read_text(encoding="utf-8"), source.name)


if __name__ == '__main__':
    unittest.main()
