import io
import pytest
import pandas as pd

from dicing_toolkit.core.geometry import GeometryEngine
from dicing_toolkit.core.models import ProcessInputs
from dicing_toolkit.analytics.models import MapSummary
from dicing_toolkit.io.ingestion import parse_wafer_map
from dicing_toolkit.process.model import derive_metrics
from dicing_toolkit.reporting import (
    DashboardSnapshot, build_export_rows, build_export_frame, export_csv, generate_excel_report,
    EXPORT_COLUMNS, VERIFICATION_SEPARATOR
)


@pytest.fixture
def snapshot() -> DashboardSnapshot:
    inputs = ProcessInputs()
    return DashboardSnapshot(
        inputs=inputs,
        metrics=derive_metrics(inputs),
        layout=GeometryEngine.die_count(300, 5, 5, 60),
        measurements={'street': '61', 'vac': '95', 'kerf': ''},
    )


def _rows_by_name(rows):
    return {row[0]: row for row in rows}


def test_export_rows_recipe_section(snapshot):
    rows = build_export_rows(snapshot)
    by_name = _rows_by_name(rows)
    assert rows[0] == ["Material", "Si", "-"]
    assert by_name["Wafer Diameter"][1:] == ["300", "mm"]
    assert by_name["Die W x H"][1] == "5 x 5"
    assert by_name["Blade Bond"][1] == "Resin"
    assert by_name["Tip Speed"][1] == "91.11"
    assert by_name["Kerf (est)"][1] == "30.72"
    assert by_name["Spindle Power (est)"][1] == "0.001"
    assert by_name["Chipping Risk"][1] == "67"
    assert by_name["Die Count (usable)"][1] == "2760"
    assert by_name["Grid (cols x rows)"][1] == "59 x 59"
    assert by_name["Map Good"][1] == ""
    assert by_name["Map Bad"][1] == ""
    assert by_name["Offset X/Y (µm)"][1] == "0/0"
    assert by_name["Blade Life Used"][1] == "0.0"


def test_export_rows_verification_section(snapshot):
    rows = build_export_rows(snapshot)
    separator = [r[0] for r in rows].index(VERIFICATION_SEPARATOR)
    verification = rows[separator + 1:]
    assert len(verification) == 7
    by_name = _rows_by_name(verification)
    assert by_name["Street Width (µm)"][1] == "61"
    assert by_name["Street Width (µm)"][3] == "PASS"
    assert by_name["Vacuum Level (kPa)"] == ["Vacuum Level (kPa)", "95", "70–90", "FAIL"]
    assert by_name["Kerf (µm)"][3] == "-"
    assert by_name["Tip Speed (m/s)"][1:] == ["", "30–45", "-"]


def test_map_summary_overrides_usable(snapshot):
    snapshot.map_summary = MapSummary(good=10, bad=2)
    by_name = _rows_by_name(build_export_rows(snapshot))
    assert by_name["Die Count (usable)"][1] == "10"
    assert by_name["Map Good"][1] == "10"
    assert by_name["Map Bad"][1] == "2"


def test_export_frame_and_csv(snapshot):
    df = build_export_frame(snapshot)
    assert list(df.columns) == EXPORT_COLUMNS
    csv_text = export_csv(snapshot)
    assert csv_text.splitlines()[0] == "Parameter,Value,Units,Status"
    parsed = pd.read_csv(io.StringIO(csv_text), dtype=str, keep_default_na=False)
    assert parsed.shape == df.shape
    assert parsed.iloc[0].tolist() == ["Material", "Si", "-", ""]


def test_csv_quotes_commas(snapshot):
    snapshot.inputs = ProcessInputs(material="Si, doped")
    snapshot.metrics = derive_metrics(snapshot.inputs)
    parsed = pd.read_csv(io.StringIO(export_csv(snapshot)), dtype=str, keep_default_na=False)
    assert parsed.iloc[0]["Value"] == "Si, doped"


def test_generate_excel_report_structure(snapshot):
    report_bytes = generate_excel_report(snapshot)
    assert isinstance(report_bytes, bytes)
    assert len(report_bytes) > 0

    with pd.ExcelFile(io.BytesIO(report_bytes), engine='openpyxl') as xls:
        assert xls.sheet_names == ['Recipe', 'Verification']
        verify = pd.read_excel(xls, sheet_name='Verification', skiprows=3)
        assert list(verify.columns) == ['Parameter', 'Nominal', 'Lower', 'Upper', 'Measured', 'Status']
        assert len(verify) == 7
        assert verify.loc[verify['Parameter'] == 'Street Width (µm)', 'Status'].iloc[0] == 'PASS'
        recipe = pd.read_excel(xls, sheet_name='Recipe', skiprows=3, dtype=str)
        assert list(recipe.columns) == ['Parameter', 'Value', 'Units']
        assert VERIFICATION_SEPARATOR not in recipe['Parameter'].tolist()


def test_generate_excel_report_with_map(snapshot):
    records = parse_wafer_map("x,y,status\n0,0,good\n0,1,bad")
    report_bytes = generate_excel_report(snapshot, map_records=records)
    with pd.ExcelFile(io.BytesIO(report_bytes), engine='openpyxl') as xls:
        assert 'Wafer Map' in xls.sheet_names
        wafer = pd.read_excel(xls, sheet_name='Wafer Map', skiprows=3)
        assert wafer['status'].tolist() == ['good', 'bad']
