"""
Reporting Module.

Builds the downloadable exports of the current dicing setup:
a flat Parameter/Value/Units CSV and a multi-sheet Excel workbook formatted
with xlsxwriter.
"""
import io
import logging
import pandas as pd
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional

from dicing_toolkit.core.models import ProcessInputs, DerivedMetrics, DieLayout, WaferMapRecord
from dicing_toolkit.analytics.models import MapSummary
from dicing_toolkit.analytics.verification import (
    build_verification_specs, evaluate_measurements, verification_table
)
from dicing_toolkit.analytics.yield_analysis import usable_die_count
from dicing_toolkit.io.ingestion import records_to_dataframe
from dicing_toolkit.utils.formatting import format_number, format_plain
from dicing_toolkit.utils.telemetry import track_performance, describe_size

logger = logging.getLogger(__name__)

EXPORT_COLUMNS = ['Parameter', 'Value', 'Units', 'Status']
VERIFICATION_SEPARATOR = '--- Verification ---'

# --- THEME CONFIG ---
THEME_COLOR_PRIMARY = '#1F497D'       # Dark Blue (Headers)
THEME_COLOR_PASS = '#C6EFCE'
THEME_COLOR_FAIL = '#FFC7CE'
FONT_MAIN = 'Calibri'

@dataclass
class DashboardSnapshot:
    """Everything the exports need, captured from one dashboard run."""
    inputs: ProcessInputs
    metrics: DerivedMetrics
    layout: DieLayout
    map_summary: Optional[MapSummary] = None
    offset_x_um: float = 0.0
    offset_y_um: float = 0.0
    theta_deg: float = 0.0
    life_used_pct: float = 0.0
    cumulative_cut_mm: float = 0.0
    measurements: Dict[str, Any] = field(default_factory=dict)

    def verification_results(self):
        specs = build_verification_specs(
            self.inputs.street_width_um, self.metrics.kerf_um,
            self.inputs.die_width_mm, self.inputs.die_height_mm,
            self.inputs.wafer_thickness_um, self.metrics.tip_speed_mps
        )
        return evaluate_measurements(specs, self.measurements)


def build_export_rows(snapshot: DashboardSnapshot) -> List[List[str]]:
    """
    Rows for the CSV export: recipe, derived values and map counts, then one
    row per verification band with the entered value and PASS / FAIL / '-'.
    """
    i, m, layout = snapshot.inputs, snapshot.metrics, snapshot.layout
    good = snapshot.map_summary.good if snapshot.map_summary else None
    bad = snapshot.map_summary.bad if snapshot.map_summary else None

    rows = [
        ["Material", i.material_key, "-"],
        ["Wafer Diameter", format_plain(i.wafer_diameter_mm), "mm"],
        ["Wafer Thickness", format_plain(i.wafer_thickness_um), "µm"],
        ["Die W x H", f"{format_plain(i.die_width_mm)} x {format_plain(i.die_height_mm)}", "mm"],
        ["Street", format_plain(i.street_width_um), "µm"],
        ["Blade Diameter", format_plain(i.blade_diameter_mm), "mm"],
        ["Blade Thickness", format_plain(i.blade_thickness_um), "µm"],
        ["Blade Bond", i.bond_key, "-"],
        ["RPM", format_plain(i.rpm), "rpm"],
        ["Feed Rate", format_plain(i.feed_mm_per_s), "mm/s"],
        ["Coolant Flow", format_plain(i.coolant_l_per_min), "L/min"],
        ["Wear Factor", format_plain(i.wear_factor), "0-1"],
        ["Tip Speed", format_number(m.tip_speed_mps), "m/s"],
        ["Kerf (est)", format_number(m.kerf_um), "µm"],
        ["Spindle Power (est)", format_number(m.spindle_power_kw, 3), "kW"],
        ["Chipping Risk", format_plain(m.chipping_risk), "0-100"],
        ["Die Count (usable)", format_plain(usable_die_count(layout, snapshot.map_summary)), "pcs"],
        ["Grid (cols x rows)", f"{format_plain(layout.columns)} x {format_plain(layout.rows)}", "-"],
        ["Map Good", "" if good is None else str(good), "pcs"],
        ["Map Bad", "" if bad is None else str(bad), "pcs"],
        ["Offset X/Y (µm)", f"{format_plain(snapshot.offset_x_um)}/{format_plain(snapshot.offset_y_um)}", "µm"],
        ["Theta", format_plain(snapshot.theta_deg), "deg"],
        ["Blade Life Used", format_number(snapshot.life_used_pct, 1), "%"],
        ["Blade Cut Length Acc", format_number(snapshot.cumulative_cut_mm, 0), "mm"],
        [VERIFICATION_SEPARATOR, "", ""],
    ]

    for result in snapshot.verification_results():
        raw = snapshot.measurements.get(result.key)
        rows.append([
            result.name,
            "" if raw is None else str(raw),
            f"{format_plain(result.lower_bound)}–{format_plain(result.upper_bound)}",
            result.status.value,
        ])
    return rows


def build_export_frame(snapshot: DashboardSnapshot) -> pd.DataFrame:
    rows = [row + [""] * (len(EXPORT_COLUMNS) - len(row)) for row in build_export_rows(snapshot)]
    return pd.DataFrame(rows, columns=EXPORT_COLUMNS)


@track_performance("CSV Export", describe=describe_size)
def export_csv(snapshot: DashboardSnapshot) -> str:
    return build_export_frame(snapshot).to_csv(index=False)


# ==============================================================================
# --- Excel Report ---
# ==============================================================================

def _define_formats(workbook) -> Dict[str, Any]:
    """Defines the formats used in the Excel report."""
    base_fmt = {'font_name': FONT_MAIN, 'font_size': 11}
    return {
        'title': workbook.add_format({**base_fmt, 'bold': True, 'font_size': 18, 'font_color': THEME_COLOR_PRIMARY, 'valign': 'vcenter'}),
        'subtitle': workbook.add_format({**base_fmt, 'bold': True, 'font_color': '#595959'}),
        'header': workbook.add_format({
            **base_fmt, 'bold': True, 'valign': 'top',
            'fg_color': THEME_COLOR_PRIMARY, 'font_color': 'white',
            'border': 1, 'align': 'center'
        }),
        'cell': workbook.add_format({**base_fmt, 'border': 1}),
        'pass': workbook.add_format({**base_fmt, 'bg_color': THEME_COLOR_PASS, 'font_color': '#006100'}),
        'fail': workbook.add_format({**base_fmt, 'bg_color': THEME_COLOR_FAIL, 'font_color': '#9C0006'}),
    }


def _write_sheet(writer, formats, df: pd.DataFrame, sheet_name: str, title: str):
    """Writes a titled table starting on row 4 with a styled header row."""
    start_row = 3
    df.to_excel(writer, sheet_name=sheet_name, startrow=start_row, index=False)
    worksheet = writer.sheets[sheet_name]

    worksheet.set_row(0, 30)
    worksheet.write('A1', title, formats['title'])
    worksheet.write('A2', 'Report Date:', formats['subtitle'])
    worksheet.write('B2', datetime.now().strftime("%Y-%m-%d %H:%M:%S"))

    for col_num, value in enumerate(df.columns.values):
        worksheet.write(start_row, col_num, value, formats['header'])
    worksheet.autofit()
    return worksheet


@track_performance("Excel Report", describe=describe_size)
def generate_excel_report(
    snapshot: DashboardSnapshot,
    map_records: Optional[List[WaferMapRecord]] = None
) -> bytes:
    """
    Builds the Excel workbook: 'Recipe' (the CSV rows), 'Verification'
    (bands, measurements and status with PASS/FAIL highlighting) and, when a
    wafer map is loaded, 'Wafer Map' with every die record.
    """
    output = io.BytesIO()
    recipe_df = build_export_frame(snapshot)
    recipe_df = recipe_df[recipe_df['Parameter'] != VERIFICATION_SEPARATOR]
    recipe_df = recipe_df[recipe_df['Status'] == ""][['Parameter', 'Value', 'Units']]
    verify_df = verification_table(snapshot.verification_results())

    with pd.ExcelWriter(output, engine='xlsxwriter') as writer:
        formats = _define_formats(writer.book)

        _write_sheet(writer, formats, recipe_df, 'Recipe', 'Wafer Dicing Recipe')

        sheet = _write_sheet(writer, formats, verify_df, 'Verification', 'Verification & Dummy Run')
        if not verify_df.empty:
            status_col = verify_df.columns.get_loc('Status')
            first, last = 4, 4 + len(verify_df) - 1
            for label, fmt in (('PASS', formats['pass']), ('FAIL', formats['fail'])):
                sheet.conditional_format(first, status_col, last, status_col, {
                    'type': 'cell', 'criteria': '==', 'value': f'"{label}"', 'format': fmt
                })

        if map_records:
            _write_sheet(writer, formats, records_to_dataframe(map_records), 'Wafer Map', 'Imported Wafer Map')

    logger.info("Excel report generated")
    return output.getvalue()
