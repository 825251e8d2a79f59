import re
import logging
import pandas as pd
from dataclasses import dataclass, field
from typing import Any, List, Optional, Union

from dicing_toolkit.core.config import MAP_X_COLUMNS, MAP_Y_COLUMNS, MAP_STATUS_COLUMN
from dicing_toolkit.core.models import WaferMapRecord
from dicing_toolkit.enums import DieStatus
from dicing_toolkit.utils.telemetry import track_performance

logger = logging.getLogger(__name__)

LINE_SPLIT = re.compile(r"\r?\n")
FIELD_SPLIT = re.compile(r"\s*,\s*")
DECIMAL_NUMBER = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?|[+-]?Infinity")
PREFIXED_INTEGER = re.compile(r"0[xX][0-9a-fA-F]+|0[oO][0-7]+|0[bB][01]+")

@dataclass
class IngestionResult:
    """
    Result of loading a wafer map file.
    Contains the parsed records and lists of any errors or warnings.
    """
    records: List[WaferMapRecord] = field(default_factory=list)
    file_name: Optional[str] = None
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors

def _column_index(header: List[str], candidates) -> int:
    for name in candidates:
        if name in header:
            return header.index(name)
    return -1

def _cell(row: List[str], index: int) -> str:
    # Missing columns read as empty so the caller's default applies
    if index < 0 or index >= len(row):
        return ""
    return row[index]

def _to_coordinate(text: str) -> Union[int, float]:
    """
    Empty cells mean 0; non-numeric cells become NaN.
    Accepts decimal and exponent notation, "Infinity" and unsigned 0x / 0o / 0b
    integers. Underscore separators, "inf" and "nan" are not numbers.
    """
    text = text.strip()
    if not text:
        return 0
    if PREFIXED_INTEGER.fullmatch(text):
        return int(text, 0)
    if not DECIMAL_NUMBER.fullmatch(text):
        return float('nan')
    value = float(text.replace("Infinity", "inf"))
    if value.is_integer():
        return int(value)
    return value

def parse_wafer_map(text: str) -> List[WaferMapRecord]:
    """
    Parses a CSV wafer map into records, in input line order.

    The first line is always consumed as the header, even if it holds data.
    Columns are found by name (case-insensitive): 'x' or 'die_x', 'y' or
    'die_y', and 'status'. Short or malformed rows never raise: missing
    coordinates default to 0, unparseable ones become NaN, and a missing status
    is 'good'. Any status other than 'bad' counts as good.
    """
    lines = LINE_SPLIT.split(text.strip())
    header = [name.lower() for name in FIELD_SPLIT.split(lines.pop(0))]

    x_index = _column_index(header, MAP_X_COLUMNS)
    y_index = _column_index(header, MAP_Y_COLUMNS)
    status_index = _column_index(header, (MAP_STATUS_COLUMN,))

    records = []
    for line in lines:
        row = FIELD_SPLIT.split(line)
        records.append(WaferMapRecord(
            x=_to_coordinate(_cell(row, x_index)),
            y=_to_coordinate(_cell(row, y_index)),
            status=DieStatus.from_text(_cell(row, status_index) or DieStatus.GOOD.value),
        ))
    return records

def missing_map_columns(text: str) -> List[str]:
    """Names the expected header columns absent from the first line."""
    first_line = LINE_SPLIT.split(text.strip())[0]
    header = [name.lower() for name in FIELD_SPLIT.split(first_line)]
    missing = []
    if _column_index(header, MAP_X_COLUMNS) < 0:
        missing.append('/'.join(MAP_X_COLUMNS))
    if _column_index(header, MAP_Y_COLUMNS) < 0:
        missing.append('/'.join(MAP_Y_COLUMNS))
    if MAP_STATUS_COLUMN not in header:
        missing.append(MAP_STATUS_COLUMN)
    return missing

def _read_text(uploaded_file: Any) -> str:
    if hasattr(uploaded_file, 'getvalue'):
        raw = uploaded_file.getvalue()
    elif hasattr(uploaded_file, 'read'):
        raw = uploaded_file.read()
    else:
        raw = uploaded_file
    if isinstance(raw, bytes):
        return raw.decode('utf-8-sig')
    return str(raw)

def _describe_map(result: IngestionResult) -> str:
    if result.errors:
        return f"{result.file_name}: {len(result.errors)} error(s)"
    return f"{result.file_name}: {len(result.records)} dies"

@track_performance("Wafer Map Ingestion", describe=_describe_map)
def load_wafer_map(uploaded_file: Any, file_name: Optional[str] = None) -> IngestionResult:
    """
    Reads and parses an uploaded wafer map.
    Returns an IngestionResult; decoding problems are reported as errors and a
    header without the expected columns as a warning, never raised.
    """
    result = IngestionResult(file_name=file_name or getattr(uploaded_file, 'name', None))

    try:
        text = _read_text(uploaded_file)
    except UnicodeDecodeError as e:
        msg = f"Could not decode '{result.file_name}' as UTF-8 text: {e}"
        result.errors.append(msg)
        logger.error(msg)
        return result
    except (OSError, AttributeError) as e:
        msg = f"Error reading '{result.file_name}': {e}"
        result.errors.append(msg)
        logger.error(msg)
        return result

    missing = missing_map_columns(text)
    if missing:
        msg = f"'{result.file_name}' header is missing {', '.join(missing)}; defaults were used."
        result.warnings.append(msg)
        logger.warning(msg)

    result.records = parse_wafer_map(text)
    logger.info(f"Parsed {len(result.records)} dies from '{result.file_name}'")
    return result

def records_to_dataframe(records: List[WaferMapRecord]) -> pd.DataFrame:
    """Flattens records into an x / y / status frame for plotting and export."""
    return pd.DataFrame(
        {
            'x': [r.x for r in records],
            'y': [r.y for r in records],
            'status': [r.status.value for r in records],
        },
        columns=['x', 'y', 'status'],
    )
