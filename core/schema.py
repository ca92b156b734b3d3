"""
================================================================================
SCHEMA.PY - DATA TAB COLUMN LAYOUT
================================================================================
PURPOSE: Single declarative table mapping sheet column positions (A..W on the
         "Data" tab) to record field names.

         The row mapper and the always-shown field set are both derived from
         COLUMNS, so tracking a new attribute is a one-line change here.
================================================================================
"""

from collections import namedtuple

Column = namedtuple("Column", ["index", "name", "label", "always_shown", "default"])


def _col(index, name, label, always_shown=False):
    return Column(index, name, label, always_shown, "")


COLUMNS = (
    _col(0, "blockNo", "Block No", always_shown=True),
    _col(1, "partNo", "Part No", always_shown=True),
    _col(2, "thickness", "Thickness", always_shown=True),
    _col(3, "nos", "Nos"),
    _col(4, "grinding", "Grinding"),
    _col(5, "netting", "Netting"),
    _col(6, "epoxy", "Epoxy"),
    _col(7, "polished", "Polished"),
    _col(8, "leather", "Leather"),
    _col(9, "lapotra", "Lapotra"),
    _col(10, "honed", "Honed"),
    _col(11, "shot", "Shot"),
    _col(12, "polR", "Pol R"),
    _col(13, "bal", "Bal"),
    _col(14, "bSP", "B SP"),
    _col(15, "edge", "Edge"),
    _col(16, "meas", "Meas"),
    _col(17, "lCm", "L (cm)"),
    _col(18, "hCm", "H (cm)"),
    _col(19, "status", "Status"),
    _col(20, "date", "Date"),
    _col(21, "color1", "Color 1"),
    _col(22, "color2", "Color 2"),
)

FIELD_NAMES = tuple(col.name for col in COLUMNS)
COLUMN_BY_NAME = {col.name: col for col in COLUMNS}
ALWAYS_SHOWN = frozenset(col.name for col in COLUMNS if col.always_shown)

PRIMARY_KEY = COLUMNS[0].name


def cell(row, index: int, default: str = ""):
    """Return the cell at ``index`` as a string, or ``default`` when absent."""
    if index >= len(row):
        return default
    value = row[index]
    if value is None:
        return default
    return value if isinstance(value, str) else str(value)


def row_to_record(row):
    """Map a raw sheet row positionally to a record with every schema field."""
    return {col.name: cell(row, col.index, col.default) for col in COLUMNS}


def label_for(name: str):
    col = COLUMN_BY_NAME.get(name)
    return col.label if col else name
