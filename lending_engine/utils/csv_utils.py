"""CSV rendering for tabular exports"""

import csv
import io
from typing import Any, Dict, Iterable, List, Optional, Sequence

from lending_engine.utils.math_utils import format_number

LINE_TERMINATOR = "\r\n"


def _cell(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, float):
        return format_number(value)
    return str(value)


def rows_to_csv(
    rows: Iterable[Dict[str, Any]],
    columns: Sequence[str],
    headers: Optional[Dict[str, str]] = None,
) -> str:
    """
    Render dict rows as CSV text.

    The header row uses display names from `headers` when given, falling back
    to the column key. Missing values render as empty cells and integral
    floats drop the decimal point (600.0 -> 600). Lines are separated by CRLF
    with no terminator after the last row.
    """
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator=LINE_TERMINATOR, quoting=csv.QUOTE_MINIMAL)

    header_labels: List[str] = [(headers or {}).get(col, col) for col in columns]
    writer.writerow(header_labels)

    for row in rows:
        writer.writerow([_cell(row.get(col)) for col in columns])

    return buffer.getvalue().removesuffix(LINE_TERMINATOR)
