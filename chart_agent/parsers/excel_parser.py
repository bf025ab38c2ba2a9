"""
Excel Parser

Turns the first sheet of an uploaded workbook into a two-column table of
(label, value) pairs plus a title, ready to be folded into a chart request.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence, Tuple, Union
from numbers import Real
from pathlib import Path
import io
import json
import logging
import math

import pandas as pd

from ..charts.models import ChartType
from ..exceptions import ParseError, UploadRejectedError

logger = logging.getLogger(__name__)

DEFAULT_TITLE = "Grafiek"
VALID_EXTENSIONS = ('.xlsx', '.xls')
MAX_UPLOAD_BYTES = 10 * 1024 * 1024

INVALID_TYPE_MESSAGE = "Ongeldig bestandstype. Alleen .xlsx en .xls bestanden zijn toegestaan."
TOO_LARGE_MESSAGE = "Bestand is te groot. Maximale grootte is {max_mb}MB."


@dataclass(frozen=True)
class TabularData:
    """Labels, values and title extracted from a spreadsheet."""
    labels: List[str]
    values: List[float]
    title: str
    chart_type: ChartType = field(default=ChartType.BAR)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'labels': list(self.labels),
            'values': list(self.values),
            'title': self.title,
            'chartType': self.chart_type.value,
        }

    def to_prompt_fragment(self) -> str:
        """Serialize for the ``<excel_data>`` block of a user turn."""
        return json.dumps(self.to_dict(), ensure_ascii=False)


def is_valid_excel_file(filename: Optional[str]) -> bool:
    """Check the file extension (case-insensitive)."""
    return bool(filename) and filename.lower().endswith(VALID_EXTENSIONS)


def validate_upload(filename: Optional[str], size: int, max_bytes: int = MAX_UPLOAD_BYTES) -> None:
    """Reject uploads with the wrong extension or size before any parsing happens."""
    if not is_valid_excel_file(filename):
        raise UploadRejectedError(INVALID_TYPE_MESSAGE)
    if size > max_bytes:
        max_mb = max_bytes // (1024 * 1024)
        raise UploadRejectedError(TOO_LARGE_MESSAGE.format(max_mb=max_mb))


def _is_missing(cell: Any) -> bool:
    if cell is None:
        return True
    try:
        return bool(pd.isna(cell))
    except (TypeError, ValueError):
        return False


def _parse_number(cell: Any) -> Optional[float]:
    """Return a finite float for numeric cells or numeric text, else None."""
    if _is_missing(cell) or isinstance(cell, bool):
        return None
    if isinstance(cell, Real):
        number = float(cell)
    elif isinstance(cell, str):
        try:
            number = float(cell.strip())
        except ValueError:
            return None
    else:
        return None
    return number if math.isfinite(number) else None


def _is_textual(cell: Any) -> bool:
    return isinstance(cell, str) and _parse_number(cell) is None


def _format_label(cell: Any) -> str:
    if _is_missing(cell):
        return ""
    if isinstance(cell, float) and cell.is_integer():
        return str(int(cell))
    return str(cell).strip()


def extract_pairs(rows: Sequence[Sequence[Any]]) -> Tuple[List[str], List[float]]:
    """
    Extract (label, value) pairs from raw rows.

    Row 0 is a header when its first two cells are both text; rows that do not
    yield a non-empty label and a finite number are skipped.
    """
    if len(rows) < 2:
        raise ParseError("Excel bestand moet minimaal 2 rijen bevatten")

    first = rows[0]
    has_headers = len(first) >= 2 and _is_textual(first[0]) and _is_textual(first[1])
    start_row = 1 if has_headers else 0

    labels: List[str] = []
    values: List[float] = []
    for row in rows[start_row:]:
        if len(row) < 2:
            continue
        label = _format_label(row[0])
        value = _parse_number(row[1])
        if label and value is not None:
            labels.append(label)
            values.append(value)

    if not labels:
        raise ParseError("Geen geldige data gevonden in Excel bestand")

    return labels, values


class ExcelParser:
    """Parses spreadsheet files and buffers with pandas."""

    def parse_excel_file(self, file_path: Union[str, Path]) -> TabularData:
        """Parse a workbook from disk."""
        logger.info(f"Parsing Excel file: {file_path}")
        return self._parse(file_path)

    def parse_excel_buffer(self, buffer: bytes) -> TabularData:
        """Parse a workbook held in memory."""
        logger.info(f"Parsing Excel buffer ({len(buffer)} bytes)")
        return self._parse(io.BytesIO(buffer))

    def _parse(self, source: Union[str, Path, io.BytesIO]) -> TabularData:
        try:
            with pd.ExcelFile(source) as workbook:
                if not workbook.sheet_names:
                    raise ParseError("Excel bestand bevat geen werkbladen")
                sheet_name = workbook.sheet_names[0]
                frame = workbook.parse(sheet_name, header=None)

            rows = [list(row) for row in frame.itertuples(index=False, name=None)]
            labels, values = extract_pairs(rows)
        except ParseError as e:
            logger.warning(f"Spreadsheet rejected: {e}")
            raise ParseError(f"Fout bij het lezen van Excel bestand: {e}", details=str(e))
        except Exception as e:
            logger.error(f"Failed to decode spreadsheet: {e}")
            raise ParseError(f"Fout bij het lezen van Excel bestand: {e}", details=str(e))

        title = str(sheet_name).strip() if sheet_name is not None else ""
        result = TabularData(labels=labels, values=values, title=title or DEFAULT_TITLE)
        logger.info(f"Extracted {len(labels)} rows from sheet '{result.title}'")
        return result
