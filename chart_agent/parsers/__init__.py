"""Spreadsheet parsers."""

from .excel_parser import (
    ExcelParser,
    TabularData,
    extract_pairs,
    is_valid_excel_file,
    validate_upload,
)

__all__ = [
    'ExcelParser',
    'TabularData',
    'extract_pairs',
    'is_valid_excel_file',
    'validate_upload',
]
