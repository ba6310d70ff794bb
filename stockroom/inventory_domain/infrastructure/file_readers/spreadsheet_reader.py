# stockroom/inventory_domain/infrastructure/file_readers/spreadsheet_reader.py
"""Reads an uploaded spreadsheet into raw rows of cell text."""

import csv
import logging
import os
import zipfile

import pandas as pd

from stockroom.common.exceptions.custom_exceptions import ImportFileError

logger = logging.getLogger(__name__)

EXCEL_EXTENSIONS = (".xlsx",)
CSV_EXTENSIONS = (".csv",)


def _trim_row(values: list) -> list[str]:
    """Blank cells become "", trailing blanks are dropped so short rows stay short."""
    cells = ["" if value is None else str(value).strip() for value in values]
    while cells and not cells[-1]:
        cells.pop()
    return cells


def _read_excel_rows(path: str) -> list[list[str]]:
    df = pd.read_excel(path, header=None, dtype=str)
    return [_trim_row(values) for values in df.fillna("").values.tolist()]


def _read_csv_rows(path: str) -> list[list[str]]:
    # Rows may have different lengths, so the csv module reads them as they are
    with open(path, "r", encoding="utf-8-sig", newline="") as f:
        sample = f.read(4096)
        f.seek(0)
        try:
            delimiter = csv.Sniffer().sniff(sample, delimiters=";,\t").delimiter
        except csv.Error:
            delimiter = ";"
        return [_trim_row(values) for values in csv.reader(f, delimiter=delimiter)]


def read_rows(path: str) -> list[list[str]]:
    """
    Loads every row of a .csv or .xlsx file, header included, as text cells.

    Header detection and validation belong to the import service; this only
    reads. Raises ImportFileError for unsupported or unreadable files.
    """
    extension = os.path.splitext(path)[1].lower()
    if extension not in EXCEL_EXTENSIONS + CSV_EXTENSIONS:
        raise ImportFileError(f"Unsupported file type '{extension}'. Upload .csv or .xlsx")

    try:
        if extension in EXCEL_EXTENSIONS:
            rows = _read_excel_rows(path)
        else:
            rows = _read_csv_rows(path)
    except (OSError, ValueError, ImportError, zipfile.BadZipFile, csv.Error) as e:
        raise ImportFileError(f"Could not read {path}", original_exception=e)

    logger.info(f"Read {len(rows)} rows from {os.path.basename(path)}")
    return rows
