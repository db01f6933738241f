"""Tolerant CSV decoding for scraped directory exports.

Scraper exports are wide (one column per repeated value, e.g. ``emails/0``,
``emails/1``) and not always well formed. The reader here never fails the
whole batch because of one bad line: ragged rows are padded, a line with an
unterminated quote is parsed on its own, and anything the ``csv`` module
still rejects is split on commas as a last resort.
"""

from __future__ import annotations

import csv
import logging
import re
from typing import Dict, Iterator, List, Optional, Tuple

logger = logging.getLogger(__name__)

RawRow = Dict[str, str]

_LINE_BREAK = re.compile(r"\r\n|\r|\n")


class CsvIngestError(ValueError):
    """Raised when uploaded bytes cannot be turned into CSV text."""


def decode_csv_bytes(data: bytes) -> str:
    """Decode an uploaded file as UTF-8, dropping a leading BOM."""
    try:
        return data.decode("utf-8-sig")
    except UnicodeDecodeError as exc:
        raise CsvIngestError(f"CSV file is not valid UTF-8: {exc}") from exc


def _scan_quotes(line: str, in_quotes: bool) -> Optional[bool]:
    """Return whether ``line`` ends inside a quoted field.

    When ``line`` continues a quoted field from an earlier line, the quote
    that closes it must be followed by a comma or the end of the line;
    anything else returns None, meaning the earlier quote was never closed.
    """
    continued = in_quotes
    field_start = not in_quotes
    i = 0
    while i < len(line):
        ch = line[i]
        if in_quotes:
            if ch == '"':
                if i + 1 < len(line) and line[i + 1] == '"':
                    i += 2
                    continue
                if continued and i + 1 < len(line) and line[i + 1] != ",":
                    return None
                in_quotes = False
                continued = False
        elif ch == '"' and field_start:
            in_quotes = True
            field_start = False
        else:
            field_start = ch == ","
        i += 1
    return in_quotes


def _iter_records(text: str) -> Iterator[Tuple[int, str]]:
    """Yield ``(line_number, record_text)`` for each logical CSV record.

    Quoted fields may span several physical lines. When a quote is never
    properly closed only the line it started on is treated as the record,
    and scanning resumes on the following line.
    """
    lines = _LINE_BREAK.split(text)
    i = 0
    while i < len(lines):
        start = i
        in_quotes = _scan_quotes(lines[i], False)
        while in_quotes and i + 1 < len(lines):
            i += 1
            in_quotes = _scan_quotes(lines[i], True)

        if in_quotes is not False:
            logger.warning("Unterminated quote on line %d; parsing the line on its own.", start + 1)
            yield start + 1, lines[start]
            i = start + 1
            continue

        yield start + 1, "\n".join(lines[start : i + 1])
        i += 1


def _split_record(record: str, line_number: int) -> List[str]:
    try:
        return next(csv.reader([record]), [])
    except csv.Error as exc:
        logger.warning("Malformed CSV on line %d (%s); falling back to a plain split.", line_number, exc)
        return [part.strip('"') for part in record.split(",")]


def parse_rows(text: str) -> List[RawRow]:
    """Decode CSV text into a list of column-name -> value mappings.

    The first non-empty record is the header. Rows shorter than the header
    are padded with empty strings; extra trailing cells are dropped. Empty
    or header-only input yields an empty list.
    """
    if not text:
        return []
    if text.startswith("\ufeff"):
        text = text[1:]

    header: List[str] = []
    rows: List[RawRow] = []
    for line_number, record in _iter_records(text):
        if not record.strip():
            continue

        fields = _split_record(record, line_number)
        if not header:
            header = [name.strip() for name in fields]
            continue

        if len(fields) > len(header):
            logger.debug("Line %d has %d cells for %d columns; extra cells dropped.", line_number, len(fields), len(header))
        fields = fields[: len(header)] + [""] * (len(header) - len(fields))
        rows.append({name: value for name, value in zip(header, fields) if name})

    if not header:
        logger.warning("CSV input has no header row.")
    return rows
