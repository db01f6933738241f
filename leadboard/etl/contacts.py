"""Collect repeated contact fields (``emails/0``, ``emails/1``, ...) from a raw row."""

from __future__ import annotations

import re
from typing import Iterable, List, Mapping, Optional


def _clean(values: Iterable[Optional[str]]) -> List[str]:
    cleaned = []
    for value in values:
        text = (value or "").strip()
        if text:
            cleaned.append(text)
    return cleaned


def _split(value: Optional[str], pattern: str = ";") -> List[str]:
    if not value:
        return []
    return _clean(re.split(pattern, value))


def _first_present(row: Mapping[str, str], *columns: str) -> Optional[str]:
    for column in columns:
        if (row.get(column) or "").strip():
            return row[column]
    return None


def extract_family(row: Mapping[str, str], family: str) -> List[str]:
    """Return every non-empty ``<family>/<n>`` value ordered by ``n``.

    Indices do not need to be contiguous or start at zero; the whole key set
    of the row is scanned.
    """
    pattern = re.compile(rf"^{re.escape(family)}/(\d+)$")
    indexed = []
    for key, value in row.items():
        match = pattern.match(key)
        if match:
            indexed.append((int(match.group(1)), value))
    indexed.sort(key=lambda item: item[0])
    return _clean(value for _, value in indexed)


def extract_emails(row: Mapping[str, str]) -> List[str]:
    return extract_family(row, "emails") + _split(_first_present(row, "Email", "email", "emails"))


def extract_phones(row: Mapping[str, str]) -> List[str]:
    phones = _clean([_first_present(row, "phone", "phoneUnformatted")])
    phones += extract_family(row, "phones")
    phones += _split(row.get("Phone"))
    return phones


def extract_linkedins(row: Mapping[str, str]) -> List[str]:
    return extract_family(row, "linkedIns") + _split(_first_present(row, "LinkedIn", "linkedIn"))


def extract_whatsapps(row: Mapping[str, str]) -> List[str]:
    """Indexed ``whatsapps/<n>`` columns win over a single delimited column."""
    indexed = extract_family(row, "whatsapps")
    if indexed:
        return indexed
    scalar = _first_present(row, "whatsapps", "WhatsApp")
    return _split(scalar, "[;,]")
