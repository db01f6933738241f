"""Utilities for transforming scraped CSV rows into Company records."""

import logging
from pathlib import Path
from typing import List, Mapping, Optional
from urllib.parse import urlsplit

from leadboard.core.config import get_settings
from leadboard.etl.classify import is_staff_category
from leadboard.etl.contacts import extract_emails, extract_linkedins, extract_phones, extract_whatsapps
from leadboard.etl.csv_reader import CsvIngestError, decode_csv_bytes, parse_rows
from leadboard.etl.scoring import score_lead
from leadboard.models import Company

logger = logging.getLogger(__name__)

_NAME_COLUMNS = ("title", "name", "Name")
_CATEGORY_COLUMNS = ("categoryName", "category", "Category")
_CITY_COLUMNS = ("city", "City")
_WEBSITE_COLUMNS = ("website", "Website")
_MAPS_COLUMNS = ("googleMapsUrl", "Google Maps URL", "mapsUrl")


def _scalar(row: Mapping[str, str], columns) -> str:
    for column in columns:
        value = (row.get(column) or "").strip()
        if value:
            return value
    return ""


def is_google_maps_url(url: str) -> bool:
    parts = urlsplit(url)
    host = parts.netloc.lower()
    return ("google." in host and parts.path.startswith("/maps")) or host.startswith("maps.google.")


def _maps_url(row: Mapping[str, str]) -> str:
    explicit = _scalar(row, _MAPS_COLUMNS)
    if explicit:
        return explicit
    url = _scalar(row, ("url",))
    return url if url and is_google_maps_url(url) else ""


def _website(row: Mapping[str, str]) -> str:
    explicit = _scalar(row, _WEBSITE_COLUMNS)
    if explicit:
        return explicit
    url = _scalar(row, ("url",))
    return "" if is_google_maps_url(url) else url


def is_blank_row(row: Mapping[str, str]) -> bool:
    return not any((value or "").strip() for value in row.values())


def to_company(row: Mapping[str, str], index: int) -> Company:
    """Build one Company from one raw row; ``index`` becomes its id."""
    category = _scalar(row, _CATEGORY_COLUMNS)
    website = _website(row)
    google_maps_url = _maps_url(row)
    emails = extract_emails(row)
    phones = extract_phones(row)
    linkedins = extract_linkedins(row)
    whatsapps = extract_whatsapps(row)
    is_staff = is_staff_category(category)

    return Company(
        id=str(index),
        name=_scalar(row, _NAME_COLUMNS),
        category=category,
        city=_scalar(row, _CITY_COLUMNS),
        website=website,
        google_maps_url=google_maps_url,
        emails=emails,
        phones=phones,
        linkedins=linkedins,
        whatsapps=whatsapps,
        is_staff=is_staff,
        lead_score=score_lead(
            has_email=bool(emails),
            has_phone=bool(phones),
            has_linkedin=bool(linkedins),
            has_whatsapp=bool(whatsapps),
            has_web=bool(website or google_maps_url),
            has_category=bool(category),
            is_staff=is_staff,
        ),
    )


def parse_csv(text: str) -> List[Company]:
    """Parse CSV text into companies. Bad input yields an empty list, never an error."""
    rows = parse_rows(text)
    companies: List[Company] = []
    for index, row in enumerate(rows):
        if is_blank_row(row):
            logger.debug("Skipping blank row %d", index)
            continue
        companies.append(to_company(row, index))

    logger.info("Parsed %d companies from %d rows", len(companies), len(rows))
    return companies


def load_default_data(path: Optional[Path] = None) -> List[Company]:
    """Load the bundled (or configured) default dataset."""
    data_path = path or get_settings().default_data_path
    try:
        text = decode_csv_bytes(Path(data_path).read_bytes())
    except (OSError, CsvIngestError) as exc:
        logger.warning("Unable to read default dataset %s: %s", data_path, exc)
        return []
    return parse_csv(text)
