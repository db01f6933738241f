"""Flatten companies back into a downloadable CSV."""

import csv
import io
from typing import Dict, List, Sequence

from leadboard.models import Company

EXPORT_COLUMNS = (
    "Name",
    "Category",
    "City",
    "Lead Score",
    "Phone",
    "Email",
    "LinkedIn",
    "WhatsApp",
    "Website",
    "Google Maps URL",
    "Type",
)
MULTI_VALUE_SEPARATOR = "; "


def _join(values: Sequence[str]) -> str:
    return MULTI_VALUE_SEPARATOR.join(values)


def to_export_rows(companies: Sequence[Company]) -> List[Dict[str, object]]:
    rows: List[Dict[str, object]] = []
    for company in companies:
        rows.append(
            {
                "Name": company.name,
                "Category": company.category,
                "City": company.city,
                "Lead Score": company.lead_score,
                "Phone": _join(company.phones),
                "Email": _join(company.emails),
                "LinkedIn": _join(company.linkedins),
                "WhatsApp": _join(company.whatsapps),
                "Website": company.website,
                "Google Maps URL": company.google_maps_url,
                "Type": "Service Provider" if company.is_staff else "Client",
            }
        )
    return rows


def to_csv(companies: Sequence[Company]) -> str:
    """Serialize companies; the output parses back through ``parse_csv``."""
    buffer = io.StringIO()
    writer = csv.DictWriter(buffer, fieldnames=EXPORT_COLUMNS, lineterminator="\n")
    writer.writeheader()
    writer.writerows(to_export_rows(companies))
    return buffer.getvalue()
