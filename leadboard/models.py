"""Core data models shared by the ingestion and metrics pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List


@dataclass(slots=True)
class Company:
    """Normalized business record built from exactly one CSV row."""

    id: str
    name: str = ""
    category: str = ""
    city: str = ""
    website: str = ""
    google_maps_url: str = ""
    emails: List[str] = field(default_factory=list)
    phones: List[str] = field(default_factory=list)
    linkedins: List[str] = field(default_factory=list)
    whatsapps: List[str] = field(default_factory=list)
    is_staff: bool = False
    lead_score: int = 0

    @property
    def has_email(self) -> bool:
        return len(self.emails) > 0

    @property
    def has_phone(self) -> bool:
        return len(self.phones) > 0

    @property
    def has_linkedin(self) -> bool:
        return len(self.linkedins) > 0

    def to_dict(self) -> Dict[str, Any]:
        """Serialize using the field names the dashboard expects."""
        return {
            "id": self.id,
            "name": self.name,
            "category": self.category,
            "city": self.city,
            "emails": list(self.emails),
            "phones": list(self.phones),
            "linkedIns": list(self.linkedins),
            "whatsapps": list(self.whatsapps),
            "website": self.website,
            "googleMapsUrl": self.google_maps_url,
            "hasEmail": self.has_email,
            "hasPhone": self.has_phone,
            "hasLinkedIn": self.has_linkedin,
            "isStaff": self.is_staff,
            "leadScore": self.lead_score,
        }


@dataclass(slots=True)
class RankedGroup:
    name: str
    value: int

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "value": self.value}


@dataclass(slots=True)
class ContactDistribution:
    """Mutually exclusive buckets; companies without any contact are in none."""

    email_only: int = 0
    phone_only: int = 0
    linkedin_only: int = 0
    multiple: int = 0

    @property
    def total(self) -> int:
        return self.email_only + self.phone_only + self.linkedin_only + self.multiple

    def to_dict(self) -> Dict[str, int]:
        return {
            "emailOnly": self.email_only,
            "phoneOnly": self.phone_only,
            "linkedInOnly": self.linkedin_only,
            "multiple": self.multiple,
        }


@dataclass(slots=True)
class DashboardMetrics:
    total_companies: int = 0
    with_email_count: int = 0
    with_phone_count: int = 0
    with_linkedin_count: int = 0
    email_coverage: int = 0
    phone_coverage: int = 0
    linkedin_coverage: int = 0
    completeness: int = 0
    location_count: int = 0
    avg_lead_score: int = 0
    distribution: ContactDistribution = field(default_factory=ContactDistribution)
    top_categories: List[RankedGroup] = field(default_factory=list)
    top_locations: List[RankedGroup] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "totalCompanies": self.total_companies,
            "withEmailCount": self.with_email_count,
            "withPhoneCount": self.with_phone_count,
            "withLinkedInCount": self.with_linkedin_count,
            "emailCoverage": self.email_coverage,
            "phoneCoverage": self.phone_coverage,
            "linkedInCoverage": self.linkedin_coverage,
            "completeness": self.completeness,
            "locationCount": self.location_count,
            "avgLeadScore": self.avg_lead_score,
            "distribution": self.distribution.to_dict(),
            "topCategories": [group.to_dict() for group in self.top_categories],
            "topLocations": [group.to_dict() for group in self.top_locations],
        }
