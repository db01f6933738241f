"""In-memory dataset held on behalf of the dashboard."""

import logging
from typing import List, Optional

from leadboard.core.metrics import calculate_metrics
from leadboard.etl.transform import load_default_data, parse_csv
from leadboard.models import Company, DashboardMetrics

logger = logging.getLogger(__name__)

FILTER_KINDS = ("all", "staff", "clients")


class DatasetStore:
    """Owns the current company list; uploads replace it, filters return copies."""

    def __init__(self, companies: Optional[List[Company]] = None) -> None:
        self._companies: List[Company] = list(companies or [])

    @property
    def companies(self) -> List[Company]:
        return list(self._companies)

    def __len__(self) -> int:
        return len(self._companies)

    def replace(self, companies: List[Company]) -> List[Company]:
        self._companies = list(companies)
        logger.info("Dataset replaced: %d companies", len(self._companies))
        return self.companies

    def load_text(self, text: str) -> List[Company]:
        return self.replace(parse_csv(text))

    def load_default(self) -> List[Company]:
        return self.replace(load_default_data())

    def get(self, company_id: str) -> Optional[Company]:
        for company in self._companies:
            if company.id == company_id:
                return company
        return None

    def filter(self, kind: str = "all", min_score: int = 0, search: str = "") -> List[Company]:
        if kind not in FILTER_KINDS:
            raise ValueError(f"unknown filter type {kind!r}; expected one of {', '.join(FILTER_KINDS)}")

        result = self._companies
        if kind == "staff":
            result = [company for company in result if company.is_staff]
        elif kind == "clients":
            result = [company for company in result if not company.is_staff]

        if min_score > 0:
            result = [company for company in result if company.lead_score >= min_score]

        query = (search or "").strip().lower()
        if query:
            result = [
                company
                for company in result
                if query in company.name.lower() or query in company.category.lower() or query in company.city.lower()
            ]
        return list(result)

    def metrics(self, kind: str = "all", min_score: int = 0, search: str = "", top_n: Optional[int] = None) -> DashboardMetrics:
        return calculate_metrics(self.filter(kind=kind, min_score=min_score, search=search), top_n=top_n)
