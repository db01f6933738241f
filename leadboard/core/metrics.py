"""Dashboard-wide aggregates over a collection of companies."""

import logging
from typing import Dict, Iterable, List, Optional, Sequence

from leadboard.core.config import get_settings
from leadboard.models import Company, ContactDistribution, DashboardMetrics, RankedGroup

logger = logging.getLogger(__name__)


def rounded_percent(count: int, total: int) -> int:
    """``round(100 * count / total)`` with halves rounded up; 0 when ``total`` is 0."""
    if total <= 0:
        return 0
    return (200 * count + total) // (2 * total)


def rank_groups(keys: Iterable[str], top_n: int) -> List[RankedGroup]:
    """Count keys and return the ``top_n`` most frequent, ties in first-seen order."""
    counts: Dict[str, int] = {}
    for key in keys:
        counts[key] = counts.get(key, 0) + 1
    # dicts keep insertion order and sorted() is stable, so ties stay first-seen
    ranked = sorted(counts.items(), key=lambda item: item[1], reverse=True)
    return [RankedGroup(name=name, value=value) for name, value in ranked[:top_n]]


def _bucket(distribution: ContactDistribution, company: Company) -> None:
    present = company.has_email + company.has_phone + company.has_linkedin
    if present >= 2:
        distribution.multiple += 1
    elif company.has_email:
        distribution.email_only += 1
    elif company.has_phone:
        distribution.phone_only += 1
    elif company.has_linkedin:
        distribution.linkedin_only += 1


def calculate_metrics(companies: Sequence[Company], top_n: Optional[int] = None) -> DashboardMetrics:
    """Summarize ``companies`` for the dashboard. Empty input gives all-zero metrics."""
    if top_n is None:
        top_n = get_settings().top_n

    total = len(companies)
    with_email = with_phone = with_linkedin = score_sum = 0
    distribution = ContactDistribution()
    cities = set()

    for company in companies:
        with_email += company.has_email
        with_phone += company.has_phone
        with_linkedin += company.has_linkedin
        score_sum += company.lead_score
        if company.city:
            cities.add(company.city)
        _bucket(distribution, company)

    metrics = DashboardMetrics(
        total_companies=total,
        with_email_count=with_email,
        with_phone_count=with_phone,
        with_linkedin_count=with_linkedin,
        email_coverage=rounded_percent(with_email, total),
        phone_coverage=rounded_percent(with_phone, total),
        linkedin_coverage=rounded_percent(with_linkedin, total),
        completeness=rounded_percent(with_email + with_phone + with_linkedin, 3 * total),
        location_count=len(cities),
        avg_lead_score=(2 * score_sum + total) // (2 * total) if total else 0,
        distribution=distribution,
        top_categories=rank_groups((company.category for company in companies), top_n),
        top_locations=rank_groups((company.city for company in companies), top_n),
    )
    logger.debug("Calculated metrics for %d companies", total)
    return metrics
