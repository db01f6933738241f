"""Lead scoring for normalized company records."""

from typing import Dict

SCORE_FLOOR = 10
SCORE_CAP = 100

# Every weight is non-negative, so adding a signal never lowers a score.
SIGNAL_WEIGHTS: Dict[str, int] = {
    "email": 30,
    "phone": 20,
    "linkedin": 15,
    "whatsapp": 10,
    "web": 5,
    "category": 5,
    "staff": 5,
}


def score_lead(
    *,
    has_email: bool,
    has_phone: bool,
    has_linkedin: bool,
    has_whatsapp: bool = False,
    has_web: bool = False,
    has_category: bool = False,
    is_staff: bool = False,
) -> int:
    """Return a score in ``[0, 100]``; a record with every signal scores 100."""
    signals = {
        "email": has_email,
        "phone": has_phone,
        "linkedin": has_linkedin,
        "whatsapp": has_whatsapp,
        "web": has_web,
        "category": has_category,
        "staff": is_staff,
    }
    score = SCORE_FLOOR + sum(SIGNAL_WEIGHTS[name] for name, present in signals.items() if present)
    return max(0, min(SCORE_CAP, score))
