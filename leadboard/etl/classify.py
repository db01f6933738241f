"""Split scraped businesses into service providers (staff) and hiring clients."""

import re

# Businesses that supply staff or services to events; anything else is
# treated as a client or venue.
STAFF_KEYWORDS = (
    "catering",
    "caterer",
    "audio visual",
    "audiovisual",
    "audio-visual",
    "a/v",
    "av service",
    "lighting",
    "sound",
    "recruit",
    "staffing",
    "employment agency",
    "temp agency",
    "photograph",
    "videograph",
    "entertainment",
    "event planner",
    "event management",
    "florist",
    "bartend",
    "security service",
    "rental",
)
_WORD_KEYWORDS = re.compile(r"\bdj\b")


def is_staff_category(category: str) -> bool:
    text = (category or "").lower()
    if not text:
        return False
    if any(keyword in text for keyword in STAFF_KEYWORDS):
        return True
    return bool(_WORD_KEYWORDS.search(text))
