import pytest

from leadboard.etl.classify import is_staff_category


@pytest.mark.parametrize(
    "category",
    [
        "Catering",
        "Caterer",
        "AUDIO VISUAL equipment supplier",
        "Audiovisual production company",
        "Staffing agency",
        "Employment agency",
        "Wedding photographer",
        "Mobile DJ service",
        "Party equipment rental service",
    ],
)
def test_staff_categories(category):
    assert is_staff_category(category) is True


@pytest.mark.parametrize("category", ["Venue", "Event venue", "Insurance adjuster", "Audiologist", "Visual arts school", "Hotel", "", None])
def test_client_categories(category):
    assert is_staff_category(category) is False
