from leadboard.core import config
from leadboard.etl import transform

SCENARIO_CSV = (
    "title,categoryName,city,phone,emails/0,emails/1,linkedIns/0\n"
    "Row A,Catering,,555,a@x.com,b@x.com,\n"
    "Row B,Venue,Austin,,,,\n"
    "Row C,Catering,Austin,,,,https://li/co\n"
)


def setup_function(function):
    config.get_settings.cache_clear()


def teardown_function(function):
    config.get_settings.cache_clear()


def test_parse_csv_builds_companies():
    a, b, c = transform.parse_csv(SCENARIO_CSV)

    assert [a.id, b.id, c.id] == ["0", "1", "2"]
    assert a.name == "Row A"
    assert a.emails == ["a@x.com", "b@x.com"]
    assert a.phones == ["555"]
    assert a.has_email and a.has_phone and not a.has_linkedin
    assert a.city == ""
    assert [a.is_staff, b.is_staff, c.is_staff] == [True, False, True]
    assert not (b.has_email or b.has_phone or b.has_linkedin)
    assert c.linkedins == ["https://li/co"]
    assert b.website == "" and b.google_maps_url == ""


def test_parse_csv_is_deterministic():
    assert transform.parse_csv(SCENARIO_CSV) == transform.parse_csv(SCENARIO_CSV)


def test_has_flags_follow_lists():
    for company in transform.parse_csv(SCENARIO_CSV):
        assert company.has_email == (len(company.emails) > 0)
        assert company.has_phone == (len(company.phones) > 0)
        assert company.has_linkedin == (len(company.linkedins) > 0)
        assert 0 <= company.lead_score <= 100


def test_blank_rows_skipped_but_keep_ids_stable():
    companies = transform.parse_csv("title,city\nAcme,Austin\n,\nGlobex,Dallas\n")

    assert [(company.id, company.name) for company in companies] == [("0", "Acme"), ("2", "Globex")]


def test_row_without_title_is_kept():
    companies = transform.parse_csv("title,city,phone\n,Austin,555\n")

    assert len(companies) == 1
    assert companies[0].name == ""
    assert companies[0].phones == ["555"]


def test_to_company_splits_maps_and_website_urls():
    maps = transform.to_company({"title": "Acme", "url": "https://www.google.com/maps/place/Acme"}, 0)
    site = transform.to_company({"title": "Acme", "url": "https://acme.example"}, 1)
    both = transform.to_company(
        {"website": "https://acme.example", "url": "https://www.google.com/maps/place/Acme"}, 2
    )

    assert maps.google_maps_url == "https://www.google.com/maps/place/Acme"
    assert maps.website == ""
    assert site.website == "https://acme.example"
    assert site.google_maps_url == ""
    assert both.website == "https://acme.example"
    assert both.google_maps_url == "https://www.google.com/maps/place/Acme"


def test_lead_score_rises_with_contacts():
    bare = transform.to_company({"title": "Acme"}, 0)
    rich = transform.to_company(
        {
            "title": "Acme",
            "categoryName": "Catering",
            "phone": "555",
            "emails/0": "a@x.com",
            "linkedIns/0": "https://li/co",
            "whatsapps": "+1 555",
            "website": "https://acme.example",
        },
        1,
    )

    assert bare.lead_score == 10
    assert rich.lead_score == 100


def test_parse_csv_empty_input():
    assert transform.parse_csv("") == []


def test_load_default_data_reads_bundled_file(monkeypatch):
    monkeypatch.delenv("DEFAULT_DATA_PATH", raising=False)

    companies = transform.load_default_data()

    assert len(companies) == 10
    assert companies[0].name == "Lone Star Catering Co."
    assert companies[0].emails == ["events@lonestarcatering.example", "hello@lonestarcatering.example"]
    assert sum(company.is_staff for company in companies) == 6


def test_load_default_data_missing_file(tmp_path, caplog):
    with caplog.at_level("WARNING"):
        companies = transform.load_default_data(tmp_path / "missing.csv")

    assert companies == []
    assert "Unable to read default dataset" in " ".join(caplog.messages)


def test_load_default_data_undecodable_file(tmp_path, caplog):
    data_file = tmp_path / "latin1.csv"
    data_file.write_bytes(b"title\n\xff\xfeAcme\n")

    with caplog.at_level("WARNING"):
        companies = transform.load_default_data(data_file)

    assert companies == []
    assert "Unable to read default dataset" in " ".join(caplog.messages)
