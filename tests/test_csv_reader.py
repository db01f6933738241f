import pytest

from leadboard.etl import csv_reader


def test_parse_rows_maps_header_to_values():
    rows = csv_reader.parse_rows("title,city\nAcme,Austin\nGlobex,Dallas\n")

    assert rows == [
        {"title": "Acme", "city": "Austin"},
        {"title": "Globex", "city": "Dallas"},
    ]


def test_parse_rows_handles_crlf_and_bom():
    rows = csv_reader.parse_rows("\ufefftitle,city\r\nAcme,Austin\r\n")

    assert rows == [{"title": "Acme", "city": "Austin"}]


def test_short_rows_are_padded_and_long_rows_truncated():
    rows = csv_reader.parse_rows("title,city,phone\nAcme\nGlobex,Dallas,555,extra\n")

    assert rows[0] == {"title": "Acme", "city": "", "phone": ""}
    assert rows[1] == {"title": "Globex", "city": "Dallas", "phone": "555"}


def test_quoted_fields_with_commas_quotes_and_newlines():
    text = 'title,notes\n"Acme, Inc","He said ""hi""\nsecond line"\nGlobex,plain\n'

    rows = csv_reader.parse_rows(text)

    assert rows[0]["title"] == "Acme, Inc"
    assert rows[0]["notes"] == 'He said "hi"\nsecond line'
    assert rows[1] == {"title": "Globex", "notes": "plain"}


def test_unterminated_quote_only_affects_its_line(caplog):
    text = 'title,city\n"Broken,Austin\nGood,Dallas\n'

    with caplog.at_level("WARNING"):
        rows = csv_reader.parse_rows(text)

    assert len(rows) == 2
    assert rows[0]["title"].startswith("Broken")
    assert rows[1] == {"title": "Good", "city": "Dallas"}
    assert "Unterminated quote on line 2" in " ".join(caplog.messages)


def test_unterminated_quote_does_not_absorb_a_later_quoted_row():
    rows = csv_reader.parse_rows('title,city\n"Broken,Austin\nGood,"Dallas"\nOther,Houston\n')

    assert len(rows) == 3
    assert rows[0]["title"].startswith("Broken")
    assert "Good" not in rows[0]["title"]
    assert rows[1] == {"title": "Good", "city": "Dallas"}
    assert rows[2] == {"title": "Other", "city": "Houston"}


def test_stray_quote_inside_unquoted_field_does_not_swallow_rows():
    rows = csv_reader.parse_rows('title,city\nJoe"s Diner,Austin\nGlobex,Dallas\n')

    assert len(rows) == 2
    assert rows[0]["city"] == "Austin"
    assert rows[1]["title"] == "Globex"


def test_empty_lines_are_ignored():
    rows = csv_reader.parse_rows("title\n\nAcme\n\n\nGlobex\n")

    assert [row["title"] for row in rows] == ["Acme", "Globex"]


@pytest.mark.parametrize("text", ["", "\n\n", "title,city\n"])
def test_empty_or_header_only_input(text):
    assert csv_reader.parse_rows(text) == []


def test_decode_csv_bytes():
    assert csv_reader.decode_csv_bytes("\ufefftitle\nCafé\n".encode("utf-8")) == "title\nCafé\n"

    with pytest.raises(csv_reader.CsvIngestError):
        csv_reader.decode_csv_bytes(b"\xff\xfe\x00bad")
