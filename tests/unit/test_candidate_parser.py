"""
Unit tests for the candidate CSV parser.

Run: pytest tests/unit/test_candidate_parser.py -v
"""

import pytest

from parsers.candidate_parser import (
    ParsedCandidate,
    classify_header,
    decode_upload,
    is_valid_record,
    iter_raw_records,
    map_headers,
    parse_candidates_csv,
    validate_record,
)
from exceptions import CandidateParseError


# ===================
# FIELD MAPPER
# ===================

class TestMapHeaders:
    """Tests for map_headers() / classify_header()"""

    def test_maps_standard_header(self):
        """Should map Name,Phone,Email,City,Course in order."""
        result = map_headers(["Name", "Phone", "Email", "City", "Course"])

        assert result == ["name", "phone", "email", "city", "course"]

    def test_mapping_ignores_case_and_whitespace(self):
        """Should trim and lower-case before matching."""
        result = map_headers(["  PHONE NUMBER ", "\tStudent NAME\r"])

        assert result == ["phone", "name"]

    def test_mobile_maps_to_phone(self):
        assert classify_header("Mobile") == "phone"

    def test_substring_match(self):
        """Should match keywords anywhere in the header."""
        assert classify_header("candidate_email_address") == "email"
        assert classify_header("Home City") == "city"
        assert classify_header("Preferred Course") == "course"

    def test_name_has_priority(self):
        """A header containing both 'name' and 'phone' maps to name."""
        assert classify_header("phone owner name") == "name"

    def test_unmapped_columns_are_none(self):
        result = map_headers(["Name", "Age", "Phone", ""])

        assert result == ["name", None, "phone", None]

    def test_duplicate_mapping_is_not_an_error(self):
        result = map_headers(["Phone", "Mobile"])

        assert result == ["phone", "phone"]

    @pytest.mark.parametrize("header", [
        ["Name", "Phone"],
        ["Phone", "Name"],
        ["City", " mobile ", "Email", "FULL NAME"],
    ])
    def test_name_and_phone_found_regardless_of_position(self, header):
        tags = map_headers(header)

        assert tags.count("name") == 1
        assert tags.count("phone") == 1


# ===================
# ROW PARSER
# ===================

class TestIterRawRecords:
    """Tests for iter_raw_records()"""

    def test_yields_one_row_per_data_line(self):
        rows = list(iter_raw_records("Name,Phone\nA,1\nB,2"))

        assert [r.fields for r in rows] == [
            {"name": "A", "phone": "1"},
            {"name": "B", "phone": "2"},
        ]

    def test_skips_blank_lines(self):
        rows = list(iter_raw_records("Name,Phone\n\nA,1\n   \nB,2\n"))

        assert len(rows) == 2
        assert [r.line for r in rows] == [3, 5]

    def test_is_lazy(self):
        """Should return a generator consumed once."""
        rows = iter_raw_records("Name,Phone\nA,1")

        assert next(rows).fields["name"] == "A"
        assert list(rows) == []

    def test_cells_are_trimmed(self):
        rows = list(iter_raw_records("Name,Phone\r\n  John Doe ,  9876543210 \r\n"))

        assert rows[0].fields == {"name": "John Doe", "phone": "9876543210"}

    def test_short_row_yields_empty_strings(self):
        rows = list(iter_raw_records("Name,Phone,Email\nJane"))

        assert rows[0].fields == {"name": "Jane", "phone": "", "email": ""}
        assert rows[0].cell_count == 1

    def test_unmapped_cells_are_discarded(self):
        rows = list(iter_raw_records("Name,Age,Phone\nJane,19,555"))

        assert rows[0].fields == {"name": "Jane", "phone": "555"}

    def test_later_duplicate_column_overwrites(self):
        """Two phone columns: the later value wins."""
        rows = list(iter_raw_records("Name,Phone,Mobile\nJane,111,222"))

        assert rows[0].fields["phone"] == "222"

    def test_comma_inside_value_shifts_columns(self):
        """No quoting support: a comma splits the value."""
        rows = list(iter_raw_records('Name,Phone\n"Doe, John",555'))

        assert rows[0].fields == {"name": '"Doe', "phone": 'John"'}
        assert rows[0].cell_count == 3

    def test_header_only_yields_nothing(self):
        assert list(iter_raw_records("Name,Phone\n")) == []

    def test_accepts_precomputed_tags(self):
        rows = list(iter_raw_records("ignored header\nJane,555", ["name", "phone"]))

        assert rows[0].fields == {"name": "Jane", "phone": "555"}


# ===================
# RECORD VALIDATOR
# ===================

class TestValidateRecord:
    """Tests for validate_record()"""

    def test_valid_record_passes(self):
        assert validate_record({"name": "Jane", "phone": "555"}) is None
        assert is_valid_record({"name": "Jane", "phone": "555"})

    def test_missing_name(self):
        assert validate_record({"name": "", "phone": "555"}) == "missing_name"

    def test_whitespace_phone(self):
        assert validate_record({"name": "Jane", "phone": "   "}) == "missing_phone"

    def test_missing_both(self):
        assert validate_record({}) == "missing_name_and_phone"

    def test_optional_fields_not_required(self):
        assert is_valid_record({"name": "Jane", "phone": "555", "email": ""})


# ===================
# PARSE CANDIDATES CSV
# ===================

class TestParseCandidatesCsv:
    """Tests for parse_candidates_csv()"""

    def test_scenario_missing_name_row_rejected(self):
        """Second row has an empty name and is dropped."""
        result = parse_candidates_csv("Name,Phone\nJohn Doe, 9876543210\n,1234567890")

        assert result.field_tags == ["name", "phone"]
        assert result.count == 1
        assert result.candidates[0].to_dict() == {"name": "John Doe", "phone": "9876543210"}
        assert len(result.rejected) == 1
        assert result.rejected[0].line == 3
        assert result.rejected[0].reason == "missing_name"

    def test_scenario_mobile_header_without_city(self):
        """City column absent: city stays None and is left out of the dict."""
        result = parse_candidates_csv("name,mobile,email,course\nJane,5550001,jane@x.edu,MBA")

        candidate = result.candidates[0]
        assert candidate.to_dict() == {
            "name": "Jane",
            "phone": "5550001",
            "email": "jane@x.edu",
            "course": "MBA",
        }
        assert candidate.city is None

    def test_scenario_header_only(self):
        result = parse_candidates_csv("Name,Phone,Email\n")

        assert result.count == 0
        assert result.rejected == []

    def test_empty_text(self):
        result = parse_candidates_csv("")

        assert result.count == 0

    def test_count_equals_rows_passing_validation(self):
        text = "Name,Phone\nA,1\n,2\nC,\n  ,  \nE,5\n"

        result = parse_candidates_csv(text)

        assert result.count == 2
        assert [c.name for c in result.candidates] == ["A", "E"]
        assert [r.reason for r in result.rejected] == [
            "missing_name",
            "missing_phone",
            "missing_name_and_phone",
        ]

    def test_parsing_is_idempotent(self):
        text = "Name,Phone,City\nA,1,Delhi\nB,2,\n,3,Goa\n"

        first = parse_candidates_csv(text)
        second = parse_candidates_csv(text)

        assert first.to_dict() == second.to_dict()

    def test_full_record_survives_serialization(self):
        original = ParsedCandidate(
            name="Priya Sharma",
            phone="+91 98200 12345",
            email="priya@example.edu",
            city="Mumbai",
            course="B.Com",
        )
        row = ",".join([original.name, original.phone, original.email, original.city, original.course])

        result = parse_candidates_csv(f"Name,Phone,Email,City,Course\n{row}")

        assert result.candidates == [original]

    def test_no_name_column_rejects_every_row(self):
        result = parse_candidates_csv("Phone,Email\n555,a@b.c")

        assert result.count == 0
        assert result.rejected[0].reason == "missing_name"

    def test_strict_columns_rejects_mismatched_rows(self):
        text = "Name,Phone\nJane,555\nDoe, John,556\nShort\n"

        result = parse_candidates_csv(text, strict_columns=True)

        assert [c.name for c in result.candidates] == ["Jane"]
        assert [(r.line, r.reason) for r in result.rejected] == [
            (3, "column_count_mismatch"),
            (4, "column_count_mismatch"),
        ]

    def test_default_mode_pads_short_rows(self):
        result = parse_candidates_csv("Name,Phone,Email\nJane,555")

        assert result.candidates[0].email == ""


class TestDecodeUpload:
    """Tests for decode_upload()"""

    def test_decodes_utf8(self):
        assert decode_upload("Name,Phone\nJosé,1".encode("utf-8")) == "Name,Phone\nJosé,1"

    def test_strips_bom(self):
        assert decode_upload(b"\xef\xbb\xbfName,Phone") == "Name,Phone"

    def test_invalid_bytes_raise_parse_error(self):
        with pytest.raises(CandidateParseError) as exc_info:
            decode_upload(b"\xff\xfe\x00N\x00a")

        assert exc_info.value.code == "CANDIDATE_PARSE_ERROR"
        assert exc_info.value.status_code == 422
