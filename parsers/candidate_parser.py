"""
CSV parser for candidate uploads.

Turns an uploaded candidate list into validated records:

    header line  -> map_headers()        one canonical field (or None) per column
    data lines   -> iter_raw_records()   lazy, positional, comma-split rows
    each row     -> validate_record()    name and phone must be non-empty

The format is deliberately simple: fields are separated by a bare comma
with no quoting or escaping, so a comma inside a value shifts every later
cell one column to the right. Rows shorter than the header are padded with
empty strings unless strict column checking is enabled.
"""

from dataclasses import dataclass, field
from typing import Iterator, Optional
import structlog

from exceptions import CandidateParseError

logger = structlog.get_logger(__name__)

DELIMITER = ","

# Checked in order; the first keyword found in the header wins.
FIELD_KEYWORDS: list[tuple[str, tuple[str, ...]]] = [
    ("name", ("name",)),
    ("phone", ("phone", "mobile")),
    ("email", ("email",)),
    ("city", ("city",)),
    ("course", ("course",)),
]

CANDIDATE_FIELDS = tuple(canonical for canonical, _ in FIELD_KEYWORDS)


@dataclass
class ParsedCandidate:
    """Candidate row that passed validation."""
    name: str
    phone: str
    email: Optional[str] = None
    city: Optional[str] = None
    course: Optional[str] = None

    def to_dict(self) -> dict:
        """Fields present in the file; columns the header lacked are left out."""
        return {
            key: value
            for key, value in (
                ("name", self.name),
                ("phone", self.phone),
                ("email", self.email),
                ("city", self.city),
                ("course", self.course),
            )
            if value is not None
        }


@dataclass
class RawRow:
    """One non-blank data line, before validation."""
    line: int
    fields: dict[str, str]
    cell_count: int


@dataclass
class RejectedRow:
    """Data line left out of the result."""
    line: int
    reason: str


@dataclass
class CandidateParseResult:
    """Result of parsing a candidate CSV."""
    candidates: list[ParsedCandidate] = field(default_factory=list)
    rejected: list[RejectedRow] = field(default_factory=list)
    field_tags: list[Optional[str]] = field(default_factory=list)

    @property
    def count(self) -> int:
        return len(self.candidates)

    def to_dict(self) -> dict:
        """Convert to dictionary for API response."""
        return {
            "candidates": [c.to_dict() for c in self.candidates],
            "rejected": [{"line": r.line, "reason": r.reason} for r in self.rejected],
            "field_tags": list(self.field_tags),
        }


# ===================
# FIELD MAPPER
# ===================

def classify_header(cell: str) -> Optional[str]:
    """Canonical candidate field for one header cell, or None if unmapped."""
    normalized = cell.strip().lower()
    for canonical, keywords in FIELD_KEYWORDS:
        if any(keyword in normalized for keyword in keywords):
            return canonical
    return None


def map_headers(header_cells: list[str]) -> list[Optional[str]]:
    """
    Assign each header cell to a canonical field.

    Unmapped and duplicate-mapped columns are not errors: unmapped columns
    are ignored, and when two columns map to the same field the later one
    wins when rows are built.

    Args:
        header_cells: Raw header strings in file order

    Returns:
        One tag per header cell, in the same order
    """
    return [classify_header(cell) for cell in header_cells]


# ===================
# ROW PARSER
# ===================

def _header_cells(text: str) -> list[str]:
    return text.split("\n", 1)[0].split(DELIMITER)


def iter_raw_records(
    text: str,
    field_tags: Optional[list[Optional[str]]] = None,
) -> Iterator[RawRow]:
    """
    Yield one RawRow per non-blank data line.

    Line 0 is the header. Cells are trimmed and paired with the tag at the
    same column index; untagged cells are dropped, and a tagged column with
    no cell in the row yields "".

    Args:
        text: Decoded file content
        field_tags: Header classification (computed from line 0 if omitted)
    """
    lines = text.split("\n")
    if field_tags is None:
        field_tags = map_headers(lines[0].split(DELIMITER))

    for line_number, line in enumerate(lines[1:], start=2):
        if not line.strip():
            continue

        cells = line.split(DELIMITER)
        fields: dict[str, str] = {}
        for column, tag in enumerate(field_tags):
            if tag is None:
                continue
            fields[tag] = cells[column].strip() if column < len(cells) else ""

        yield RawRow(line=line_number, fields=fields, cell_count=len(cells))


# ===================
# RECORD VALIDATOR
# ===================

def validate_record(fields: dict[str, str]) -> Optional[str]:
    """
    Check the required fields of a raw row.

    Returns:
        None when the row is valid, otherwise the rejection reason
    """
    has_name = bool((fields.get("name") or "").strip())
    has_phone = bool((fields.get("phone") or "").strip())

    if has_name and has_phone:
        return None
    if not has_name and not has_phone:
        return "missing_name_and_phone"
    return "missing_phone" if has_name else "missing_name"


def is_valid_record(fields: dict[str, str]) -> bool:
    return validate_record(fields) is None


# ===================
# ENTRY POINTS
# ===================

def decode_upload(content: bytes) -> str:
    """
    Decode uploaded bytes as UTF-8 text (a leading BOM is dropped).

    Raises:
        CandidateParseError: If the bytes are not valid UTF-8
    """
    try:
        return content.decode("utf-8-sig")
    except UnicodeDecodeError as e:
        logger.warning("candidate_file_decode_failed", error=str(e))
        raise CandidateParseError(
            details={"original_error": str(e)}
        ) from e


def parse_candidates_csv(text: str, strict_columns: bool = False) -> CandidateParseResult:
    """
    Parse candidate CSV text into validated records.

    Pure function of the input text: parsing the same text twice gives
    equal results.

    Args:
        text: Decoded file content
        strict_columns: Reject rows whose cell count differs from the header
                        instead of padding them

    Returns:
        CandidateParseResult with valid candidates and rejected lines
    """
    header_cells = _header_cells(text)
    field_tags = map_headers(header_cells)
    result = CandidateParseResult(field_tags=field_tags)

    for row in iter_raw_records(text, field_tags):
        if strict_columns and row.cell_count != len(header_cells):
            result.rejected.append(RejectedRow(line=row.line, reason="column_count_mismatch"))
            continue

        reason = validate_record(row.fields)
        if reason:
            result.rejected.append(RejectedRow(line=row.line, reason=reason))
            continue

        result.candidates.append(ParsedCandidate(**row.fields))

    logger.info(
        "candidate_csv_parsed",
        columns=len(header_cells),
        mapped=[tag for tag in field_tags if tag],
        candidate_count=result.count,
        rejected_count=len(result.rejected),
    )

    return result
