"""
Upload parsers module.
"""

from parsers.candidate_parser import (
    parse_candidates_csv,
    decode_upload,
    map_headers,
    iter_raw_records,
    validate_record,
    CandidateParseResult,
    ParsedCandidate,
    RejectedRow,
)

__all__ = [
    "parse_candidates_csv",
    "decode_upload",
    "map_headers",
    "iter_raw_records",
    "validate_record",
    "CandidateParseResult",
    "ParsedCandidate",
    "RejectedRow",
]
