"""
Test suite for AdmitConnect.

Run all tests: pytest
Run unit tests only: pytest tests/unit/
Run specific file: pytest tests/unit/test_candidate_parser.py -v
"""
