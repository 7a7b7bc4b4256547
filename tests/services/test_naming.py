from __future__ import annotations

import pytest

from offerflow.services.template_engine import derive_filename, header_reference, sanitize_name


def test_name_and_reference_from_record() -> None:
    assert derive_filename({"name": "Jane Doe!", "Ref_number": "REF007"}, 0) == "Jane_Doe_REF007.pdf"


@pytest.mark.parametrize(
    ("record", "index", "expected"),
    [
        ({}, 1, "Student_1_REF001.pdf"),
        ({"Name": "Bob Smith", "ref_number": "X9"}, 4, "Bob_Smith_X9.pdf"),
        ({"name": "", "Name": "Cara"}, 12, "Cara_REF012.pdf"),
        ({"name": "Ana", "Ref_number": "", "ref_number": "R2"}, 3, "Ana_R2.pdf"),
    ],
)
def test_fallbacks(record: dict, index: int, expected: str) -> None:
    assert derive_filename(record, index) == expected


def test_extension_is_configurable() -> None:
    assert derive_filename({"name": "A"}, 1, "txt") == "A_REF001.txt"


def test_sanitize_collapses_whitespace_runs() -> None:
    assert sanitize_name("Mary  Ann\tO'Neil") == "Mary_Ann_ONeil"


def test_header_reference_defaults_to_na() -> None:
    assert header_reference({}) == "N/A"
    assert header_reference({"ref_number": "R5"}) == "R5"
