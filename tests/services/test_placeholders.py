from __future__ import annotations

from offerflow.services.template_engine import extract_placeholders, mappable_placeholders, placeholder_name


def test_extracts_tokens_in_first_occurrence_order() -> None:
    text = "Dear {{name}}, your ref is {{Ref_number}}. Thanks {{name}}!"

    assert extract_placeholders(text) == ["{{name}}", "{{Ref_number}}"]


def test_inner_whitespace_makes_distinct_placeholders() -> None:
    assert set(extract_placeholders("{{ name }} and {{name}}")) == {"{{ name }}", "{{name}}"}


def test_no_placeholders_and_unbalanced_braces() -> None:
    assert extract_placeholders("plain text") == []
    assert extract_placeholders("{{open and {single} and }}") == []
    assert extract_placeholders("{{a}b}}") == []


def test_adjacent_tokens_do_not_overlap() -> None:
    assert extract_placeholders("{{a}}{{b}}") == ["{{a}}", "{{b}}"]


def test_reserved_tokens_are_not_mappable() -> None:
    text = "On {{date}} ({{today}}) we wrote to {{name}}"

    assert extract_placeholders(text) == ["{{date}}", "{{today}}", "{{name}}"]
    assert mappable_placeholders(text) == ["{{name}}"]


def test_placeholder_name_drops_braces() -> None:
    assert placeholder_name("{{Ref_number}}") == "Ref_number"
    assert placeholder_name("{{ name }}") == " name "
