from __future__ import annotations

from offerflow.config import RenderSettings
from offerflow.services.template_engine import render_record

SETTINGS = RenderSettings(date_format="%Y-%m-%d", timestamp_format="%Y-%m-%d %H:%M")


def test_render_record_builds_text_document_and_name(fixed_now) -> None:
    record = {"name": "Alice Smith", "Ref_number": "REF001"}
    template = "Dear {{name}},\n\nRef {{Ref_number}} issued {{today}}."

    rendered = render_record(
        template,
        record,
        {"{{name}}": "name", "{{Ref_number}}": "Ref_number"},
        index=1,
        settings=SETTINGS,
        now=fixed_now,
    )

    assert rendered.filename == "Alice_Smith_REF001.pdf"
    assert rendered.text == "Dear Alice Smith,\n\nRef REF001 issued 2024-05-10."
    first = rendered.document.pages[0]
    assert first.header.lines == ("Reference: REF001", "Date: 2024-05-10")
    assert first.footer.left == "Generated on: 2024-05-10 09:30"
    assert first.footer.right == "Page 1 of 1"
    assert rendered.document.title == "Alice Smith"


def test_render_is_reproducible_for_a_fixed_clock(fixed_now, char_measure) -> None:
    args = ("{{name}} " * 300, {"name": "Bo"}, {"{{name}}": "name"})

    first = render_record(*args, index=2, settings=SETTINGS, now=fixed_now, measure=char_measure)
    second = render_record(*args, index=2, settings=SETTINGS, now=fixed_now, measure=char_measure)

    assert first == second
    assert first.filename == "Bo_REF002.pdf"
