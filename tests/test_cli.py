"""CLI integration tests for table preview, mapping and generation."""

from __future__ import annotations

import zipfile
from pathlib import Path

import pytest
from typer.testing import CliRunner

pytest.importorskip("PyPDF2")

from offerflow import cli
from offerflow_io.mapping import FixedMapping
from offerflow_io.pdf_io import extract_text


@pytest.fixture
def cli_runner() -> CliRunner:
    return CliRunner()


@pytest.fixture
def inputs(tmp_path: Path) -> tuple[Path, Path]:
    table = tmp_path / "students.csv"
    table.write_text("Name,Ref_number\nAlice Smith,REF001\nBob,REF002\n", encoding="utf-8")
    template = tmp_path / "offer.txt"
    template.write_text("Dear {{name}},\nYour reference is {{Ref_number}}.\nDated {{date}}.\n", encoding="utf-8")
    return table, template


def test_fields_lists_placeholders(cli_runner: CliRunner, inputs) -> None:
    _, template = inputs

    result = cli_runner.invoke(cli.app, ["fields", str(template)])

    assert result.exit_code == 0, result.output
    assert "{{name}}" in result.output and "{{Ref_number}}" in result.output
    assert "Filled automatically: {{date}}" in result.output


def test_fields_reads_pasted_template(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli.app, ["fields", "-"], input="Hello {{first}}\n")

    assert result.exit_code == 0, result.output
    assert "{{first}}" in result.output


def test_preview_prints_records(cli_runner: CliRunner, inputs) -> None:
    table, _ = inputs

    result = cli_runner.invoke(cli.app, ["preview", str(table), "--rows", "1"])

    assert result.exit_code == 0, result.output
    assert "2 records" in result.output
    assert "Alice Smith" in result.output and "REF002" not in result.output


def test_automap_writes_mapping(cli_runner: CliRunner, inputs, tmp_path: Path) -> None:
    table, template = inputs
    mapping_path = tmp_path / "mapping.yaml"

    result = cli_runner.invoke(cli.app, ["automap", str(table), str(template), "-o", str(mapping_path)])

    assert result.exit_code == 0, result.output
    assert FixedMapping.from_yaml(mapping_path).fields == {"{{name}}": "Name", "{{Ref_number}}": "Ref_number"}


def test_automap_strict_fails_on_unmapped(cli_runner: CliRunner, inputs, tmp_path: Path) -> None:
    table, _ = inputs
    template = tmp_path / "t.txt"
    template.write_text("{{salary}}", encoding="utf-8")

    result = cli_runner.invoke(cli.app, ["automap", str(table), str(template), "--strict"])

    assert result.exit_code == 1
    assert "Unmapped: {{salary}}" in result.output


def test_generate_bulk_with_zip(cli_runner: CliRunner, inputs, tmp_path: Path) -> None:
    table, template = inputs
    out = tmp_path / "out"
    zip_path = tmp_path / "letters.zip"

    result = cli_runner.invoke(
        cli.app,
        ["generate", str(table), str(template), "--out", str(out), "--auto-map", "--zip", str(zip_path)],
    )

    assert result.exit_code == 0, result.output
    assert sorted(p.name for p in out.iterdir()) == ["Alice_Smith_REF001.pdf", "Bob_REF002.pdf"]
    text = extract_text(out / "Bob_REF002.pdf")[0]
    assert "Dear Bob," in text and "{{" not in text
    with zipfile.ZipFile(zip_path) as archive:
        assert len(archive.namelist()) == 2


def test_generate_single_record_with_mapping_file(cli_runner: CliRunner, inputs, tmp_path: Path) -> None:
    table, template = inputs
    mapping_path = tmp_path / "mapping.yaml"
    FixedMapping.from_mapping({"{{name}}": "Name", "{{Ref_number}}": "Ref_number"}).to_yaml(mapping_path)
    out = tmp_path / "single"

    result = cli_runner.invoke(
        cli.app,
        ["generate", str(table), str(template), "--out", str(out), "--mapping", str(mapping_path), "--index", "2"],
    )

    assert result.exit_code == 0, result.output
    assert [p.name for p in out.iterdir()] == ["Bob_REF002.pdf"]


def test_generate_ignores_mapping_entries_unused_by_template(cli_runner: CliRunner, inputs, tmp_path: Path) -> None:
    table, template = inputs
    mapping_path = tmp_path / "mapping.yaml"
    FixedMapping.from_mapping(
        {"{{name}}": "Name", "{{Ref_number}}": "Ref_number", "{{city}}": "Name"}
    ).to_yaml(mapping_path)
    out = tmp_path / "extra"

    result = cli_runner.invoke(
        cli.app,
        ["generate", str(table), str(template), "--out", str(out), "--mapping", str(mapping_path)],
    )

    assert result.exit_code == 0, result.output
    assert len(list(out.iterdir())) == 2


def test_generate_requires_complete_mapping(cli_runner: CliRunner, inputs, tmp_path: Path) -> None:
    table, template = inputs

    result = cli_runner.invoke(cli.app, ["generate", str(table), str(template), "--out", str(tmp_path / "o")])

    assert result.exit_code == 2
    assert "Mapping required" in result.output


def test_generate_rejects_word_documents(cli_runner: CliRunner, inputs, tmp_path: Path) -> None:
    table, _ = inputs
    doc = tmp_path / "offer.docx"
    doc.write_bytes(b"PK\x03\x04")

    result = cli_runner.invoke(cli.app, ["generate", str(table), str(doc), "--out", str(tmp_path / "o")])

    assert result.exit_code == 2
    assert "paste" in result.output


def test_inspect_reports_pages(cli_runner: CliRunner, inputs, tmp_path: Path) -> None:
    table, template = inputs
    out = tmp_path / "out"
    cli_runner.invoke(cli.app, ["generate", str(table), str(template), "--out", str(out), "--auto-map"])

    result = cli_runner.invoke(cli.app, ["inspect", str(out / "Bob_REF002.pdf")])

    assert result.exit_code == 0, result.output
    assert "Pages: 1" in result.output


def test_cli_adopts_user_time_locale(cli_runner: CliRunner, monkeypatch: pytest.MonkeyPatch) -> None:
    calls: list[tuple[int, str]] = []
    monkeypatch.setattr(cli.locale, "setlocale", lambda category, value: calls.append((category, value)))

    result = cli_runner.invoke(cli.app, ["fields", "-"], input="Hi {{name}}\n")

    assert result.exit_code == 0, result.output
    assert calls == [(cli.locale.LC_TIME, "")]


def test_cli_tolerates_missing_locale(cli_runner: CliRunner, monkeypatch: pytest.MonkeyPatch) -> None:
    def _unsupported(category: int, value: str) -> str:
        raise cli.locale.Error("unsupported locale setting")

    monkeypatch.setattr(cli.locale, "setlocale", _unsupported)

    result = cli_runner.invoke(cli.app, ["fields", "-"], input="Hi {{name}}\n")

    assert result.exit_code == 0, result.output
    assert "{{name}}" in result.output
