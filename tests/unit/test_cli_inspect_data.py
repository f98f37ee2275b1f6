from __future__ import annotations

from pathlib import Path

from receiptgen.cli import main as cli_main


def test_inspect_data_prints_mappings(write_config: Path, temp_workdir: Path, make_excel, clean_logging, capsys):
    make_excel(
        temp_workdir / "data",
        "jan.xlsx",
        [["Name", "Paid", "Date"], ["Dana", 100, "01/01/2025"], ["Noa", 50, "02/01/2025"]],
    )
    code = cli_main(["--inspect-data"])
    out = capsys.readouterr().out
    assert code == 0
    assert "FILE: jan.xlsx" in out
    assert "SHEET: Sheet1 cols=['Name', 'Paid', 'Date']" in out
    assert "'Name' -> customerName confidence=1.00" in out
    assert "'Paid' -> amount confidence=0.45 (manual)" in out
    assert "'Name' -> customerName confidence=1.00 [שם לקוח]" in out
    assert "row 2: {'Name': 'Dana'" in out
    # inspection writes nothing
    assert not (temp_workdir / "output").exists()
    assert "SUMMARY" not in out


def test_inspect_data_reports_unreadable_file(write_config: Path, temp_workdir: Path, clean_logging, capsys):
    (temp_workdir / "data" / "broken.xlsx").write_bytes(b"junk")
    assert cli_main(["--inspect-data"]) == 0
    out = capsys.readouterr().out
    assert "FILE: broken.xlsx" in out
    assert "read_error:" in out


def test_inspect_data_without_files(write_config: Path, clean_logging, capsys):
    assert cli_main(["--inspect-data"]) == 0
    assert "inspect: no spreadsheet files" in capsys.readouterr().out
