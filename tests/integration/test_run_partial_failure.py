from __future__ import annotations

import json
from pathlib import Path

from receiptgen.cli import main as cli_main


def test_partial_failure_run(temp_workdir: Path, make_excel, clean_logging, capsys):
    (temp_workdir / "config" / "receipts.yml").write_text(
        "source_directory: ./data\nworkers: 4\n",
        encoding="utf-8",
    )
    make_excel(
        temp_workdir / "data",
        "mixed.xlsx",
        [
            ["Name", "Sum", "Date"],
            ["Dana", 100, "01/01/2025"],
            ["", 50, "02/01/2025"],
            ["Avi", "abc", "31/02/2025"],
            ["Noa", 75, "03/01/2025"],
        ],
    )
    make_excel(temp_workdir / "data", "nothing.xlsx", [["Name", "Sum", "Date"], ["Z", "x", "y"]])
    (temp_workdir / "data" / "empty.csv").write_text("", encoding="utf-8")

    assert cli_main([]) == 2
    out = capsys.readouterr().out
    assert "SUMMARY files=3/3 success=1 failed=2 receipts=2 invalid_rows=3" in out
    assert "WARN mixed.xlsx: 2 of 4 rows invalid" in out

    [log] = list((temp_workdir / "logs").glob("errors-*.log"))
    records = [json.loads(line) for line in log.read_text(encoding="utf-8").splitlines()]
    by_file: dict[str, list[tuple[int, str, str]]] = {}
    for r in records:
        by_file.setdefault(r["file"], []).append((r["row"], r["field"], r["error_type"]))

    assert by_file["mixed.xlsx"] == [
        (3, "customerName", "MISSING"),
        (4, "amount", "INVALID"),
        (4, "date", "INVALID"),
    ]
    assert by_file["empty.csv"] == [(-1, "<FILE_LEVEL>", "EMPTY_SHEET")]
    assert by_file["nothing.xlsx"][0] == (2, "customerName", "TOO_SHORT")
    assert by_file["nothing.xlsx"][-1] == (-1, "<FILE_LEVEL>", "NO_VALID_ROWS")
