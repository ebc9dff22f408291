"""Tests for the CTC CSV writer."""

import csv
import os
import stat
from datetime import datetime

import pytest

from inscription_engine import csv_export
from inscription_engine.csv_export import default_output_path, write_csv
from inscription_engine.exceptions import CsvWriteError
from inscription_engine.models import CSV_COLUMNS, CsvRow


def _row(tx_id: str) -> CsvRow:
    return CsvRow(
        timestamp="2023/07/07 01:23:45",
        type="buy",
        base_currency="ordi",
        base_amount="10",
        quote_currency="",
        quote_amount="",
        fee_currency="",
        fee_amount="",
        from_address="from",
        to_address="to",
        blockchain="Bitcoin",
        id=tx_id,
        description=f"BRC20 Transfer with inscription_id {tx_id}i0",
    )


def _read(path):
    with open(path, newline="", encoding="utf-8") as f:
        return list(csv.reader(f))


def test_zero_rows_writes_header_only(tmp_path):
    path = tmp_path / "out.csv"
    write_csv(str(path), [])
    assert _read(path) == [CSV_COLUMNS]


def test_rows_written_in_order(tmp_path):
    path = tmp_path / "out.csv"
    write_csv(str(path), [_row("b"), _row("a"), _row("c")])

    lines = _read(path)
    assert lines[0] == CSV_COLUMNS
    assert [line[CSV_COLUMNS.index("ID")] for line in lines[1:]] == ["b", "a", "c"]
    assert lines[1][CSV_COLUMNS.index("Blockchain")] == "Bitcoin"
    assert lines[1][CSV_COLUMNS.index("Quote Currency")] == ""


def test_header_independent_of_size(tmp_path):
    small = tmp_path / "small.csv"
    large = tmp_path / "large.csv"
    write_csv(str(small), [_row("a")])
    write_csv(str(large), [_row(str(i)) for i in range(200)])
    assert _read(small)[0] == _read(large)[0] == CSV_COLUMNS
    assert len(_read(large)) == 201


def test_creates_parent_directory(tmp_path):
    path = tmp_path / "nested" / "csv" / "out.csv"
    write_csv(str(path), [_row("a")])
    assert path.exists()


def test_output_has_regular_file_permissions(tmp_path):
    reference = tmp_path / "reference.csv"
    with open(reference, "w", encoding="utf-8") as f:
        f.write("x\n")

    path = tmp_path / "out.csv"
    write_csv(str(path), [])

    assert stat.S_IMODE(os.stat(path).st_mode) == stat.S_IMODE(
        os.stat(reference).st_mode
    )


def test_no_temp_files_left_behind(tmp_path):
    write_csv(str(tmp_path / "out.csv"), [_row("a")])
    assert os.listdir(tmp_path) == ["out.csv"]


def test_write_failure_raises_and_leaves_no_file(tmp_path, monkeypatch):
    path = tmp_path / "out.csv"

    def broken_replace(src, dst):
        raise PermissionError("read-only filesystem")

    monkeypatch.setattr(csv_export.os, "replace", broken_replace)

    with pytest.raises(CsvWriteError, match="out.csv") as exc_info:
        write_csv(str(path), [_row("a")])

    assert isinstance(exc_info.value, OSError)
    assert os.listdir(tmp_path) == []


def test_directory_in_the_way_raises(tmp_path):
    blocker = tmp_path / "blocker"
    blocker.write_text("not a directory")
    with pytest.raises(CsvWriteError):
        write_csv(str(blocker / "out.csv"), [])


def test_default_output_path():
    now = datetime(2023, 7, 7, 1, 23, 45)
    assert default_output_path("csv", now) == os.path.join(
        "csv", "2023-07-07 01-23-45.csv"
    )
