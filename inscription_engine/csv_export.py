import csv
import logging
import os
from datetime import datetime
from typing import Optional, Sequence

from .config import CSV_OUTPUT_DIR
from .exceptions import CsvWriteError
from .models import CSV_COLUMNS, CsvRow

log = logging.getLogger(__name__)


def default_output_path(
    output_dir: str = CSV_OUTPUT_DIR, now: Optional[datetime] = None
) -> str:
    """csv/2023-07-07 01-23-45.csv, stamped with local time."""
    now = now or datetime.now()
    return os.path.join(output_dir, f"{now.strftime('%Y-%m-%d %H-%M-%S')}.csv")


def write_csv(filename: str, rows: Sequence[CsvRow]) -> None:
    """
    Write the header and every row, in order. The file only appears once
    it is complete.
    """
    if not rows:
        log.info("[csv] No rows to write, writing header only.")

    directory = os.path.dirname(os.path.abspath(filename))
    tmp_path = None
    log.info("[csv] Writing %d rows to %s", len(rows), filename)
    try:
        os.makedirs(directory, exist_ok=True)
        tmp_path = filename + ".tmp"
        with open(tmp_path, "w", newline="", encoding="utf-8") as f:
            writer = csv.DictWriter(f, fieldnames=CSV_COLUMNS)
            writer.writeheader()
            for row in rows:
                writer.writerow(row.as_dict())
        os.replace(tmp_path, filename)
        tmp_path = None
    except OSError as ex:
        raise CsvWriteError(f"Failed to write {filename}: {ex}") from ex
    finally:
        if tmp_path is not None and os.path.exists(tmp_path):
            os.remove(tmp_path)

    log.info("[csv] CSV written: %s", filename)
