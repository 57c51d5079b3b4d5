import csv
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Tuple

from dhcp_tracker.models.reservation import CSV_COLUMNS, ReservationRecord
from dhcp_tracker.storage.history import history_filename

logger = logging.getLogger(__name__)


@dataclass
class WriteReport:
    history_rows: int = 0
    ledger_rows: int = 0
    failures: List[str] = field(default_factory=list)


def append_row(path: Path, row: List[str]):
    """
    Дописывает строку в CSV. Заголовок пишется только в новый (или пустой) файл.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    write_header = not path.exists() or path.stat().st_size == 0

    with open(path, "a", encoding="utf-8", newline="") as f:
        writer = csv.writer(f)
        if write_header:
            writer.writerow(CSV_COLUMNS)
        writer.writerow(row)


def read_last_online(path: Path) -> Tuple[Optional[str], Optional[str]]:
    """
    Последние непустые LastOnlineDate/LastOnlineTime из файла истории адреса.
    """
    if not path.exists():
        return None, None

    last = (None, None)
    with open(path, "r", encoding="utf-8", newline="") as f:
        for row in csv.DictReader(f):
            if row.get("LastOnlineDate"):
                last = (row["LastOnlineDate"], row.get("LastOnlineTime") or None)
    return last


def write_records(records: List[ReservationRecord], results_dir: Path, ledger_name: str,
                  carry_forward: bool = False) -> WriteReport:
    """
    Для каждой записи: строка в <ip>-Results.csv и строка в общий журнал.
    Ошибка записи одного файла не мешает остальным — только warning в отчёт.
    """
    results_dir = Path(results_dir)
    ledger_path = results_dir / ledger_name
    report = WriteReport()

    for record in records:
        history_path = results_dir / history_filename(record.address)

        if record.online:
            record.last_online_date = record.date
            record.last_online_time = record.time
        elif carry_forward:
            try:
                record.last_online_date, record.last_online_time = read_last_online(history_path)
            except (OSError, csv.Error, UnicodeDecodeError) as e:
                logger.warning("[CSV] Не удалось прочитать историю %s: %s", history_path.name, e)

        row = record.to_row()

        try:
            append_row(history_path, row)
            report.history_rows += 1
        except OSError as e:
            logger.warning("[CSV] Ошибка записи %s: %s", history_path, e)
            report.failures.append(str(history_path))

        try:
            append_row(ledger_path, row)
            report.ledger_rows += 1
        except OSError as e:
            logger.warning("[CSV] Ошибка записи в журнал %s: %s", ledger_path, e)
            report.failures.append(str(ledger_path))

    logger.info(
        "[CSV] Записано строк: история %d, журнал %d, ошибок %d",
        report.history_rows, report.ledger_rows, len(report.failures),
    )
    return report
