import ipaddress
import logging
from pathlib import Path
from typing import Iterable, List, Optional

logger = logging.getLogger(__name__)

HISTORY_SUFFIX = "-Results.csv"


def history_filename(address: str) -> str:
    return f"{address}{HISTORY_SUFFIX}"


def address_from_filename(filename: str) -> Optional[str]:
    """
    "10.0.0.5-Results.csv" -> "10.0.0.5". Для чужих/битых имён — None.
    """
    if not filename.endswith(HISTORY_SUFFIX):
        return None
    key = filename[: -len(HISTORY_SUFFIX)]
    try:
        return str(ipaddress.ip_address(key))
    except ValueError:
        return None


def reconcile_history(results_dir: Path, addresses: Iterable[str], ledger_name: str) -> List[Path]:
    """
    Удаляет файлы истории адресов, которых больше нет среди резерваций.
    Общий журнал (ledger) не трогается никогда. Возвращает удалённые пути.
    """
    results_dir = Path(results_dir)
    if not results_dir.is_dir():
        logger.debug("[HISTORY] Каталог %s ещё не создан — нечего сверять", results_dir)
        return []

    live = set(addresses)
    deleted = []

    for path in sorted(results_dir.iterdir()):
        if not path.is_file() or path.name == ledger_name:
            continue

        address = address_from_filename(path.name)
        if address is None:
            logger.debug("[HISTORY] Пропуск файла с нераспознанным именем: %s", path.name)
            continue

        if address in live:
            continue

        try:
            path.unlink()
        except OSError as e:
            logger.warning("[HISTORY] Не удалось удалить %s: %s", path, e)
            continue

        logger.info("[HISTORY] Резервация %s удалена — удалён файл %s", address, path.name)
        deleted.append(path)

    return deleted
