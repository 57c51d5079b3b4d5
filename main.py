import argparse
import logging
import sys
import time
from pathlib import Path

from dhcp_tracker.collectors.win_dhcp_collector import WinDhcpSource
from dhcp_tracker.config import DEFAULT_CONFIG_PATH, load_config
from dhcp_tracker.exceptions import ConfigError, DataSourceUnavailable
from dhcp_tracker.liveness.resolver import build_resolver
from dhcp_tracker.pipeline import run_once

logger = logging.getLogger("dhcp_tracker")


def setup_logging(verbose: bool = False):
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stdout,
    )


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        description="Опрос резерваций DHCP и журнал их активности (запускать по расписанию)."
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="отладочный вывод")
    parser.add_argument("-c", "--config", type=Path, default=DEFAULT_CONFIG_PATH, help="путь к tracker.yaml")
    return parser.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)
    setup_logging(args.verbose)
    start_time = time.time()

    try:
        config = load_config(args.config)
    except ConfigError as e:
        logger.error("%s", e)
        return 2

    logger.info("=== Опрос DHCP %s (режим %s) ===", config.dhcp_server, config.mode)

    resolver = build_resolver(config)

    try:
        source = WinDhcpSource.from_config(config)
        summary = run_once(source, resolver, config)
    except DataSourceUnavailable as e:
        logger.error("[DHCP] Сервер недоступен, прогон прерван: %s", e)
        return 1

    logger.info(
        "Резерваций: %d, online: %d, удалено файлов истории: %d",
        len(summary.records), summary.online_count, len(summary.deleted),
    )
    if summary.report.failures:
        logger.warning("Прогон завершён с ошибками записи: %d", len(summary.report.failures))

    logger.info("Прогон завершён за %.2f секунд", time.time() - start_time)
    return 0


if __name__ == "__main__":
    sys.exit(main())
