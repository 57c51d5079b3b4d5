import logging
from typing import Any, Callable, Dict

logger = logging.getLogger(__name__)

parser_registry: Dict[str, Callable] = {}

def register_parser(source: str, command_slug: str, parser_func: Callable):
    parser_registry[f"{source}_{command_slug}"] = parser_func

def get_parser(source: str, command_slug: str) -> Callable | None:
    return parser_registry.get(f"{source}_{command_slug}")

def run_parser(source: str, command_slug: str, raw_text: str) -> Dict[str, Any]:
    """
    Находит парсер и разбирает вывод. Без парсера — пустой результат.
    """
    parser = get_parser(source, command_slug)
    if parser is None:
        logger.warning("Парсер %s/%s не найден", source, command_slug)
        return {}
    return parser(command_slug, raw_text)
