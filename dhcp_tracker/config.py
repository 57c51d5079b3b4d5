import logging
import os
from pathlib import Path
from typing import Literal, Optional

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field, ValidationError

from dhcp_tracker.exceptions import ConfigError

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path("config/tracker.yaml")


class TrackerConfig(BaseModel):
    dhcp_server: str
    winrm_port: int = 5985
    winrm_transport: str = "ntlm"
    winrm_username: Optional[str] = None
    winrm_password: Optional[str] = None

    # lease_state — по AddressState из DHCP, ping — активная проверка
    mode: Literal["lease_state", "ping"] = "lease_state"
    active_state: str = "ActiveReservation"
    probe_timeout: float = Field(1.0, gt=0)

    results_dir: Path = Path("data/results")
    ledger_name: str = "AllResults.csv"
    carry_forward_last_online: bool = False

    @property
    def ledger_path(self) -> Path:
        return self.results_dir / self.ledger_name


def load_config(path: Path = DEFAULT_CONFIG_PATH) -> TrackerConfig:
    """
    Читает YAML-конфиг (ключ tracker:) и учётку WinRM из окружения / .env.
    """
    load_dotenv()

    path = Path(path)
    if not path.exists():
        raise ConfigError(f"Конфиг не найден: {path}")

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Ошибка разбора {path}: {e}") from e

    if not data or not data.get("tracker"):
        raise ConfigError(f"{path} пустой или без секции tracker")

    settings = dict(data["tracker"])
    settings.setdefault("winrm_username", os.getenv("WINRM_USERNAME"))
    settings.setdefault("winrm_password", os.getenv("WINRM_PASSWORD"))

    try:
        config = TrackerConfig(**settings)
    except ValidationError as e:
        raise ConfigError(f"Некорректный конфиг {path}: {e}") from e

    # kerberos может взять билет из кэша, остальным транспортам нужна учётка
    if config.winrm_transport != "kerberos" and not (config.winrm_username and config.winrm_password):
        raise ConfigError("Не заданы WINRM_USERNAME / WINRM_PASSWORD (окружение или .env)")

    logger.debug("Загружен конфиг %s: сервер %s, режим %s", path, config.dhcp_server, config.mode)
    return config
