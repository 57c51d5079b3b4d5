class TrackerError(Exception):
    """Базовая ошибка трекера резерваций."""


class ConfigError(TrackerError):
    pass


class DataSourceUnavailable(TrackerError):
    """DHCP-сервер недоступен — прогон прерывается целиком."""


class AddressStateLookupError(TrackerError):
    """Не удалось получить AddressState для одного адреса (не фатально)."""
