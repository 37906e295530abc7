"""Конфигурация из окружения (.env поддерживается через python-dotenv).

Параметры подключения к Identity Server и Data Tools API читаются в момент
вызова load_job_config(): так команду можно пересоздать без перезапуска
процесса. Остальные настройки фиксируются при импорте.
"""
import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

BASE_DIR = Path(__file__).resolve().parent.parent
LOG_DIR = BASE_DIR / "logs"

CLIENT_ID = "SitecorePassword"
TOKEN_PATH = "/connect/token"
TASK_PATH = "/sitecore/api/datatools/purge/tasks/contacts"
CUTOFF_PARAM_NAME = "CutoffDays"


def _int_env(name: str, default: int) -> int:
    raw = (os.getenv(name) or "").strip()
    return int(raw) if raw else default


def _float_env(name: str, default: float) -> float:
    raw = (os.getenv(name) or "").strip()
    return float(raw) if raw else default


def _bool_env(name: str, default: bool = False) -> bool:
    raw = (os.getenv(name) or "").strip().lower()
    if not raw:
        return default
    return raw in ("1", "true", "yes", "on")


# Срок хранения по умолчанию, если у команды нет параметра CutoffDays.
# Data Tools по умолчанию не принимает меньше 180 дней (переопределяется на стороне Cortex Processing).
DEFAULT_CUTOFF_DAYS = _int_env("PURGE_DEFAULT_CUTOFF_DAYS", 180)

# Параметры командного элемента в виде строки name-value: "CutoffDays=365&Foo=bar"
PURGE_PARAMETERS = (os.getenv("PURGE_PARAMETERS") or "").strip()

# Расписание
PURGE_INTERVAL_HOURS = _float_env("PURGE_INTERVAL_HOURS", 24.0)
PURGE_RUN_ON_START = _bool_env("PURGE_RUN_ON_START")

# Общий HTTP-клиент
HTTP_TIMEOUT_SECONDS = _float_env("HTTP_TIMEOUT_SECONDS", 30.0)


class ConfigurationError(ValueError):
    """Обязательная настройка не задана, пустая или вне допустимого диапазона."""


@dataclass(frozen=True)
class JobConfiguration:
    token_url: str
    task_url: str
    username: str
    password: str
    client_secret: str
    client_id: str = CLIENT_ID

    def __post_init__(self):
        for field_name in ("token_url", "task_url", "username", "password", "client_id", "client_secret"):
            value = getattr(self, field_name)
            if not (value and value.strip()):
                raise ConfigurationError(f"Configuration value for {field_name} must be provided.")


def _require(name: str) -> str:
    value = (os.getenv(name) or "").strip()
    if not value:
        raise ConfigurationError(f"Configuration value for {name} must be provided.")
    return value


def load_job_config() -> JobConfiguration:
    """
    Собирает JobConfiguration из окружения. Бросает ConfigurationError до любого сетевого вызова.
    PURGE_HOST_PREFIX необязателен: без него задачи регистрируются на SERVER_URL.
    """
    authority = _require("IDENTITY_SERVER_AUTHORITY")
    host = (os.getenv("PURGE_HOST_PREFIX") or "").strip() or (os.getenv("SERVER_URL") or "").strip()
    if not host:
        raise ConfigurationError("Configuration value for PURGE_HOST_PREFIX or SERVER_URL must be provided.")
    return JobConfiguration(
        token_url=authority.rstrip("/") + TOKEN_PATH,
        task_url=host.rstrip("/") + TASK_PATH,
        username=_require("PURGE_USERNAME"),
        password=_require("PURGE_PASSWORD"),
        client_secret=_require("PURGE_CLIENT_SECRET"),
    )
