"""Команда расписания: токен Identity Server -> регистрация задачи очистки контактов в xConnect.

API Data Tools: https://doc.sitecore.com/xp/en/developers/102/sitecore-experience-platform/web-api-for-xconnect-data-tools.html
Все исходы (успех, ошибки API, исключения) видны только в логе: execute() никогда не бросает исключение в планировщик.
"""
import logging
import re
import threading
from typing import Mapping, Optional, Sequence

import httpx

from xconnect_purge.config import (
    CUTOFF_PARAM_NAME,
    DEFAULT_CUTOFF_DAYS,
    ConfigurationError,
    JobConfiguration,
    load_job_config,
)
from xconnect_purge.http_client import get_http_client
from xconnect_purge.models import CommandItem, ScheduleItem
from xconnect_purge.services.identity import request_token
from xconnect_purge.services.purge_tasks import register_purge_task

logger = logging.getLogger(__name__)

_INT_PATTERN = re.compile(r"^\s*([+-]?)0*([0-9]{1,10})\s*$")
_INT32_MIN, _INT32_MAX = -(2 ** 31), 2 ** 31 - 1


class ParameterError(ValueError):
    """Параметр CutoffDays не число или не больше нуля."""


def resolve_cutoff_days(parameters: Mapping[str, str], default: int = DEFAULT_CUTOFF_DAYS) -> int:
    """CutoffDays из параметров команды; без параметра — default. Нижняя граница 180 дней здесь не проверяется."""
    if CUTOFF_PARAM_NAME not in parameters:
        return default
    raw = parameters[CUTOFF_PARAM_NAME] or ""
    m = _INT_PATTERN.match(raw)
    cutoff_days = int(m.group(1) + m.group(2)) if m else None
    if cutoff_days is None or not _INT32_MIN <= cutoff_days <= _INT32_MAX:
        raise ParameterError(f"{CUTOFF_PARAM_NAME} is not a valid number.")
    if cutoff_days <= 0:
        raise ParameterError(f"{CUTOFF_PARAM_NAME} must be greater than zero.")
    return cutoff_days


class PurgeContactsCommand:
    """
    Регистрирует задачу 'purge contacts' через Data Tools API.
    Конфигурация проверяется в конструкторе (ConfigurationError до любого сетевого вызова).
    Повторный запуск, пока предыдущий ещё выполняется, пропускается.
    """

    def __init__(
        self,
        http_client: Optional[httpx.Client] = None,
        config: Optional[JobConfiguration] = None,
        default_cutoff_days: int = DEFAULT_CUTOFF_DAYS,
    ):
        if default_cutoff_days <= 0:
            raise ConfigurationError(f"Default {CUTOFF_PARAM_NAME} must be greater than zero, got {default_cutoff_days}.")
        self.config = config or load_job_config()
        self.http_client = http_client or get_http_client()
        self.default_cutoff_days = default_cutoff_days
        self._running = threading.Lock()

    def execute(self, items: Sequence = (), command: Optional[CommandItem] = None, schedule: Optional[ScheduleItem] = None) -> bool:
        """Один запуск. True — задача зарегистрирована; False — запуск прерван (причина в логе)."""
        if not self._running.acquire(blocking=False):
            logger.warning("[purge] Previous contact purge run is still in progress, skipping this one.")
            return False
        try:
            return self._run(command or CommandItem())
        except Exception as e:
            logger.exception("[purge] Unhandled exception detected in PurgeContactsCommand: %s", e)
            return False
        finally:
            self._running.release()

    def _run(self, command: CommandItem) -> bool:
        cutoff_days = resolve_cutoff_days(command.parameters, self.default_cutoff_days)

        token = request_token(self.http_client, self.config)
        if not token:
            return False

        # CutoffDays должен быть >= 180, если это не переопределено в конфигурации Cortex Processing
        task_id = register_purge_task(self.http_client, self.config.task_url, token, cutoff_days)
        return task_id is not None
