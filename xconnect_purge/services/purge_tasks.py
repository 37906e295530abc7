"""Регистрация задачи очистки контактов в xConnect Data Tools API.

Саму очистку выполняет роль Cortex Processing: удаляются контакты (и их взаимодействия),
не посещавшие сайт дольше CutoffDays дней.
"""
import logging
from typing import Optional

import httpx

from xconnect_purge.config import CUTOFF_PARAM_NAME
from xconnect_purge.models import PurgeTaskResponse

logger = logging.getLogger(__name__)


def register_purge_task(client: httpx.Client, task_url: str, token: str, cutoff_days: int) -> Optional[str]:
    """Возвращает TaskId зарегистрированной задачи или None, если API ответил ошибкой (тело ответа уходит в лог)."""
    resp = client.post(
        task_url,
        data={CUTOFF_PARAM_NAME: str(cutoff_days)},
        headers={"Authorization": f"Bearer {token}"},
    )
    if not resp.is_success:
        logger.error("[purge] Contact purge task registration failed with error: %s", resp.text)
        return None

    task = PurgeTaskResponse.model_validate(resp.json())
    logger.info(
        "[purge] Contact purge task %s registered with xConnect. Removing data older than %s days.",
        task.TaskId,
        cutoff_days,
    )
    return task.TaskId
