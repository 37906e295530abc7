"""Получение токена Identity Server (OAuth2 password grant) для сервисной учётной записи Data Tools API.

Пользователь должен состоять в роли "Sitecore XConnect Data Admin".
"""
import logging
from typing import Optional

import httpx

from xconnect_purge.config import JobConfiguration
from xconnect_purge.models import TokenResponse

logger = logging.getLogger(__name__)


def request_token(client: httpx.Client, config: JobConfiguration) -> Optional[str]:
    """
    Обменивает логин/пароль сервисной учётной записи на bearer-токен.
    При неуспешном HTTP-статусе пишет тело ответа в лог и возвращает None.
    Ответ без access_token -> pydantic.ValidationError.
    """
    body = {
        "grant_type": "password",
        "username": config.username,
        "password": config.password,
        "client_id": config.client_id,
        "client_secret": config.client_secret,
    }
    resp = client.post(config.token_url, data=body, headers={"cache-control": "no-cache"})
    if not resp.is_success:
        logger.error("[identity] Contact purge command failed with error: %s", resp.text)
        return None

    token = TokenResponse.model_validate(resp.json())
    logger.info("[identity] Contact purge command successfully obtained API token for user %s.", config.username)
    return token.access_token
