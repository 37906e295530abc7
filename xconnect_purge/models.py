"""Модели: ответы Identity Server / Data Tools API и контекст вызова команды."""
from datetime import datetime
from typing import Dict, Optional
from urllib.parse import parse_qsl

from pydantic import BaseModel, ConfigDict, Field


class TokenResponse(BaseModel):
    """Ответ /connect/token. Кроме access_token поля не нужны (expires_in, token_type и т.п. игнорируются)."""

    model_config = ConfigDict(extra="ignore")

    access_token: str = Field(..., min_length=1)


class PurgeTaskResponse(BaseModel):
    """Ответ регистрации задачи очистки контактов."""

    model_config = ConfigDict(extra="ignore")

    TaskId: str = Field(..., min_length=1)


class CommandItem(BaseModel):
    """Командный элемент расписания: имя и список параметров name-value."""

    name: str = "Purge Contacts"
    parameters: Dict[str, str] = Field(default_factory=dict)

    @classmethod
    def from_name_values(cls, raw: str, name: Optional[str] = None) -> "CommandItem":
        """Строка вида "CutoffDays=365&Foo=bar" (формат поля name-value list). При повторе ключа берётся первое значение."""
        parameters: Dict[str, str] = {}
        for key, value in parse_qsl(raw or "", keep_blank_values=True):
            parameters.setdefault(key, value)
        if name:
            return cls(name=name, parameters=parameters)
        return cls(parameters=parameters)


class ScheduleItem(BaseModel):
    model_config = ConfigDict(validate_assignment=True)

    name: str = "Purge Contacts Schedule"
    interval_seconds: float = Field(24 * 60 * 60, gt=0)
    last_run: Optional[datetime] = None
