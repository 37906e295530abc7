"""Периодический запуск команды очистки: один фоновый поток на процесс."""
import logging
import threading
from datetime import datetime
from typing import Optional

from xconnect_purge.models import CommandItem, ScheduleItem

logger = logging.getLogger(__name__)
_scheduler_thread: Optional[threading.Thread] = None
_scheduler_lock = threading.Lock()


def run_scheduled(command, command_item: CommandItem, schedule: ScheduleItem) -> bool:
    """Один тик расписания. Исключения не выходят наружу."""
    logger.info("[scheduler] Запуск %s (%s)", schedule.name, command_item.name)
    try:
        ok = command.execute([], command_item, schedule)
    except Exception as e:
        logger.exception("[scheduler] Ошибка запуска %s: %s", schedule.name, e)
        ok = False
    schedule.last_run = datetime.utcnow()
    logger.info("[scheduler] %s завершён: %s", schedule.name, "ok" if ok else "failed")
    return ok


def _loop(command, command_item: CommandItem, schedule: ScheduleItem, stop_event: threading.Event):
    while not stop_event.wait(schedule.interval_seconds):
        run_scheduled(command, command_item, schedule)
    logger.info("[scheduler] %s остановлен", schedule.name)


def start_scheduler(
    command,
    command_item: CommandItem,
    schedule: ScheduleItem,
    stop_event: Optional[threading.Event] = None,
) -> threading.Thread:
    """Стартует фоновый поток (один на процесс); повторный вызов возвращает уже запущенный поток."""
    global _scheduler_thread
    with _scheduler_lock:
        if _scheduler_thread is not None and _scheduler_thread.is_alive():
            return _scheduler_thread
        t = threading.Thread(
            target=_loop,
            args=(command, command_item, schedule, stop_event or threading.Event()),
            daemon=True,
            name="purge-scheduler",
        )
        t.start()
        _scheduler_thread = t
    logger.info("[scheduler] %s: интервал %s с", schedule.name, schedule.interval_seconds)
    return t
