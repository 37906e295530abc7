"""Точка входа сервиса: логирование, команда очистки и расписание."""
import logging
import threading

from xconnect_purge.config import (
    ConfigurationError,
    LOG_DIR,
    PURGE_INTERVAL_HOURS,
    PURGE_PARAMETERS,
    PURGE_RUN_ON_START,
)

# Логи в терминал и в один файл logs/purge.log
LOG_FILE = LOG_DIR / "purge.log"
log_fmt = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def setup_logging(level=logging.INFO):
    logging.basicConfig(level=level, format=log_fmt)
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    try:
        LOG_DIR.mkdir(parents=True, exist_ok=True)
        fh = logging.FileHandler(LOG_FILE, encoding="utf-8")
    except OSError as e:
        logging.getLogger(__name__).warning("Лог-файл %s недоступен: %s", LOG_FILE, e)
        return
    fh.setFormatter(logging.Formatter(log_fmt))
    fh.setLevel(logging.DEBUG)
    logging.getLogger().addHandler(fh)


def create_command(http_client=None):
    from xconnect_purge.services.purge_command import PurgeContactsCommand
    return PurgeContactsCommand(http_client=http_client)


def create_command_item():
    from xconnect_purge.models import CommandItem
    return CommandItem.from_name_values(PURGE_PARAMETERS)


def create_schedule():
    from xconnect_purge.models import ScheduleItem
    if PURGE_INTERVAL_HOURS <= 0:
        raise ConfigurationError("PURGE_INTERVAL_HOURS must be greater than zero.")
    return ScheduleItem(interval_seconds=PURGE_INTERVAL_HOURS * 60 * 60)


def main(stop_event=None):
    setup_logging()
    from xconnect_purge.http_client import close_http_client
    from xconnect_purge.scheduler import run_scheduled, start_scheduler

    command = create_command()
    command_item = create_command_item()
    schedule = create_schedule()
    stop_event = stop_event or threading.Event()

    if PURGE_RUN_ON_START:
        run_scheduled(command, command_item, schedule)

    t = start_scheduler(command, command_item, schedule, stop_event)
    try:
        while t.is_alive():
            t.join(timeout=1.0)
    except KeyboardInterrupt:
        stop_event.set()
    finally:
        close_http_client()


if __name__ == "__main__":
    main()
