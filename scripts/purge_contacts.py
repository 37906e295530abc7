#!/usr/bin/env python3
"""Разовая регистрация задачи очистки контактов. Запуск из cron, например: 0 3 * * 0 cd /path/to/project && python scripts/purge_contacts.py --cutoff-days 365"""
import argparse
import os
import sys

# Корень проекта
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from xconnect_purge.app import create_command, create_command_item, setup_logging
from xconnect_purge.config import CUTOFF_PARAM_NAME
from xconnect_purge.http_client import close_http_client


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Register an xConnect contact purge task.")
    parser.add_argument("--cutoff-days", help="override CutoffDays from PURGE_PARAMETERS")
    args = parser.parse_args(argv)

    setup_logging()
    command_item = create_command_item()
    if args.cutoff_days is not None:
        command_item.parameters[CUTOFF_PARAM_NAME] = args.cutoff_days
    try:
        ok = create_command().execute([], command_item, None)
    finally:
        close_http_client()
    return 0 if ok else 1


if __name__ == "__main__":
    sys.exit(main())
