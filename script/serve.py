#!/usr/bin/env python3
"""
API Server Launcher
Start the train booking API under granian

Usage:
    python -m script.serve                 # host/port/workers from settings
    python -m script.serve --workers 4     # override any of them
    python -m script.serve --dry-run       # print the command only

Equivalent to:
    granian src.main:app --interface asgi --host 0.0.0.0 --port 8100 --workers 1
"""

import argparse
import os
import shlex
import shutil
from typing import List, Optional

from src.platform.config.core_setting import settings


APP_TARGET = 'src.main:app'


def build_granian_command(
    *, host: Optional[str] = None, port: Optional[int] = None, workers: Optional[int] = None
) -> List[str]:
    return [
        'granian',
        APP_TARGET,
        '--interface',
        'asgi',
        '--host',
        host or settings.SERVER_HOST,
        '--port',
        str(port or settings.SERVER_PORT),
        '--workers',
        str(workers or settings.SERVER_WORKERS),
    ]


def main() -> None:
    parser = argparse.ArgumentParser(description='Start the train booking API under granian')
    parser.add_argument('--host', help=f'Bind address (default: {settings.SERVER_HOST})')
    parser.add_argument('--port', type=int, help=f'Port (default: {settings.SERVER_PORT})')
    parser.add_argument('--workers', type=int, help=f'Workers (default: {settings.SERVER_WORKERS})')
    parser.add_argument('--dry-run', action='store_true', help='Print the command and exit')
    args = parser.parse_args()

    command = build_granian_command(host=args.host, port=args.port, workers=args.workers)
    print(f'🚀 {shlex.join(command)}')
    if args.dry_run:
        return

    executable = shutil.which(command[0])
    if executable is None:
        raise SystemExit('❌ granian not found, install the project with `pip install -e .`')
    # Replace this process so granian receives signals directly
    os.execv(executable, command)


if __name__ == '__main__':
    main()
