"""
Service context for log lines.

Identifies which service instance emitted a log line:
``SERVICE_NAME@DEPLOY_ENV:instance``.
"""

import os
from functools import lru_cache
import socket


@lru_cache(maxsize=1)
def get_service_context() -> str:
    service_name = os.getenv('SERVICE_NAME', 'train-booking')
    deploy_env = os.getenv('DEPLOY_ENV', 'local_dev')

    # Containers get a short hostname; locally the PID is more useful
    if os.getenv('HOSTNAME') and deploy_env != 'local_dev':
        instance = socket.gethostname()[:12]
    else:
        instance = str(os.getpid())

    return f'{service_name}@{deploy_env}:{instance}'
