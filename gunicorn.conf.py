"""
Gunicorn configuration for production serving.

Usage: gunicorn -c gunicorn.conf.py hello_server.server:app
"""

from hello_server.config import (
    HOST,
    PORT,
    LOG_LEVEL,
    GUNICORN_WORKERS,
    GUNICORN_THREADS,
    GUNICORN_TIMEOUT,
    GUNICORN_WORKER_CLASS,
)

bind = f"{HOST}:{PORT}"
workers = GUNICORN_WORKERS
threads = GUNICORN_THREADS
timeout = GUNICORN_TIMEOUT
worker_class = GUNICORN_WORKER_CLASS

loglevel = LOG_LEVEL.lower()
accesslog = "-"
errorlog = "-"
