"""
Gunicorn configuration for production deployment of the CWIE API.

Run with: gunicorn cwie.main:app -c gunicorn.conf.py
"""
import os

# Server socket
bind = f"{os.getenv('HOST', '0.0.0.0')}:{os.getenv('PORT', '3000')}"

# Worker processes (ASGI app served by uvicorn workers)
workers = int(os.getenv("GUNICORN_WORKERS", 2))
worker_class = "uvicorn.workers.UvicornWorker"

# Worker lifecycle
max_requests = 1000
max_requests_jitter = 100

# Timeouts
timeout = 30
keepalive = 5
graceful_timeout = 30

proc_name = "cwie_api"

# Logging
accesslog = "-"
errorlog = "-"
loglevel = os.getenv("LOG_LEVEL", "info").lower()


def when_ready(server):
    """Called just after the server is started."""
    server.log.info("CWIE API ready, spawning %s workers", workers)
