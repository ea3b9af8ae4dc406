"""
Gunicorn configuration for production deployment.

Run with: gunicorn app.main:app -c gunicorn.conf.py
"""
import os

# Server socket
bind = f"0.0.0.0:{os.getenv('PORT', '5000')}"
backlog = 2048

# Worker processes
workers = int(os.getenv("GUNICORN_WORKERS", 2))
worker_class = "uvicorn.workers.UvicornWorker"
worker_connections = 100

# Worker lifecycle
max_requests = 1000
max_requests_jitter = 100

# Timeouts (uploads go through the worker, so allow more than the default)
timeout = int(os.getenv("GUNICORN_TIMEOUT", 60))
keepalive = 5
graceful_timeout = 30

proc_name = "jobquest_api"
daemon = False

# Logging
accesslog = "-"
errorlog = "-"
loglevel = os.getenv("LOG_LEVEL", "info").lower()


def on_starting(server):
    server.log.info("Starting JobQuest API")


def when_ready(server):
    server.log.info("JobQuest API ready, spawning %s workers", workers)


def worker_abort(worker):
    worker.log.warning("Worker %s aborted (timeout?)", worker.pid)
