"""Gunicorn configuration for running the timesheet generator.

Run with: gunicorn -c gunicorn.conf.py timesheet_generator.main:app
"""
import logging
import os

logger = logging.getLogger("gunicorn.error")

# Server Socket
bind = os.getenv("BIND", "0.0.0.0:8000")
backlog = 256

# Worker Processes
# Leave map and generated timesheet live in the worker's in-memory database,
# so every request must reach the same worker.
workers = 1
threads = int(os.getenv("THREADS", "1"))
worker_class = "uvicorn.workers.UvicornWorker"
timeout = 60
keepalive = 5

# Logging
accesslog = "-"  # Log to stdout
errorlog = "-"   # Log to stderr
loglevel = os.getenv("LOG_LEVEL", "info").lower()
access_log_format = '%(h)s %(t)s "%(r)s" %(s)s %(b)s %(D)s'

# Process Naming
proc_name = "timesheet-generator"

# Server Mechanics
daemon = False
pidfile = None
graceful_timeout = 30


def when_ready(server):
    """Called just after the server is started."""
    logger.info("Timesheet generator ready. Listening on: %s", bind)


def worker_abort(worker):
    """Called when a worker is killed."""
    logger.warning("Worker received SIGABRT signal (pid: %s); session state is lost", worker.pid)
