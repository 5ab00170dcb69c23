"""
Gunicorn settings for the dashboard (``gunicorn acmeflow.wsgi``).

Threaded workers: each form action runs to completion on one thread, and
workers share nothing but the database and the cache backend.
"""

import logging
import multiprocessing

import environ

env = environ.Env()
logger = logging.getLogger("gunicorn.error")

IS_PRODUCTION = env.bool("PRODUCTION", default=False)

bind = [f"0.0.0.0:{env.int('PORT', default=8000)}"]


def default_workers():
    cpus = multiprocessing.cpu_count()
    # Small hosts run out of memory long before they run out of CPU.
    return min(cpus + 1, 5) if IS_PRODUCTION else min(cpus * 2 + 1, 9)


workers = env.int("WEB_CONCURRENCY", default=default_workers())
worker_class = "gthread"
threads = env.int("GUNICORN_THREADS", default=4)

# bcrypt at work factor 10 costs tens of milliseconds per sign-in
timeout = env.int("GUNICORN_TIMEOUT", default=60)
graceful_timeout = 10
keepalive = 5
max_requests = env.int("GUNICORN_MAX_REQUESTS", default=1000)
max_requests_jitter = 100

# Form posts are small; reject oversized request lines and headers early
limit_request_line = 4094
limit_request_fields = 100
limit_request_field_size = 8190

preload_app = True
forwarded_allow_ips = env.str("FORWARDED_ALLOW_IPS", default="*")
if IS_PRODUCTION:
    secure_scheme_headers = {"X-FORWARDED-PROTO": "https"}

accesslog = "-"
errorlog = "-"
loglevel = "info" if IS_PRODUCTION else "debug"
access_log_format = (
    '%(h)s "%(r)s" %(s)s %(b)s %(M)sms request_id=%({x-request-id}o)s'
)
proc_name = "acmeflow"


def when_ready(server):
    logger.info(f"acmeflow ready on {server.address} with {workers} workers x {threads} threads")


def post_fork(server, worker):
    """Drop connections inherited from the preloaded master, then open a fresh one."""
    from django.db import DatabaseError, connections

    connections.close_all()
    try:
        connections["default"].ensure_connection()
    except DatabaseError as e:
        logger.warning(f"Worker {worker.pid}: database not reachable yet: {e}")


def on_exit(server):
    logger.info("acmeflow shutting down")
