"""
WSGI entry point for gunicorn (``acmeflow.wsgi:application``).

The environment is validated before Django loads so a bad deployment exits
with one clear log line rather than a traceback per worker.
"""

import logging
import os
import sys

from django.core.exceptions import ImproperlyConfigured

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "acmeflow.settings")

logger = logging.getLogger("acmeflow.startup")

from acmeflow.env_validation import validate_env  # noqa: E402

try:
    validate_env()
except ImproperlyConfigured as e:
    logging.basicConfig(level=logging.INFO, format="[%(asctime)s] %(levelname)s - %(message)s")
    logger.critical(f"Refusing to start: {e}")
    sys.exit(1)

from django.core.wsgi import get_wsgi_application  # noqa: E402

application = get_wsgi_application()
