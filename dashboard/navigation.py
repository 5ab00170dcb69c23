"""Navigation port: a redirect that never returns control to the caller."""

from __future__ import annotations

import logging

logger = logging.getLogger(__name__)


class Redirect(Exception):
    """Raised to leave the current action and send the client to ``to``."""

    def __init__(self, to: str):
        self.to = to
        super().__init__(to)


class Navigator:
    def redirect(self, path: str) -> None:
        logger.debug("Redirecting to %s", path)
        raise Redirect(path)
