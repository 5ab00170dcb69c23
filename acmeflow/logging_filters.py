import logging

from .middleware import get_current_request_id, get_current_user_id


class RequestContextFilter(logging.Filter):
    """Stamps every record with the id of the request and user being served."""

    def filter(self, record):
        record.request_id = get_current_request_id()
        record.user_id = get_current_user_id()
        return True
