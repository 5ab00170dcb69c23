"""
Credentials sign-in for the dashboard login form.

The provider verifies an email/password pair and either returns the user or
raises AuthError carrying a discriminant. AuthenticationService classifies the
attempt into an AuthOutcome and turns it into what the login form shows.
"""
import logging
from dataclasses import dataclass
from typing import Any, Mapping, Optional

from django.conf import settings
from django.contrib.auth import authenticate as django_authenticate, login
from django.db import DatabaseError
from django.http import HttpRequest
from django.utils.http import url_has_allowed_host_and_scheme

from .navigation import Navigator
from .validation.schemas import PASSWORD_MIN_LENGTH, is_valid_email

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS_MESSAGE = "Invalid credentials."
GENERIC_FAILURE_MESSAGE = "Something went wrong."


class AuthErrorType:
    CREDENTIALS_SIGNIN = "CredentialsSignin"
    CALLBACK_ROUTE_ERROR = "CallbackRouteError"


class AuthError(Exception):
    def __init__(self, type: str, message: str = ""):
        self.type = type
        super().__init__(message or type)


class DjangoCredentialsProvider:
    """Checks credentials against the ``users`` table and opens a session."""

    def sign_in(self, request: HttpRequest, form_data: Mapping[str, Any]):
        email = form_data.get("email") or ""
        password = form_data.get("password") or ""

        if not is_valid_email(email) or len(password) < PASSWORD_MIN_LENGTH:
            raise AuthError(AuthErrorType.CREDENTIALS_SIGNIN)

        try:
            user = django_authenticate(request, username=email, password=password)
        except DatabaseError as e:
            logger.error(f"Failed to fetch user: {e}")
            raise AuthError(AuthErrorType.CALLBACK_ROUTE_ERROR, "Failed to fetch user.") from e

        if user is None:
            raise AuthError(AuthErrorType.CREDENTIALS_SIGNIN)

        login(request, user)
        return user


@dataclass(frozen=True)
class AuthOutcome:
    SUCCESS = "success"
    RECOVERABLE = "recoverable"
    FATAL = "fatal"

    kind: str
    reason: Optional[str] = None
    error: Optional[BaseException] = None

    @property
    def message(self) -> Optional[str]:
        if self.kind != self.RECOVERABLE:
            return None
        if self.reason == AuthErrorType.CREDENTIALS_SIGNIN:
            return INVALID_CREDENTIALS_MESSAGE
        return GENERIC_FAILURE_MESSAGE


class AuthenticationService:
    def __init__(self, provider=None, navigator: Optional[Navigator] = None):
        self.provider = provider or DjangoCredentialsProvider()
        self.navigator = navigator or Navigator()

    def attempt(self, request: HttpRequest, form_data: Mapping[str, Any]) -> AuthOutcome:
        try:
            self.provider.sign_in(request, form_data)
        except AuthError as e:
            logger.info(f"Sign-in rejected: {e.type}")
            return AuthOutcome(kind=AuthOutcome.RECOVERABLE, reason=e.type)
        except Exception as e:
            return AuthOutcome(kind=AuthOutcome.FATAL, error=e)
        return AuthOutcome(kind=AuthOutcome.SUCCESS)

    def authenticate(self, previous_state: Optional[str], form_data: Mapping[str, Any], request: HttpRequest) -> Optional[str]:
        outcome = self.attempt(request, form_data)
        if outcome.kind == AuthOutcome.FATAL:
            raise outcome.error
        if outcome.kind == AuthOutcome.RECOVERABLE:
            return outcome.message
        self.navigator.redirect(self._redirect_target(request, form_data))

    @staticmethod
    def _redirect_target(request: HttpRequest, form_data: Mapping[str, Any]) -> str:
        target = form_data.get("redirectTo") or ""
        if target and url_has_allowed_host_and_scheme(
            target,
            allowed_hosts={request.get_host()},
            require_https=request.is_secure(),
        ):
            return target
        return getattr(settings, "LOGIN_REDIRECT_URL", "/dashboard/invoices")
