import logging
from typing import Any, Mapping, Optional

from django.conf import settings
from django.contrib.auth.hashers import check_password, make_password

from ..navigation import Navigator
from ..repositories import UserRepository
from ..state import MutationState
from ..validation import PersistenceError, validate_user

logger = logging.getLogger(__name__)

PASSWORD_HASHER = "bcrypt_sha256"

MISSING_FIELDS_MESSAGE = "Missing Fields. Failed to create new user."
PASSWORDS_DO_NOT_MATCH_MESSAGE = "Passwords do not match!"
# Same wording as the invoice create failure; the sign-up page expects it.
CREATE_FAILED_MESSAGE = "Database Error: Failed to create invoice."


class RegistrationService:
    def __init__(
        self,
        repository: Optional[UserRepository] = None,
        navigator: Optional[Navigator] = None,
        hasher: str = PASSWORD_HASHER,
    ):
        self.repository = repository or UserRepository()
        self.navigator = navigator or Navigator()
        self.hasher = hasher

    def register(self, previous_state: Optional[MutationState], form_data: Mapping[str, Any]) -> MutationState:
        result = validate_user(form_data)
        if not result.valid:
            logger.warning("Registration rejected: %s", result.field_errors)
            return MutationState(errors=result.field_errors, message=MISSING_FIELDS_MESSAGE)

        user = result.data
        hashed_password = make_password(user.password, hasher=self.hasher)

        # The repeated password is verified against the hash of the first one.
        if not check_password(user.repeated_password, hashed_password):
            return MutationState(message=PASSWORDS_DO_NOT_MATCH_MESSAGE)

        try:
            self.repository.insert(user.username, user.email, hashed_password)
        except PersistenceError:
            logger.error("Failed to create user %s", user.email, exc_info=True)
            return MutationState(message=CREATE_FAILED_MESSAGE)

        logger.info("Registered user %s", user.email)
        self.navigator.redirect(getattr(settings, "REGISTER_REDIRECT_URL", "/login"))
