from django.contrib.auth.hashers import BCryptSHA256PasswordHasher, get_hashers
from django.core import checks

BCRYPT_ALGORITHM = "bcrypt_sha256"
BCRYPT_WORK_FACTOR = 10


class BCryptTenRoundsPasswordHasher(BCryptSHA256PasswordHasher):
    """
    Salted bcrypt with a work factor of 10.

    The password is SHA-256 digested before bcrypt sees it, so passwords of
    any length hash and verify instead of tripping bcrypt's 72-byte limit.
    """

    rounds = BCRYPT_WORK_FACTOR


def check_password_hasher(app_configs=None, **kwargs):
    """New passwords must be hashed with bcrypt at the expected work factor."""
    preferred = get_hashers()[0]
    if preferred.algorithm != BCRYPT_ALGORITHM or getattr(preferred, "rounds", None) != BCRYPT_WORK_FACTOR:
        return [
            checks.Error(
                f"The first PASSWORD_HASHERS entry must be {BCRYPT_ALGORITHM} with {BCRYPT_WORK_FACTOR} rounds.",
                hint="Put dashboard.hashers.BCryptTenRoundsPasswordHasher first.",
                id="dashboard.E001",
            )
        ]
    return []
