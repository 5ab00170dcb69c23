from __future__ import annotations

from django.contrib.auth.base_user import AbstractBaseUser, BaseUserManager
from django.db import models


class UserManager(BaseUserManager):
    def create_user(self, email: str, password: str | None = None, name: str = "", **extra_fields) -> "User":
        if not email:
            raise ValueError("Users must have an email address")
        user = self.model(email=self.normalize_email(email), name=name, **extra_fields)
        user.set_password(password)
        user.save(using=self._db)
        return user

    def create_superuser(self, email: str, password: str | None = None, name: str = "", **extra_fields) -> "User":
        # Dashboard accounts carry no staff or permission flags; every account has full access.
        return self.create_user(email, password, name, **extra_fields)


class User(AbstractBaseUser):
    """Dashboard account; rows are written by the registration action."""

    name = models.CharField(max_length=255)
    email = models.EmailField(unique=True)

    objects = UserManager()

    USERNAME_FIELD = "email"
    EMAIL_FIELD = "email"
    REQUIRED_FIELDS = ["name"]

    class Meta:
        db_table = "users"

    def __str__(self) -> str:
        return f"{self.name} <{self.email}>"


class Invoice(models.Model):
    class Status(models.TextChoices):
        PENDING = "pending", "Pending"
        PAID = "paid", "Paid"

    customer_id = models.CharField(max_length=255, db_index=True)
    # minor currency units (cents)
    amount = models.IntegerField()
    status = models.CharField(max_length=16, choices=Status.choices, default=Status.PENDING)
    date = models.DateField()

    class Meta:
        db_table = "invoices"
        ordering = ["-date", "-id"]

    def __str__(self) -> str:
        return f"Invoice {self.pk} - {self.customer_id} ({self.status})"

    @property
    def amount_display(self) -> str:
        return f"${self.amount / 100:,.2f}"
