from django.contrib.auth.base_user import AbstractBaseUser, BaseUserManager
from django.db import models


class StaffAccountManager(BaseUserManager):
    """Manager creating staff accounts keyed by email."""

    use_in_migrations = True

    def _create_user(self, email, password, **extra_fields):
        if not email:
            raise ValueError("The email must be set")
        email = self.normalize_email(email).lower()
        user = self.model(email=email, **extra_fields)
        user.set_password(password)
        user.save(using=self._db)
        return user

    def create_user(self, email, password=None, **extra_fields):
        extra_fields.setdefault("role", StaffAccount.Role.RECEPTIONIST)
        return self._create_user(email, password, **extra_fields)

    def create_superuser(self, email, password=None, **extra_fields):
        extra_fields["role"] = StaffAccount.Role.ADMIN
        return self._create_user(email, password, **extra_fields)


class StaffAccount(AbstractBaseUser):
    """
    Hotel staff member.
    Staff accounts authenticate with email and password and carry one
    of the operational roles used for authorization.
    """

    class Role(models.TextChoices):
        """Staff authorization tiers."""
        ADMIN = "admin"
        MANAGER = "manager"
        RECEPTIONIST = "receptionist"
        HOUSEKEEPING = "housekeeping"
        MAINTENANCE = "maintenance"

    email = models.EmailField(unique=True)
    name = models.CharField(max_length=255)
    phone = models.CharField(max_length=32, blank=True)
    role = models.CharField(
        choices=Role, max_length=20, default=Role.RECEPTIONIST
    )
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = StaffAccountManager()

    USERNAME_FIELD = "email"
    EMAIL_FIELD = "email"
    REQUIRED_FIELDS = ["name"]

    def save(self, *args, **kwargs):
        if self.email:
            self.email = self.email.lower()
        super().save(*args, **kwargs)

    def __str__(self):
        return f"{self.name} <{self.email}>"
