from django.contrib.auth.hashers import identify_hasher, make_password
from django.db import models


def is_password_hash(value) -> bool:
    """Return True when ``value`` is already an encoded password hash."""
    try:
        identify_hasher(value)
    except ValueError:
        return False
    return True


class Guest(models.Model):
    """
    Hotel customer identity.

    Keyed by email (stored lower-cased). The password is optional: guests
    created by staff or by an authenticated booking have no portal login.
    """

    first_name = models.CharField(max_length=150)
    last_name = models.CharField(max_length=150, blank=True, default="")
    email = models.EmailField(unique=True)
    phone = models.CharField(max_length=32, blank=True, default="")
    password = models.CharField(max_length=128, null=True, blank=True, default=None)
    reset_token = models.CharField(max_length=128, blank=True, default="")
    reset_token_expiry = models.DateTimeField(null=True, blank=True)
    address = models.CharField(max_length=255, blank=True, default="")
    preferences = models.TextField(blank=True, default="")
    notes = models.TextField(blank=True, default="")
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at"]

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    def save(self, *args, **kwargs):
        if self.email:
            self.email = self.email.strip().lower()
        if self.password and not is_password_hash(self.password):
            self.password = make_password(self.password)
        super().save(*args, **kwargs)

    def __str__(self):
        return f"{self.full_name} <{self.email}>"
