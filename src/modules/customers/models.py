"""Customer model.

Emails are stored lower-cased and are unique among non-deleted customers
(partial unique constraint), so a soft-deleted customer's address can be
registered again.  Tax ids are masked in ``__str__``.
"""

from __future__ import annotations

from django.db import models

from modules.core.models import SoftDeleteModel
from modules.customers.constants import DEFAULT_COUNTRY


class Customer(SoftDeleteModel):
    name = models.CharField(max_length=255)
    email = models.EmailField(max_length=254)
    phone = models.CharField(max_length=32, blank=True, default="")
    address = models.TextField(blank=True, default="")
    city = models.CharField(max_length=100, blank=True, default="")
    state = models.CharField(max_length=100, blank=True, default="")
    postal_code = models.CharField(max_length=20, blank=True, default="")
    country = models.CharField(max_length=100, blank=True, default=DEFAULT_COUNTRY)
    tax_id = models.CharField(max_length=32, blank=True, default="")
    company_name = models.CharField(max_length=255, blank=True, default="")
    is_active = models.BooleanField(default=True)

    class Meta:
        db_table = "customers"
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["email"], name="customers_email_idx"),
            models.Index(fields=["is_active"], name="customers_active_idx"),
        ]
        constraints = [
            models.UniqueConstraint(
                fields=["email"],
                condition=models.Q(is_deleted=False),
                name="customers_email_unique_alive",
            ),
        ]

    def save(self, *args, **kwargs) -> None:
        if self.email:
            self.email = self.email.strip().lower()
        super().save(*args, **kwargs)

    def __str__(self) -> str:
        if not self.tax_id:
            return f"{self.name} <{self.email}>"
        return f"{self.name} <{self.email}> (tax id ***{self.tax_id[-4:]})"
