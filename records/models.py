"""
Database models for the patient records application.

Patients are standalone rows searched by name.  Accounts use a custom
user model whose authorities come from a many-to-many relation to
:class:`AppRole`; the relation is always loaded together with the user.
"""
from __future__ import annotations

from django.contrib.auth.models import AbstractUser, UserManager
from django.db import models


class Patient(models.Model):
    """A hospital patient record.

    ``score`` is bounded by ``PATIENT_SCORE_MIN``/``PATIENT_SCORE_MAX``;
    the bounds are enforced on input (see ``records.serializers.patient``)
    so they can change without a migration.
    """
    # AutoField ids are never reused after a delete
    id = models.BigAutoField(primary_key=True)
    name = models.CharField(max_length=100, db_index=True)
    birth_date = models.DateField(null=True, blank=True)
    is_sick = models.BooleanField(default=False)
    score = models.IntegerField(default=0)

    class Meta:
        ordering = ['id']

    def __str__(self) -> str:
        return f"{self.name} ({self.id})"


class AppRole(models.Model):
    """A named role; its name is the authority token granted at login."""
    role_name = models.CharField(max_length=50, unique=True)

    def __str__(self) -> str:
        return self.role_name


class AppUserManager(UserManager):
    """Always hands out users with their roles loaded."""

    def get_queryset(self):
        return super().get_queryset().prefetch_related('roles')


class AppUser(AbstractUser):
    """Login account.  ``password`` holds a salted one-way hash only."""
    roles = models.ManyToManyField(AppRole, blank=True, related_name='users')

    objects = AppUserManager()

    @property
    def authorities(self) -> frozenset[str]:
        return frozenset(role.role_name for role in self.roles.all())

    def __str__(self) -> str:
        return self.username


class AuditEvent(models.Model):
    user = models.ForeignKey(AppUser, on_delete=models.SET_NULL, null=True, blank=True)
    action = models.CharField(max_length=64)
    object_type = models.CharField(max_length=64, blank=True, null=True)
    object_id = models.BigIntegerField(blank=True, null=True)
    detail = models.JSONField(default=dict, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        indexes = [
            models.Index(fields=['action', 'created_at'], name='records_aud_action_3f0c1e_idx'),
            models.Index(fields=['object_type', 'object_id', 'created_at'], name='records_aud_object__8b2d4a_idx'),
        ]

    def __str__(self) -> str:
        return f"{self.action} {self.object_type}:{self.object_id}"
