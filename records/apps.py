"""
Application configuration for ``records``.

Baseline accounts are seeded from the ``post_migrate`` signal so that a
freshly migrated database is ready before the server accepts traffic.
"""
from django.apps import AppConfig
from django.db import DEFAULT_DB_ALIAS, connections
from django.db.models.signals import post_migrate


def _seed_after_migrate(sender, using=DEFAULT_DB_ALIAS, **kwargs):
    if using != DEFAULT_DB_ALIAS:
        return
    from .models import AppRole
    from .services.accounts import seed_accounts

    # migrate can run with the records tables still unapplied
    if AppRole._meta.db_table not in connections[using].introspection.table_names():
        return
    seed_accounts()


class RecordsConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'records'
    verbose_name = 'Patient records'

    def ready(self):
        post_migrate.connect(_seed_after_migrate, sender=self, dispatch_uid='records.seed_accounts')
