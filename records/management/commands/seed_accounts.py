from django.core.management.base import BaseCommand

from records.services.accounts import seed_accounts


class Command(BaseCommand):
    help = "Ensure the USER/ADMIN roles and the user1/admin accounts exist (idempotent)."

    def handle(self, *args, **opts):
        stats = seed_accounts()
        self.stdout.write(self.style.SUCCESS(
            f"Accounts seeded: {stats['roles']} new roles, {stats['users']} new users."
        ))
