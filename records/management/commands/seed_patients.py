"""
Management command to populate the database with demo patients.
"""
from datetime import date

from django.core.management.base import BaseCommand
from django.db import transaction

from records.models import Patient
from records.services.patients import save_patient

DEMO_PATIENTS = [
    {'name': 'Youness', 'birth_date': date(1998, 3, 14), 'is_sick': False, 'score': 123},
    {'name': 'Said', 'birth_date': date(2001, 7, 2), 'is_sick': False, 'score': 1283},
    {'name': 'Hafsa', 'birth_date': date(1995, 11, 23), 'is_sick': True, 'score': 1230},
]


class Command(BaseCommand):
    help = 'Insert demo patients that are not present yet'

    def handle(self, *args, **options):
        created = 0
        with transaction.atomic():
            for data in DEMO_PATIENTS:
                if Patient.objects.filter(name=data['name']).exists():
                    continue
                save_patient(data)
                created += 1
        self.stdout.write(self.style.SUCCESS(f'{created} demo patients created.'))
