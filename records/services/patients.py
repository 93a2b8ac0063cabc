"""
Patient record store.

Name search is a case-insensitive substring match (``icontains``); an
empty keyword matches every patient.  Pages are 0-based and ordered by
id so that consecutive pages never overlap.
"""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import Any, Mapping, Optional

from django.db import transaction

from records.exceptions import NotFoundError, ValidationError
from records.models import Patient
from records.serializers.patient import PatientSerializer

logger = logging.getLogger(__name__)


@dataclass
class PatientPage:
    items: list[Patient]
    number: int
    size: int
    total_elements: int
    total_pages: int = field(init=False)

    def __post_init__(self):
        self.total_pages = math.ceil(self.total_elements / self.size)

    def __iter__(self):
        return iter(self.items)

    def __len__(self) -> int:
        return len(self.items)

    @property
    def page_numbers(self) -> range:
        return range(self.total_pages)


def find_page(keyword: str, page_index: int, page_size: int) -> PatientPage:
    if page_size <= 0:
        raise ValidationError({'size': ['Page size must be greater than zero.']})
    if page_index < 0:
        raise ValidationError({'page': ['Page index must not be negative.']})
    qs = Patient.objects.filter(name__icontains=keyword or '').order_by('id')
    total = qs.count()
    start = page_index * page_size
    # slicing past the end yields an empty page
    items = list(qs[start:start + page_size]) if start < total else []
    return PatientPage(items=items, number=page_index, size=page_size, total_elements=total)


def list_patients() -> list[Patient]:
    return list(Patient.objects.order_by('id'))


def get_patient(patient_id) -> Patient:
    patient = Patient.objects.filter(pk=patient_id).first()
    if patient is None:
        raise NotFoundError(f'Patient {patient_id} not found.')
    return patient


def save_patient(data: Mapping[str, Any], patient_id: Optional[int] = None) -> Patient:
    """Insert a patient, or fully replace the one identified by ``patient_id``.

    Nothing is written when validation fails.
    """
    with transaction.atomic():
        instance = None
        if patient_id is not None:
            instance = Patient.objects.select_for_update().filter(pk=patient_id).first()
            if instance is None:
                raise NotFoundError(f'Patient {patient_id} not found.')
        s = PatientSerializer(instance, data=data)
        if not s.is_valid():
            raise ValidationError(s.errors)
        patient = s.save()
    logger.info('patient %s %s', patient.pk, 'updated' if instance else 'created')
    return patient


def delete_patient(patient_id) -> bool:
    """Delete a patient.  Deleting an absent id is a no-op returning False."""
    deleted, _ = Patient.objects.filter(pk=patient_id).delete()
    if deleted:
        logger.info('patient %s deleted', patient_id)
    return bool(deleted)
