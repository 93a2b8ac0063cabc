"""
Patient workflow views.

Listing pages are open to USER and ADMIN authorities; the form, save,
edit and delete endpoints require ADMIN.  Access is enforced by
``records.middleware.AuthorityGateMiddleware`` before these run.
Write operations redirect back to the list page the user came from by
round-tripping ``page``, ``size`` and ``keyword``.
"""
from __future__ import annotations

from urllib.parse import urlencode

from django.conf import settings
from django.shortcuts import redirect, render
from django.views.decorators.http import require_GET, require_POST
from rest_framework.decorators import api_view, permission_classes
from rest_framework.response import Response

from records.exceptions import NotFoundError, ValidationError
from records.models import Patient
from records.permissions import HasRouteAuthority
from records.serializers.patient import PatientSerializer
from records.services import patients as store
from records.services.audit import log_action


def _int_param(params, name, default):
    try:
        return int(params.get(name, default))
    except (TypeError, ValueError):
        return default


def _param(request, name, default=''):
    # Spring-style request params: form body first, then query string
    return request.POST.get(name) or request.GET.get(name) or default


def _patient_id(request):
    raw = _param(request, 'id')
    try:
        return int(raw) if raw else None
    except ValueError:
        raise NotFoundError(f'Patient {raw} not found.')


def _page_size(params) -> int:
    size = _int_param(params, 'size', settings.PATIENT_PAGE_SIZE)
    return size if size > 0 else settings.PATIENT_PAGE_SIZE


def _index_url(page, size, keyword) -> str:
    return f"/index?{urlencode({'page': page, 'size': size, 'keyword': keyword})}"


def _form_values(patient: Patient) -> dict:
    return {
        'id': patient.pk,
        'name': patient.name,
        'birth_date': patient.birth_date.isoformat() if patient.birth_date else '',
        'is_sick': patient.is_sick,
        'score': patient.score,
    }


@require_GET
def home(request):
    return redirect('/index')


@require_GET
def index(request):
    page = max(_int_param(request.GET, 'page', 0), 0)
    size = _page_size(request.GET)
    keyword = request.GET.get('keyword', '')
    patient_page = store.find_page(keyword, page, size)
    return render(request, 'records/patients.html', {
        'patient_list': patient_page,
        'pages': patient_page.page_numbers,
        'current_page': page,
        'size': size,
        'keyword': keyword,
    })


@api_view(['GET'])
@permission_classes([HasRouteAuthority])
def list_patients(request):
    """Raw list of every patient."""
    return Response(PatientSerializer(store.list_patients(), many=True).data)


@require_GET
def delete(request):
    page = _int_param(request.GET, 'page', 0)
    size = _page_size(request.GET)
    keyword = request.GET.get('keyword', '')
    # unknown or malformed ids are a no-op
    patient_id = _int_param(request.GET, 'id', None)
    if patient_id is not None and store.delete_patient(patient_id):
        log_action(user=request.user, action='patient_delete', object_type='patient', object_id=patient_id)
    return redirect(_index_url(page, size, keyword))


@require_GET
def form_patients(request):
    return render(request, 'records/formPatients.html', {
        'patient': _form_values(Patient()),
        'errors': {},
        'page': _int_param(request.GET, 'page', 0),
        'size': _page_size(request.GET),
        'keyword': request.GET.get('keyword', ''),
    })


@require_POST
def save(request):
    page = _int_param(request.POST, 'page', _int_param(request.GET, 'page', 0))
    size = _page_size(request.POST if 'size' in request.POST else request.GET)
    keyword = _param(request, 'keyword')
    patient_id = _patient_id(request)
    try:
        patient = store.save_patient(request.POST, patient_id=patient_id)
    except ValidationError as exc:
        template = 'records/editPatient.html' if patient_id else 'records/formPatients.html'
        submitted = {
            'id': patient_id,
            'name': request.POST.get('name', ''),
            'birth_date': request.POST.get('birth_date', ''),
            'is_sick': request.POST.get('is_sick') in ('on', 'true', '1'),
            'score': request.POST.get('score', ''),
        }
        return render(request, template, {
            'patient': submitted,
            'errors': exc.detail,
            'page': page,
            'size': size,
            'keyword': keyword,
        })
    log_action(user=request.user, action='patient_update' if patient_id else 'patient_create',
               object_type='patient', object_id=patient.pk)
    return redirect(_index_url(page, size, keyword))


@require_GET
def edit_patient(request):
    patient_id = _patient_id(request)
    if patient_id is None:
        raise NotFoundError('Patient not found.')
    patient = store.get_patient(patient_id)
    return render(request, 'records/editPatient.html', {
        'patient': _form_values(patient),
        'errors': {},
        'page': _int_param(request.GET, 'page', 0),
        'size': _page_size(request.GET),
        'keyword': request.GET.get('keyword', ''),
    })
