"""
URL mappings for the patient records application.

Paths use the page names the templates link to (``/index``,
``/formPatients``, ``/editPatient`` ...) and carry no trailing slash.
"""
from django.urls import path

from .views import auth, patients

urlpatterns = [
    path('', patients.home, name='home'),
    path('index', patients.index, name='index'),
    path('patients', patients.list_patients, name='patients'),
    path('formPatients', patients.form_patients, name='form_patients'),
    path('save', patients.save, name='save'),
    path('editPatient', patients.edit_patient, name='edit_patient'),
    path('delete', patients.delete, name='delete'),
    path('login', auth.login_view, name='login'),
    path('logout', auth.logout_view, name='logout'),
]
