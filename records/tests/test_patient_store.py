import math

import pytest

from records.exceptions import NotFoundError, ValidationError
from records.models import Patient
from records.services import patients as store

pytestmark = pytest.mark.django_db


def test_keyword_search_scenario(make_patient):
    for name in ('Youness', 'Said', 'Hafsa'):
        make_patient(name)
    page = store.find_page('ha', 0, 4)
    assert [p.name for p in page] == ['Hafsa']
    assert page.total_pages == 1
    assert page.total_elements == 1


def test_keyword_matches_substrings_only(make_patient):
    names = ['Youness', 'Said', 'Hafsa', 'Amina', 'Samir']
    for name in names:
        make_patient(name)
    for kw in ('', 'a', 'sa', 'mi', 'ness', 'zzz'):
        found = {p.name for p in store.find_page(kw, 0, 50)}
        assert found == {n for n in names if kw.lower() in n.lower()}


def test_pages_are_bounded_and_counted(make_patient):
    for i in range(10):
        make_patient(f'patient-{i}')
    seen = []
    for index in range(3):
        page = store.find_page('', index, 4)
        assert len(page) <= 4
        assert page.total_pages == math.ceil(10 / 4) == 3
        seen.extend(p.pk for p in page)
    assert len(seen) == len(set(seen)) == 10
    assert len(store.find_page('', 2, 4)) == 2


def test_out_of_range_page_is_empty(make_patient):
    make_patient('Hafsa')
    page = store.find_page('', 7, 4)
    assert page.items == []
    assert page.total_elements == 1
    assert page.total_pages == 1


def test_empty_store_has_no_pages():
    page = store.find_page('', 0, 4)
    assert page.total_pages == 0
    assert list(page.page_numbers) == []


def test_page_size_must_be_positive():
    with pytest.raises(ValidationError):
        store.find_page('', 0, 0)


def test_save_rejects_score_out_of_range():
    with pytest.raises(ValidationError) as exc:
        store.save_patient({'name': 'Hafsa', 'birth_date': '1995-11-23', 'score': -1})
    assert 'score' in exc.value.detail
    assert Patient.objects.count() == 0


def test_save_rejects_blank_name_and_bad_date():
    with pytest.raises(ValidationError) as exc:
        store.save_patient({'name': '   ', 'birth_date': '23/11/1995', 'score': 5})
    assert set(exc.value.detail) == {'name', 'birth_date'}
    assert Patient.objects.count() == 0


def test_names_are_stored_as_typed():
    p = store.save_patient({'name': '  Tom & Jerry <Jr>  ', 'birth_date': '1995-11-23', 'score': 5})
    p.refresh_from_db()
    assert p.name == 'Tom & Jerry <Jr>'
    assert [x.pk for x in store.find_page('& J', 0, 4)] == [p.pk]
    assert [x.pk for x in store.find_page('<jr>', 0, 4)] == [p.pk]


def test_name_length_is_checked_on_the_stored_value():
    p = store.save_patient({'name': '&' * 100, 'birth_date': '1995-11-23', 'score': 5})
    p.refresh_from_db()
    assert p.name == '&' * 100
    with pytest.raises(ValidationError) as exc:
        store.save_patient({'name': 'x' * 101, 'birth_date': '1995-11-23', 'score': 5})
    assert 'name' in exc.value.detail


def test_save_accepts_range_bounds(settings):
    settings.PATIENT_SCORE_MAX = 100
    p = store.save_patient({'name': 'Said', 'birth_date': '2001-07-02', 'score': 100})
    assert p.pk is not None
    with pytest.raises(ValidationError):
        store.save_patient({'name': 'Said', 'birth_date': '2001-07-02', 'score': 101})


def test_save_with_id_replaces_the_row(make_patient):
    p = make_patient('Youness', score=10, is_sick=True)
    updated = store.save_patient({'name': 'Youness B', 'birth_date': '1998-03-14', 'score': 42}, patient_id=p.pk)
    assert updated.pk == p.pk
    p.refresh_from_db()
    assert (p.name, p.score, p.is_sick) == ('Youness B', 42, False)
    assert Patient.objects.count() == 1


def test_save_with_unknown_id_is_not_found():
    with pytest.raises(NotFoundError):
        store.save_patient({'name': 'Ghost', 'birth_date': '2000-01-01', 'score': 1}, patient_id=999)


def test_delete_then_get_is_not_found_and_delete_is_idempotent(make_patient):
    p = make_patient('Said')
    assert store.delete_patient(p.pk) is True
    with pytest.raises(NotFoundError):
        store.get_patient(p.pk)
    assert store.delete_patient(p.pk) is False


def test_ids_are_not_reused(make_patient):
    first = make_patient('Amina')
    store.delete_patient(first.pk)
    second = store.save_patient({'name': 'Amina', 'birth_date': '1990-01-01', 'score': 3})
    assert second.pk > first.pk
