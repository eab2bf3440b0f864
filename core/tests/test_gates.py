import pytest

from core.exceptions import AuthorizationDenied, ValidationFailed
from core.identity import ANONYMOUS, Identity, RouteParams
from core.models import Appointment
from core.permissions import ADMIN_ONLY, AllowAuthenticated, NoteableTargetExists, Predicate, RoleIn
from core.requests import base
from core.requests.notes import StoreNoteRequest
from core.requests.prescriptions import StorePrescriptionRequest
from core.store import store


def allows(gate, identity, route=None, payload=None):
    return gate.allows(identity, RouteParams(route or {}), payload or {}, store)


def test_allow_authenticated():
    assert allows(AllowAuthenticated(), Identity(id=1, role='receptionist'))
    assert not allows(AllowAuthenticated(), ANONYMOUS)


def test_role_membership():
    assert allows(ADMIN_ONLY, Identity(id=1, role='admin'))
    assert not allows(ADMIN_ONLY, Identity(id=1, role='specialist'))
    assert allows(RoleIn('admin', 'receptionist'), Identity(id=2, role='receptionist'))
    # a role without an identity is not enough
    assert not allows(ADMIN_ONLY, Identity(role='admin'))


def test_gates_compose_with_and():
    gate = AllowAuthenticated() & Predicate(lambda identity, route, payload, store: payload.get('go'))
    me = Identity(id=1, role='admin')
    assert allows(gate, me, payload={'go': True})
    assert not allows(gate, me, payload={'go': False})
    assert not allows(gate, ANONYMOUS, payload={'go': True})


@pytest.mark.django_db
def test_noteable_target_must_be_known_and_exist(lens, appointment):
    gate = NoteableTargetExists()
    me = Identity(id=1, role='admin')
    assert allows(gate, me, {'type': 'lenses', 'id': lens.pk})
    assert allows(gate, me, {'type': 'products', 'id': lens.pk})
    assert allows(gate, me, {'type': 'appointments', 'id': appointment.pk})
    assert not allows(gate, me, {'type': 'appointments', 'id': appointment.pk + 1000})
    assert not allows(gate, me, {'type': 'patients', 'id': 1})
    assert not allows(gate, me, {'type': 'lenses', 'id': 'abc'})


@pytest.mark.django_db
def test_denied_request_never_reaches_rule_evaluation(monkeypatch):
    def boom(*args, **kwargs):
        raise AssertionError('rules evaluated')

    monkeypatch.setattr(base, 'validate', boom)
    with pytest.raises(AuthorizationDenied):
        StoreNoteRequest.evaluate({}, identity=Identity(id=1, role='admin'), route=RouteParams(type='nope', id=1))
    with pytest.raises(AuthorizationDenied):
        StorePrescriptionRequest.evaluate({}, identity=Identity(id=1, role='receptionist'))


@pytest.mark.django_db
def test_prescription_gate_requires_the_attending_specialist(appointment, specialist, other_specialist):
    payload = {'appointment_id': appointment.pk}
    me = Identity.from_user(specialist)
    gate = StorePrescriptionRequest.gate
    # not taken yet
    assert not allows(gate, me, payload=payload)
    appointment.status = Appointment.STATUS_IN_PROGRESS
    appointment.taken_by = specialist
    appointment.save()
    assert allows(gate, me, payload=payload)
    assert not allows(gate, Identity.from_user(other_specialist), payload=payload)
    assert not allows(gate, me, payload={'appointment_id': appointment.pk + 1000})
    appointment.status = Appointment.STATUS_CANCELLED
    appointment.save()
    assert not allows(gate, me, payload=payload)


@pytest.mark.django_db
def test_allowed_request_reports_all_violations(lens):
    with pytest.raises(ValidationFailed) as info:
        StoreNoteRequest.evaluate(
            {'content': ''}, identity=Identity(id=1, role='admin'), route=RouteParams(type='lenses', id=lens.pk),
        )
    assert info.value.errors == {'content': ['The content field is required.']}
