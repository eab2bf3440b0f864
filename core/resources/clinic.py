from __future__ import annotations

from core.models import Appointment, Note, Patient, Prescription, User
from core.resources.base import check_includes

APPOINTMENT_INCLUDES = ('patient', 'specialist', 'receptionist', 'taken_by', 'prescription')
PRESCRIPTION_INCLUDES = ('appointment',)
NOTE_INCLUDES = ('user',)


def user_resource(user: User) -> dict:
    return {
        'id': user.pk,
        'username': user.username,
        'name': user.get_full_name() or user.username,
        'email': user.email,
        'role': user.role,
    }


def patient_resource(patient: Patient, include=()) -> dict:
    check_includes(include, ())
    return {
        'id': patient.pk,
        'first_name': patient.first_name,
        'last_name': patient.last_name,
        'full_name': patient.full_name,
        'identification': patient.identification,
        'email': patient.email,
        'phone': patient.phone,
        'birth_date': patient.birth_date,
        'gender': patient.gender,
        'address': patient.address,
        'status': patient.status,
        'created_at': patient.created_at,
        'updated_at': patient.updated_at,
    }


def appointment_resource(appointment: Appointment, include=()) -> dict:
    include = check_includes(include, APPOINTMENT_INCLUDES)
    data = {
        'id': appointment.pk,
        'patient_id': appointment.patient_id,
        'specialist_id': appointment.specialist_id,
        'receptionist_id': appointment.receptionist_id,
        'scheduled_at': appointment.scheduled_at,
        'status': appointment.status,
        'notes': appointment.notes,
        'taken_by_id': appointment.taken_by_id,
        'taken_at': appointment.taken_at,
        'paused_at': appointment.paused_at,
        'resumed_at': appointment.resumed_at,
        'sale_id': appointment.sale_id,
        'is_billed': appointment.is_billed,
        'billed_at': appointment.billed_at,
        'created_at': appointment.created_at,
        'updated_at': appointment.updated_at,
    }
    if 'patient' in include:
        data['patient'] = patient_resource(appointment.patient)
    for relation in ('specialist', 'receptionist', 'taken_by'):
        if relation in include:
            user = getattr(appointment, relation)
            data[relation] = user_resource(user) if user is not None else None
    if 'prescription' in include:
        prescription = appointment.prescription
        data['prescription'] = prescription_resource(prescription) if prescription is not None else None
    return data


def prescription_resource(prescription: Prescription, include=()) -> dict:
    include = check_includes(include, PRESCRIPTION_INCLUDES)
    data = {
        field.attname: getattr(prescription, field.attname)
        for field in Prescription._meta.concrete_fields
    }
    if 'appointment' in include:
        appointment = Appointment.objects.filter(pk=prescription.appointment_id).first()
        data['appointment'] = appointment_resource(appointment) if appointment is not None else None
    return data


def note_resource(note: Note, include=()) -> dict:
    include = check_includes(include, NOTE_INCLUDES)
    data = {
        'id': note.pk,
        'content': note.content,
        'user_id': note.user_id,
        'created_at': note.created_at,
    }
    if 'user' in include:
        data['user'] = user_resource(note.user) if note.user is not None else None
    return data
