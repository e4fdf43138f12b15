# apptgrid/enrich.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, Optional, Protocol

from .model import Appointment, Doctor, Patient, PopulatedAppointment


class AppointmentLookup(Protocol):
    def populate(self, appointment: Appointment) -> Optional[PopulatedAppointment]:
        """Denormalized display data for `appointment`, or None to skip it."""
        ...


@dataclass
class Directory:
    """In-memory patient/doctor lookup.

    An appointment whose patient is unknown cannot be shown on a card, so
    populate() returns None for it.
    """

    doctors: Dict[str, Doctor] = field(default_factory=dict)
    patients: Dict[str, Patient] = field(default_factory=dict)

    @classmethod
    def from_records(cls, doctors: Iterable[Doctor], patients: Iterable[Patient]) -> "Directory":
        return cls(
            doctors={d.id: d for d in doctors},
            patients={p.id: p for p in patients},
        )

    def doctor(self, doctor_id: Optional[str]) -> Optional[Doctor]:
        if not doctor_id:
            return None
        return self.doctors.get(doctor_id)

    def populate(self, appointment: Appointment) -> Optional[PopulatedAppointment]:
        patient = self.patients.get(appointment.patient_id or "")
        if patient is None:
            return None
        return PopulatedAppointment(
            appointment=appointment,
            patient=patient,
            doctor=self.doctor(appointment.doctor_id),
        )


def unenriched(appointment: Appointment) -> PopulatedAppointment:
    return PopulatedAppointment(appointment=appointment)
