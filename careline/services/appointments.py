"""
In-memory appointment book.

Booking opens (or reuses) a chat thread with the doctor and greets the user.
Deleting the last appointment with a doctor closes that doctor's thread,
which cancels any reply still being "typed". Lab tests are booked as
appointments with a lab technician at one of the fixed time slots.
"""

from datetime import UTC, date, datetime, tzinfo
from uuid import UUID

import structlog

from careline.domain.models import Appointment, AppointmentStatus, Doctor, LabTest, Specialty
from careline.services.conversation import ChatService
from careline.services.directory import LAB_TIME_SLOTS

logger = structlog.get_logger(__name__)

LAB_TECHNICIAN = "Lab Technician"
LAB_LOCATION = "Local Diagnostic Center"
LAB_CITY = "Napoli"
LAB_COUNTRY = "Italia"


class AppointmentBook:
    def __init__(self, chat: ChatService) -> None:
        self.chat = chat
        self._appointments: list[Appointment] = []
        self.logger = logger.bind(component="appointment_book")

    @property
    def appointments(self) -> list[Appointment]:
        return list(self._appointments)

    @property
    def has_upcoming(self) -> bool:
        return any(appt.status is AppointmentStatus.UPCOMING for appt in self._appointments)

    def upcoming(self) -> list[Appointment]:
        return sorted(
            (appt for appt in self._appointments if appt.status is AppointmentStatus.UPCOMING),
            key=lambda appt: appt.date,
        )

    def add(self, appointment: Appointment) -> None:
        self._appointments.append(appointment)
        self.chat.ensure_thread(appointment.doctor)
        if self.chat.config.send_welcome_message:
            self.chat.append_welcome(appointment.doctor)

        self.logger.info(
            "appointment_added",
            doctor=appointment.doctor.name,
            specialty=appointment.doctor.specialty.value,
            date=appointment.date.isoformat(),
        )

    def book_lab_test(
        self, test: LabTest, day: date, slot: str, tz: tzinfo = UTC
    ) -> Appointment:
        """
        Book a lab test on a day at one of the fixed time slots.

        The visit is an upcoming primary-care appointment with a lab
        technician at the diagnostic center, added like any other booking.

        Raises:
            ValueError: If slot is not one of LAB_TIME_SLOTS.
        """
        if slot not in LAB_TIME_SLOTS:
            raise ValueError(f"Unknown lab time slot: {slot!r}")

        slot_time = datetime.strptime(slot, "%I:%M %p").time()
        appointment = Appointment(
            doctor=Doctor(
                name=LAB_TECHNICIAN, specialty=Specialty.PRIMARY_CARE, image_name=test.image_name
            ),
            date=datetime.combine(day, slot_time, tzinfo=tz),
            location_address=LAB_LOCATION,
            city=LAB_CITY,
            country=LAB_COUNTRY,
            image=test.image_name,
        )
        self.add(appointment)

        self.logger.info("lab_test_booked", test=test.name, slot=slot)
        return appointment

    def delete(self, appointment_id: UUID) -> bool:
        """Remove an appointment; unknown ids are a no-op returning False."""
        appointment = next((a for a in self._appointments if a.id == appointment_id), None)
        if appointment is None:
            return False

        self._appointments = [a for a in self._appointments if a.id != appointment_id]

        doctor_id = appointment.doctor.id
        still_booked = any(a.doctor.id == doctor_id for a in self._appointments)
        if not still_booked:
            self.chat.close_thread(doctor_id)

        self.logger.info(
            "appointment_deleted",
            doctor=appointment.doctor.name,
            thread_closed=not still_booked,
        )
        return True
