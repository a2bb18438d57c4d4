"""
Tests for the appointment book and its coupling to chat threads.
"""

import asyncio
from datetime import UTC, date, datetime, timedelta, timezone
from uuid import uuid4

import pytest

from careline.config import ChatConfig
from careline.domain.models import Appointment, AppointmentStatus, Doctor, Sender, Specialty
from careline.services.appointments import AppointmentBook
from careline.services.conversation import ChatService
from careline.services.directory import LAB_TIME_SLOTS, lab_tests


def make_appointment(doctor: Doctor, days_ahead: int = 1, **kwargs) -> Appointment:
    return Appointment(
        doctor=doctor,
        date=datetime.now(UTC) + timedelta(days=days_ahead),
        location_address="Via Roma 12",
        city="Napoli",
        country="Italia",
        **kwargs,
    )


@pytest.fixture
def doctor() -> Doctor:
    return Doctor(name="Dr. Ardalan Hemant", specialty=Specialty.CARDIOLOGY, image_name="cardio1")


@pytest.fixture
def chat() -> ChatService:
    return ChatService(config=ChatConfig(reply_delay_min_seconds=30.0, reply_delay_max_seconds=30.0))


@pytest.fixture
def book(chat: ChatService) -> AppointmentBook:
    return AppointmentBook(chat)


class TestAdd:
    def test_add_opens_thread_with_welcome(
        self, book: AppointmentBook, chat: ChatService, doctor: Doctor
    ) -> None:
        book.add(make_appointment(doctor))

        thread = chat.get_thread(doctor.id)
        assert thread is not None
        assert len(thread.messages) == 1
        assert thread.messages[0].sender is Sender.DOCTOR
        assert book.has_upcoming

    def test_second_booking_does_not_repeat_welcome(
        self, book: AppointmentBook, chat: ChatService, doctor: Doctor
    ) -> None:
        book.add(make_appointment(doctor))
        book.add(make_appointment(doctor, days_ahead=7))

        assert len(chat.threads) == 1
        assert len(chat.get_thread(doctor.id).messages) == 1

    def test_welcome_can_be_disabled(self, doctor: Doctor) -> None:
        chat = ChatService(config=ChatConfig(send_welcome_message=False))
        book = AppointmentBook(chat)

        book.add(make_appointment(doctor))

        assert chat.get_thread(doctor.id).messages == []

    def test_upcoming_sorted_and_filtered(self, book: AppointmentBook, doctor: Doctor) -> None:
        later = make_appointment(doctor, days_ahead=10)
        sooner = make_appointment(doctor, days_ahead=2)
        done = make_appointment(doctor, days_ahead=1, status=AppointmentStatus.COMPLETED)
        for appt in (later, sooner, done):
            book.add(appt)

        assert [a.id for a in book.upcoming()] == [sooner.id, later.id]


class TestDelete:
    def test_unknown_id_is_noop(self, book: AppointmentBook, doctor: Doctor) -> None:
        book.add(make_appointment(doctor))

        assert book.delete(uuid4()) is False
        assert len(book.appointments) == 1

    def test_last_appointment_closes_thread(
        self, book: AppointmentBook, chat: ChatService, doctor: Doctor
    ) -> None:
        appt = make_appointment(doctor)
        book.add(appt)

        assert book.delete(appt.id) is True
        assert book.appointments == []
        assert not book.has_upcoming
        assert chat.get_thread(doctor.id) is None

    def test_thread_kept_while_other_appointment_remains(
        self, book: AppointmentBook, chat: ChatService, doctor: Doctor
    ) -> None:
        first = make_appointment(doctor)
        second = make_appointment(doctor, days_ahead=3)
        book.add(first)
        book.add(second)

        book.delete(first.id)

        assert chat.get_thread(doctor.id) is not None
        assert [a.id for a in book.appointments] == [second.id]

    @pytest.mark.asyncio
    async def test_cancelling_appointment_cancels_pending_reply(
        self, book: AppointmentBook, chat: ChatService, doctor: Doctor
    ) -> None:
        appt = make_appointment(doctor)
        book.add(appt)
        task = chat.send_message("chest pain", doctor)

        book.delete(appt.id)
        await asyncio.gather(task, return_exceptions=True)

        assert task.cancelled()
        assert chat.threads == []


class TestLabBooking:
    def test_books_lab_technician_visit_at_slot(
        self, book: AppointmentBook, chat: ChatService
    ) -> None:
        test = lab_tests()[2]

        appt = book.book_lab_test(test, date(2030, 3, 14), "03:30 PM")

        assert appt.date == datetime(2030, 3, 14, 15, 30, tzinfo=UTC)
        assert appt.doctor.name == "Lab Technician"
        assert appt.doctor.specialty is Specialty.PRIMARY_CARE
        assert appt.doctor.image_name == test.image_name
        assert (appt.location_address, appt.city, appt.country) == (
            "Local Diagnostic Center",
            "Napoli",
            "Italia",
        )
        assert appt.status is AppointmentStatus.UPCOMING
        assert book.appointments == [appt]
        assert len(chat.get_thread(appt.doctor.id).messages) == 1

    @pytest.mark.parametrize(
        "slot,hour,minute",
        [("08:30 AM", 8, 30), ("12:00 PM", 12, 0), ("05:00 PM", 17, 0)],
    )
    def test_slot_combined_with_day(
        self, book: AppointmentBook, slot: str, hour: int, minute: int
    ) -> None:
        appt = book.book_lab_test(lab_tests()[0], date(2030, 1, 2), slot)

        assert (appt.date.hour, appt.date.minute) == (hour, minute)
        assert appt.date.date() == date(2030, 1, 2)

    def test_every_slot_is_bookable(self, book: AppointmentBook) -> None:
        for slot in LAB_TIME_SLOTS:
            book.book_lab_test(lab_tests()[0], date(2030, 1, 2), slot)

        assert len(book.upcoming()) == len(LAB_TIME_SLOTS)

    def test_time_zone_applied(self, book: AppointmentBook) -> None:
        rome = timezone(timedelta(hours=1))

        appt = book.book_lab_test(lab_tests()[0], date(2030, 1, 2), "09:00 AM", tz=rome)

        assert appt.date.utcoffset() == timedelta(hours=1)

    @pytest.mark.parametrize("slot", ["", "9:00", "07:00 AM", "09:00 am"])
    def test_unknown_slot_rejected(self, book: AppointmentBook, slot: str) -> None:
        with pytest.raises(ValueError, match="Unknown lab time slot"):
            book.book_lab_test(lab_tests()[0], date(2030, 1, 2), slot)

        assert book.appointments == []
