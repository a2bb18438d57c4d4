"""
Console walkthrough of the booking and doctor chat flow.

Books an appointment, sends a few sample complaints to the doctor persona,
prints each reply with its classification, books a lab test, then cancels
the first appointment while a reply is still pending to show the thread
being closed.

Run with: python -m careline.demo
"""

import asyncio
from datetime import UTC, datetime, timedelta

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from careline.config import configure_logging, get_config
from careline.domain.models import Appointment, Sender, Specialty
from careline.services.appointments import AppointmentBook
from careline.services.conversation import ChatService
from careline.services.directory import doctor_profiles, lab_tests, specialty_catalog
from careline.services.symptom_engine import SymptomEngine

console = Console()

SAMPLE_MESSAGES: list[tuple[Specialty, str]] = [
    (Specialty.PEDIATRICS, "My child has a fever for 2 days and a rash"),
    (Specialty.CARDIOLOGY, "I have severe chest pain since last night"),
    (Specialty.PRIMARY_CARE, "Hello, just checking in"),
]


def show_catalog() -> None:
    table = Table(title="Specialties")
    table.add_column("Specialty", style="cyan")
    table.add_column("Description", style="white")
    table.add_column("Doctors", style="green")

    for specialty, name, description in specialty_catalog():
        table.add_row(name, description, str(len(doctor_profiles(specialty))))

    console.print(table)


async def run_demo() -> None:
    config = get_config()
    configure_logging(config.logging)

    engine = SymptomEngine(config.engine)
    chat = ChatService(engine, config.chat)
    book = AppointmentBook(chat)

    console.print(Panel("careline - offline doctor chat", style="bold blue"))
    show_catalog()

    for specialty, text in SAMPLE_MESSAGES:
        profile = doctor_profiles(specialty)[0]
        doctor = profile.to_doctor()
        book.add(
            Appointment(
                doctor=doctor,
                date=datetime.now(UTC) + timedelta(days=1),
                location_address=profile.address,
                city="Napoli",
                country="Italia",
                image=profile.image_name,
            )
        )

        console.print(f"\n[bold]You -> {doctor.name}[/bold] ({specialty.display_name}): {text}")
        console.print("typing...", style="yellow")
        result = await chat.send_message(text, doctor)
        message = result.unwrap()

        classification = engine.classify(text, specialty)
        style = "red" if classification.escalated else "green"
        console.print(Panel(message.text, title=doctor.name, border_style=style))
        console.print(
            f"Matched: {', '.join(h.domain.name for h in classification.ranked) or 'none'}",
            style="dim",
        )

    # Book a lab test for tomorrow morning
    test = lab_tests()[0]
    lab_appt = book.book_lab_test(test, (datetime.now(UTC) + timedelta(days=1)).date(), "09:00 AM")
    console.print(
        f"\nBooked {test.name} ({test.price}) at {lab_appt.location_address}, "
        f"{lab_appt.date:%d %b %H:%M}",
        style="cyan",
    )

    # Cancel an appointment while its reply is still being typed
    first = book.appointments[0]
    task = chat.send_message("Also a bad cough", first.doctor)
    book.delete(first.id)
    await asyncio.gather(task, return_exceptions=True)
    console.print(
        f"\nCancelled appointment with {first.doctor.name}; pending reply cancelled: {task.cancelled()}",
        style="yellow",
    )

    summary = Table(title="Threads")
    summary.add_column("Doctor", style="cyan")
    summary.add_column("Messages", style="white")
    summary.add_column("Doctor replies", style="white")
    for thread in chat.threads:
        replies = sum(1 for m in thread.messages if m.sender is Sender.DOCTOR)
        summary.add_row(thread.doctor.name, str(len(thread.messages)), str(replies))
    console.print(summary)


if __name__ == "__main__":
    try:
        asyncio.run(run_demo())
    except KeyboardInterrupt:
        console.print("\nDemo stopped by user", style="yellow")
