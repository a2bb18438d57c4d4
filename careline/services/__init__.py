"""
Core services for the application.

This package contains the main service implementations: the offline symptom
engine, the simulated doctor chat, the appointment book and the doctor and lab
directory.
"""

from .appointments import AppointmentBook
from .conversation import ChatService, Result, ThreadClosedError
from .directory import LAB_TIME_SLOTS, doctor_profiles, lab_tests, specialty_catalog
from .symptom_engine import SymptomEngine

__all__ = [
    "AppointmentBook",
    "ChatService",
    "Result",
    "ThreadClosedError",
    "SymptomEngine",
    "LAB_TIME_SLOTS",
    "doctor_profiles",
    "lab_tests",
    "specialty_catalog",
]
