"""Sample doctor directory, specialty catalog and lab test catalog."""

from careline.domain.models import DoctorProfile, LabTest, Specialty

COMMON_LANGUAGES: tuple[str, ...] = ("English", "Italian")

# (name, rating, address, image)
_SAMPLE_DOCTORS: dict[Specialty, tuple[tuple[str, float, str, str], ...]] = {
    Specialty.CARDIOLOGY: (
        ("Dr. Ardalan Hemant", 4.8, "Via Roma 12, Napoli", "cardio1"),
        ("Dr. Giulia Moretti", 4.6, "Via Marina 80, Napoli", "cardio2"),
        ("Dr. Davide Conti", 4.9, "Piazza Garibaldi 5, Napoli", "cardio3"),
    ),
    Specialty.NEUROLOGY: (
        ("Dr. Elena Bianchi", 4.7, "Via Foria 100, Napoli", "neuro1"),
        ("Dr. Marco Esposito", 4.4, "Corso Umberto 55, Napoli", "neuro2"),
        ("Dr. Serena Lupo", 4.9, "Via Chiaia 20, Napoli", "neuro3"),
    ),
    Specialty.PRIMARY_CARE: (
        ("Dr. Luca Gallo", 4.5, "Via Dante 10, Napoli", "pc1"),
        ("Dr. Giulia Costa", 4.3, "Via Toledo 77, Napoli", "pc2"),
        ("Dr. Antonio Romano", 4.7, "Via Manzoni 8, Napoli", "pc3"),
    ),
    Specialty.DERMATOLOGY: (
        ("Dr. Sara Esfandiari", 4.9, "Via dei Mille 44, Napoli", "derm1"),
        ("Dr. Alessio Ricci", 4.4, "Via Partenope 18, Napoli", "derm2"),
        ("Dr. Martina Romano", 4.6, "Via Posillipo 33, Napoli", "derm3"),
    ),
    Specialty.PEDIATRICS: (
        ("Dr. Ava Naderi", 4.8, "Via Manzoni 70, Napoli", "ped1"),
        ("Dr. Matteo Gatti", 4.5, "Via Posillipo 30, Napoli", "ped2"),
        ("Dr. Chiara Mancini", 4.2, "Vomero 22, Napoli", "ped3"),
    ),
    Specialty.ORTHOPEDICS: (
        ("Dr. Paolo Conti", 4.6, "Via Caracciolo 20, Napoli", "ortho1"),
        ("Dr. Elena Giordano", 4.3, "Via Pessina 5, Napoli", "ortho2"),
        ("Dr. Lorenzo Gallo", 4.8, "Via Tasso 42, Napoli", "ortho3"),
    ),
    # Not staffed yet
    Specialty.PSYCHIATRY: (),
    Specialty.UROLOGY: (),
}


def doctor_profiles(specialty: Specialty) -> list[DoctorProfile]:
    """Fresh profiles for a specialty; ids are new on every call."""
    return [
        DoctorProfile(
            name=name,
            specialty=specialty,
            rating=rating,
            languages=COMMON_LANGUAGES,
            address=address,
            image_name=image,
        )
        for name, rating, address, image in _SAMPLE_DOCTORS[specialty]
    ]


def specialty_catalog() -> list[tuple[Specialty, str, str]]:
    """(specialty, display name, short description) in declaration order."""
    return [(s, s.display_name, s.short_description) for s in Specialty]


# (name, description, price)
_LAB_TESTS: tuple[tuple[str, str, str], ...] = (
    (
        "Complete Blood Count (CBC)",
        "Measures red and white blood cells, hemoglobin, and platelets.",
        "€25",
    ),
    ("COVID-19 PCR", "Detects genetic material of the virus.", "€60"),
    ("Lipid Profile", "Cholesterol and triglycerides panel.", "€35"),
    ("Thyroid Panel (TSH, T3, T4)", "Evaluates thyroid function.", "€40"),
    ("Urinalysis", "Checks urine composition and abnormalities.", "€20"),
)

LAB_IMAGE = "lab1"

LAB_TIME_SLOTS: tuple[str, ...] = (
    "08:30 AM", "09:00 AM", "09:30 AM",
    "10:00 AM", "11:00 AM", "12:00 PM",
    "02:00 PM", "03:30 PM", "05:00 PM",
)


def lab_tests() -> list[LabTest]:
    """Lab test catalog in display order; ids are new on every call."""
    return [
        LabTest(name=name, description=description, price=price, image_name=LAB_IMAGE)
        for name, description, price in _LAB_TESTS
    ]
