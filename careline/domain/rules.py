"""
Rule tables for the offline symptom engine.

Everything here is static data. Order matters: domains are ranked with a
stable sort, so DOMAINS order breaks score ties, and every other candidate
list resolves overlapping matches by position, never by length.
"""

from careline.domain.models import ClinicalDomain, Specialty

RESPIRATORY = ClinicalDomain(
    name="Respiratory",
    symptoms=(
        "cough", "coughing", "phlegm", "sputum", "wheeze", "wheezing",
        "shortness of breath", "breathless", "difficulty breathing", "runny nose",
        "congestion", "sore throat", "throat pain", "hoarse", "hoarseness",
    ),
    red_flags=(
        "shortness of breath", "difficulty breathing", "blue lips", "oxygen",
        "low oxygen", "severe chest pain", "high fever", "confusion",
    ),
    home_care=(
        "Rest, hydrate, and use warm fluids or honey for cough (if not contraindicated).",
        "Consider saline nasal rinses and steam inhalation for congestion.",
        "Use over-the-counter fever reducers if needed and tolerated.",
    ),
    monitor=(
        "Breathing difficulty, persistent high fever, chest pain, or worsening cough.",
        "Dehydration signs (reduced urination, dizziness).",
    ),
    likely=(
        "Viral upper respiratory infection (common cold or flu) is common.",
        "Allergies or irritation can contribute to cough and congestion.",
    ),
)

CARDIOLOGY = ClinicalDomain(
    name="Cardiology",
    symptoms=(
        "chest pain", "pressure", "tightness", "palpitations", "fast heartbeat",
        "shortness of breath", "swelling legs", "edema", "fainting", "syncope",
    ),
    red_flags=(
        "severe chest pain", "pain radiating to arm", "pain radiating to jaw",
        "shortness of breath", "fainting", "cold sweats", "confusion",
    ),
    home_care=(
        "Avoid exertion and heavy meals; rest in a comfortable position.",
        "Track blood pressure and pulse if possible.",
    ),
    monitor=(
        "Worsening chest discomfort, breathlessness, dizziness, or fainting.",
        "Swelling, rapid weight gain, or irregular pulse.",
    ),
    likely=(
        "Musculoskeletal strain, reflux, or anxiety can mimic cardiac pain.",
        "However, cardiac causes must be considered depending on risk factors.",
    ),
)

DERMATOLOGY = ClinicalDomain(
    name="Dermatology",
    symptoms=(
        "rash", "skin", "itch", "itchy", "hives", "red spots", "irritation", "eczema",
        "dermatitis", "acne", "pimples", "lesion", "scaly", "flaky",
    ),
    red_flags=(
        "rapidly spreading redness", "fever with rash", "severe pain",
        "blistering widespread", "mucosal involvement", "swelling of lips or tongue",
    ),
    home_care=(
        "Keep the area clean and dry; avoid harsh products and hot showers.",
        "Use a gentle moisturizer; consider fragrance-free emollients.",
    ),
    monitor=(
        "Rapid spread, fever, or signs of infection (increasing redness, warmth, pus).",
        "Severe itch or pain not improving with gentle care.",
    ),
)

GASTROINTESTINAL = ClinicalDomain(
    name="Gastrointestinal",
    symptoms=(
        "stomach", "abdomen", "abdominal", "nausea", "vomit", "vomiting", "diarrhea",
        "diarrhoea", "constipation", "cramp", "cramping", "bloating", "heartburn",
        "reflux", "acid", "indigestion",
    ),
    red_flags=(
        "severe abdominal pain", "rigid abdomen", "blood in stool", "black stool",
        "persistent vomiting", "signs of dehydration", "fever with pain",
    ),
    home_care=(
        "Small sips of fluids (oral rehydration); bland foods as tolerated.",
        "Avoid heavy, spicy, or fatty meals until better.",
    ),
    monitor=(
        "Persistent vomiting/diarrhea, blood in stool, high fever, or severe pain.",
        "Signs of dehydration: dizziness, dry mouth, infrequent urination.",
    ),
)

NEUROLOGY = ClinicalDomain(
    name="Neurology",
    symptoms=(
        "headache", "migraine", "head pain", "dizzy", "dizziness", "lightheaded",
        "vertigo", "numbness", "tingling", "weakness", "tremor", "seizure",
    ),
    red_flags=(
        "sudden worst headache", "weakness on one side", "slurred speech", "confusion",
        "fainting", "seizure", "vision loss",
    ),
    home_care=(
        "Rest in a quiet, dark room; hydrate; consider gentle caffeine.",
        "Track triggers (stress, dehydration, screen time) and use simple analgesics if appropriate.",
    ),
    monitor=(
        "New neurological deficits, severe or sudden headache, persistent vomiting.",
        "Worsening frequency or severity despite home care.",
    ),
)

ORTHOPEDICS = ClinicalDomain(
    name="Orthopedics",
    symptoms=(
        "sprain", "strain", "twisted", "fracture", "broken", "swollen", "swelling",
        "bruise", "bruised", "joint pain", "knee pain", "shoulder pain", "back pain",
    ),
    red_flags=(
        "deformity", "inability to bear weight", "numb limb", "severe swelling",
        "open wound", "fever with joint pain",
    ),
    home_care=(
        "RICE: rest, ice (15-20 min), compression, elevation for 24-48 hours.",
        "Avoid heavy strain; consider gentle mobility as pain allows.",
    ),
    monitor=(
        "Worsening pain/swelling, inability to move, or numbness/tingling.",
        "Persistent pain limiting activity.",
    ),
)

UROLOGY = ClinicalDomain(
    name="Urology",
    symptoms=(
        "urine", "urination", "pee", "burning urination", "uti", "frequent urination",
        "hematuria", "blood in urine", "flank pain", "kidney pain",
    ),
    red_flags=(
        "fever with urinary symptoms", "flank pain with fever", "severe pain",
        "blood clots in urine", "retention (unable to urinate)",
    ),
    home_care=(
        "Hydrate well; avoid bladder irritants (caffeine, alcohol, spicy foods).",
        "Consider urinary alkalinizers if appropriate.",
    ),
    monitor=(
        "Fever, back/flank pain, worsening burning or frequency.",
        "Any visible blood in urine persisting.",
    ),
)

MENTAL_HEALTH = ClinicalDomain(
    name="Mental Health",
    symptoms=(
        "anxiety", "panic", "stress", "worried", "insomnia", "sleep", "depressed", "low mood",
    ),
    red_flags=(
        "thoughts of self-harm", "suicidal", "harming yourself", "harming others",
        "severe agitation", "confusion",
    ),
    home_care=(
        "Try slow breathing (4-7-8), regular sleep schedule, and daily light activity.",
        "Limit caffeine and alcohol; consider short relaxation exercises.",
    ),
    monitor=(
        "Worsening mood, sleep disruption, inability to function.",
        "Any thoughts of self-harm — seek urgent help immediately.",
    ),
)

# "cough" is left to Respiratory so a plain cough is not read as a child's complaint.
PEDIATRICS = ClinicalDomain(
    name="Pediatrics",
    symptoms=(
        "child", "kid", "baby", "toddler", "infant", "my son", "my daughter",
        "fever", "rash", "vomit", "diarrhea",
    ),
    red_flags=(
        "lethargy", "breathing difficulty", "persistent high fever", "dehydration",
        "stiff neck", "seizure", "non-blanching rash",
    ),
    home_care=(
        "Ensure hydration; monitor wet diapers/urination.",
        "Use weight-based fever reducers if appropriate and advised.",
    ),
    monitor=(
        "Breathing, activity, appetite, and hydration.",
        "Any red-flag signs above — seek urgent care.",
    ),
)

GENERAL = ClinicalDomain(
    name="General",
    symptoms=(
        "pain", "ache", "sore", "tired", "fatigue", "weak", "weakness", "fever",
        "temperature", "sick",
    ),
    red_flags=(
        "severe pain", "shortness of breath", "confusion", "persistent high fever",
        "fainting", "severe bleeding", "stroke signs",
    ),
    home_care=(
        "Rest, hydration, and simple over-the-counter relief as appropriate.",
        "Track symptoms (onset, duration, triggers) to share in a visit.",
    ),
    monitor=(
        "Worsening symptoms, new red flags, or persistence beyond a few days.",
        "Any severe or rapidly progressing issues.",
    ),
)

DOMAINS: tuple[ClinicalDomain, ...] = (
    RESPIRATORY,
    CARDIOLOGY,
    DERMATOLOGY,
    GASTROINTESTINAL,
    NEUROLOGY,
    ORTHOPEDICS,
    UROLOGY,
    MENTAL_HEALTH,
    PEDIATRICS,
    GENERAL,
)

# Escalates regardless of which domains matched
CRITICAL_RED_FLAGS: tuple[str, ...] = (
    "severe chest pain", "trouble breathing", "shortness of breath", "confusion",
    "fainting", "stroke", "weakness on one side", "slurred speech", "severe bleeding",
    "rigid abdomen", "black stool", "blood in stool", "worst headache",
)

NUMBER_PLACEHOLDER = "[0-9]+"

DURATION_TEMPLATES: tuple[str, ...] = (
    "for [0-9]+ days",
    "for [0-9]+ day",
    "for [0-9]+ weeks",
    "for [0-9]+ week",
    "since yesterday",
    "since last night",
    "since today",
    "for a few days",
    "for several days",
    "for months",
    "for years",
    "for a while",
)

# Plurals first: alternation takes the first branch that matches
DURATION_FALLBACK_PATTERN = r"for (\d+)\s+(days|day|weeks|week|hours|hour)"

SEVERITY_TERMS: tuple[str, ...] = (
    "mild", "moderate", "severe", "worst", "worse", "worsening", "intense", "sharp",
    "dull", "throbbing",
)

CHILD_TERMS: tuple[str, ...] = (
    "child", "kid", "baby", "toddler", "infant", "my son", "my daughter",
)

PREGNANCY_TERMS: tuple[str, ...] = ("pregnant", "pregnancy", "expecting", "trimester")

COMORBIDITIES: tuple[str, ...] = (
    "diabetes", "hypertension", "high blood pressure", "asthma", "copd",
    "heart disease", "kidney disease", "cancer",
)

# Psychiatry and urology carry no note.
SPECIALTY_NOTES: dict[Specialty, str] = {
    Specialty.CARDIOLOGY: (
        "Specialty note (Cardiology): Track blood pressure and pulse if possible. "
        "Avoid exertion and heavy meals. If chest pain is severe, radiates to arm/jaw, "
        "or occurs with breathlessness or fainting, seek urgent care."
    ),
    Specialty.NEUROLOGY: (
        "Specialty note (Neurology): For headaches or dizziness, note triggers and any "
        "neurological changes (weakness, numbness, speech or vision issues). Sudden severe "
        "headache or new deficits require urgent evaluation."
    ),
    Specialty.PRIMARY_CARE: (
        "Specialty note (Primary Care): We can triage broadly and coordinate tests or "
        "referrals as needed."
    ),
    Specialty.DERMATOLOGY: (
        "Specialty note (Dermatology): Gentle skincare, fragrance-free moisturizers, and "
        "avoiding irritants can help while we assess."
    ),
    Specialty.PEDIATRICS: (
        "Specialty note (Pediatrics): Focus on hydration, activity, appetite, and "
        "temperature trends. Seek urgent care for breathing difficulty, lethargy, "
        "persistent high fever, or a non-blanching rash."
    ),
    Specialty.ORTHOPEDICS: (
        "Specialty note (Orthopedics): Use RICE for strains/sprains. If deformity, "
        "inability to bear weight, or numbness occurs, seek prompt evaluation."
    ),
}

# Canned reply text
ACKNOWLEDGMENT = "Thanks for the details. I’ll share general guidance based on what you described."
LIKELY_HEADER = "What it might be (non-diagnostic):"
HOME_CARE_HEADER = "Home care:"
MONITOR_HEADER = "What to monitor:"
HOME_CARE_FALLBACK: tuple[str, ...] = (
    "Rest, hydrate, and use simple over-the-counter relief if appropriate.",
    "Track symptoms and avoid known triggers if possible.",
)
MONITOR_FALLBACK: tuple[str, ...] = (
    "Worsening symptoms, new red flags, or persistence beyond a few days.",
)
EMERGENCY_MESSAGE = (
    "Urgent care: If you develop severe chest pain, trouble breathing, confusion, severe "
    "bleeding, fainting, or stroke-like symptoms, seek emergency services immediately."
)
FOLLOW_UP_MESSAGE = (
    "If symptoms worsen or don’t improve, consider booking a visit so we can evaluate further."
)
CONTEXT_SEPARATOR = " • "
SECTION_SEPARATOR = "\n\n"
BULLET = "- "
