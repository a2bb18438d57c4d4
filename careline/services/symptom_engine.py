"""
Offline rule-based symptom engine.

Turns one free-text chat message into a canned, multi-section doctor reply:
1. Normalize (lowercase) the message
2. Extract context: duration, severity, child/pregnancy flags, comorbidities
3. Score every clinical domain by keyword presence and rank them
4. Assemble the reply from the top domains' statements and fixed fallbacks

The engine holds only static rule data and a limits config, so one instance
can be created at startup and shared. Every call is independent and the
reply is fully deterministic for a given (text, specialty).
"""

import re

import structlog

from careline.config import EngineConfig
from careline.domain import rules
from careline.domain.models import (
    ClassificationResult,
    ClinicalDomain,
    DomainScore,
    ExtractedContext,
    Specialty,
)

logger = structlog.get_logger(__name__)

_FIRST_NUMBER = re.compile(r"\d+")
_WHITESPACE = re.compile(r"\s+")
_DURATION_FALLBACK = re.compile(rules.DURATION_FALLBACK_PATTERN)


# =============================================================================
# TEXT NORMALIZATION AND CONTEXT EXTRACTION
# =============================================================================


def normalize(text: str) -> str:
    """Lowercased copy of the message; the only preprocessing the rules rely on."""
    return text.lower()


def contains_any(text: str, words: tuple[str, ...]) -> bool:
    return any(word in text for word in words)


def extract_all(text: str, words: tuple[str, ...]) -> tuple[str, ...]:
    """Words present in text, in list order."""
    return tuple(word for word in words if word in text)


def find_first_number(text: str) -> int | None:
    """First run of digits as an int; a run too long to convert counts as none."""
    match = _FIRST_NUMBER.search(text)
    if match is None:
        return None
    try:
        return int(match.group())
    except ValueError:
        # Exceeds the interpreter's int string conversion limit
        return None


def _normalize_template(template: str) -> str:
    without_number = template.replace(rules.NUMBER_PLACEHOLDER, "")
    return _WHITESPACE.sub(" ", without_number).strip()


def extract_duration(text: str) -> str | None:
    """
    First duration phrase found in text.

    Templates are tried in declared order. A template with a numeric
    placeholder is returned with the first integer in the text substituted;
    when no template applies, "for <n> day(s)/week(s)/hour(s)" is matched
    directly.
    """
    for template in rules.DURATION_TEMPLATES:
        normalized = _normalize_template(template)
        if len(normalized) > 2 and normalized in text:
            number = find_first_number(text)
            if number is not None and rules.NUMBER_PLACEHOLDER in template:
                return template.replace(rules.NUMBER_PLACEHOLDER, str(number))
            return normalized

    match = _DURATION_FALLBACK.search(text)
    if match:
        return match.group(0)
    return None


def extract_severity(text: str) -> str | None:
    return next((term for term in rules.SEVERITY_TERMS if term in text), None)


def extract_context(text: str) -> ExtractedContext:
    """Pull all best-effort context fields out of already-normalized text."""
    return ExtractedContext(
        duration=extract_duration(text),
        severity=extract_severity(text),
        is_child=contains_any(text, rules.CHILD_TERMS),
        is_pregnant=contains_any(text, rules.PREGNANCY_TERMS),
        comorbidities=extract_all(text, rules.COMORBIDITIES),
    )


def has_critical_red_flags(text: str) -> bool:
    return contains_any(text, rules.CRITICAL_RED_FLAGS)


# =============================================================================
# SCORING AND RANKING
# =============================================================================


def rank_domains(
    text: str, domains: tuple[ClinicalDomain, ...] = rules.DOMAINS
) -> tuple[DomainScore, ...]:
    """Matching domains by descending score; sorted() is stable so ties keep declaration order."""
    scored = [(domain, domain.score(text)) for domain in domains]
    hits = [DomainScore(domain=domain, score=score) for domain, score in scored if score > 0]
    return tuple(sorted(hits, key=lambda hit: hit.score, reverse=True))


def specialty_note(specialty: Specialty) -> str | None:
    return rules.SPECIALTY_NOTES.get(specialty)


# =============================================================================
# REPLY ASSEMBLY
# =============================================================================


def _bulleted(header: str, lines: list[str]) -> str:
    return f"{header}\n{rules.BULLET}" + f"\n{rules.BULLET}".join(lines)


def _pooled(domains: tuple[ClinicalDomain, ...], attribute: str, limit: int) -> list[str]:
    """Statements from each domain in order, concatenated, then truncated."""
    pool = [line for domain in domains for line in getattr(domain, attribute)]
    return pool[:limit]


def format_context(context: ExtractedContext) -> str | None:
    parts: list[str] = []
    if context.duration:
        parts.append(f"Duration: {context.duration}")
    if context.severity:
        parts.append(f"Severity: {context.severity}")
    if context.is_child:
        parts.append("Context: child involved")
    if context.is_pregnant:
        parts.append("Context: pregnancy")
    if context.comorbidities:
        parts.append(f"Comorbidities: {', '.join(context.comorbidities)}")
    return rules.CONTEXT_SEPARATOR.join(parts) if parts else None


def assemble_reply(
    top_domains: tuple[ClinicalDomain, ...],
    specialty: Specialty,
    context: ExtractedContext,
    escalate: bool,
    config: EngineConfig,
) -> str:
    sections: list[str] = []

    if not top_domains:
        sections.append(rules.ACKNOWLEDGMENT)
    else:
        likely = _pooled(top_domains, "likely", config.max_likely_lines)
        if likely:
            sections.append(_bulleted(rules.LIKELY_HEADER, likely))

    note = specialty_note(specialty)
    if note:
        sections.append(note)

    context_line = format_context(context)
    if context_line:
        sections.append(context_line)

    home_care = _pooled(top_domains, "home_care", config.max_home_care_lines)
    sections.append(
        _bulleted(rules.HOME_CARE_HEADER, home_care or list(rules.HOME_CARE_FALLBACK))
    )

    monitor = _pooled(top_domains, "monitor", config.max_monitor_lines)
    sections.append(_bulleted(rules.MONITOR_HEADER, monitor or list(rules.MONITOR_FALLBACK)))

    sections.append(rules.EMERGENCY_MESSAGE if escalate else rules.FOLLOW_UP_MESSAGE)

    return rules.SECTION_SEPARATOR.join(sections)


class SymptomEngine:
    """
    Stateless classifier service.

    Design principles:
    - Rule content is data (careline.domain.rules), not branching code
    - No I/O and no randomness: same input, same reply
    - Never raises for any string input; no match means fallback text
    """

    def __init__(
        self,
        config: EngineConfig | None = None,
        domains: tuple[ClinicalDomain, ...] = rules.DOMAINS,
    ) -> None:
        self.config = config or EngineConfig()
        self.domains = domains
        self.logger = logger.bind(component="symptom_engine")

    def classify(self, user_text: str, specialty: Specialty) -> ClassificationResult:
        text = normalize(user_text)
        context = extract_context(text)

        ranked = rank_domains(text, self.domains)
        # Red flags are checked across every matched domain, not just the top ones
        has_red_flags = any(hit.domain.has_red_flag(text) for hit in ranked)
        critical = has_critical_red_flags(text)
        top_domains = tuple(hit.domain for hit in ranked[: self.config.max_top_domains])

        reply = assemble_reply(
            top_domains, specialty, context, has_red_flags or critical, self.config
        )

        self.logger.debug(
            "reply_generated",
            specialty=specialty.value,
            matched_domains=[hit.domain.name for hit in ranked],
            top_domains=[domain.name for domain in top_domains],
            has_red_flags=has_red_flags,
            critical_red_flag=critical,
            input_length=len(user_text),
        )

        return ClassificationResult(
            ranked=ranked,
            top_domains=top_domains,
            has_red_flags=has_red_flags,
            critical_red_flag=critical,
            context=context,
            reply=reply,
        )

    def generate_reply(self, user_text: str, specialty: Specialty) -> str:
        return self.classify(user_text, specialty).reply
