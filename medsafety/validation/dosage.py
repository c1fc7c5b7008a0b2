"""Free-text dosage instruction parsing.

Dosage instructions are entered by prescribers as free text, for example
``"650 mg every 6 hours"`` or ``"1 tablet by mouth twice daily"``. Only two
values are extracted:

- the per-administration dose: the first number immediately followed by
  an ``mg`` unit
- administrations per day: either ``N time(s) per day`` or
  ``every N hours`` converted to ``24 / N``

Unparseable text never raises. A missing dose parses to ``0.0`` and a
missing frequency to ``1.0``, which suppresses dose ceiling checks.
"""
from __future__ import annotations

import re
from dataclasses import dataclass

DOSE_PATTERN = re.compile(r"(\d+(?:\.\d+)?)\s*mg", re.IGNORECASE)
FREQUENCY_PATTERN = re.compile(
    r"(\d+)\s*times?\s*(?:per\s*)?day|every\s*(\d+)\s*hours?", re.IGNORECASE
)

DEFAULT_DOSE_MG = 0.0
DEFAULT_FREQUENCY = 1.0


@dataclass(frozen=True)
class ParsedDosage:
    dose_mg: float | None
    administrations_per_day: float | None

    @property
    def dose_or_default(self) -> float:
        return self.dose_mg if self.dose_mg is not None else DEFAULT_DOSE_MG

    @property
    def frequency_or_default(self) -> float:
        if self.administrations_per_day is None:
            return DEFAULT_FREQUENCY
        return self.administrations_per_day

    @property
    def daily_dose_mg(self) -> float:
        return self.dose_or_default * self.frequency_or_default


def parse_dose_mg(instructions: str | None) -> float | None:
    """Return the first ``<number> mg`` value in the instructions."""
    if not instructions:
        return None
    match = DOSE_PATTERN.search(instructions)
    if not match:
        return None
    return float(match.group(1))


def parse_administrations_per_day(instructions: str | None) -> float | None:
    """Return administrations per day, or None when no frequency is stated."""
    if not instructions:
        return None
    match = FREQUENCY_PATTERN.search(instructions)
    if not match:
        return None
    if match.group(1):
        return float(int(match.group(1)))
    hours = int(match.group(2))
    if hours == 0:
        return None
    return 24 / hours


def parse_dosage(instructions: str | None) -> ParsedDosage:
    return ParsedDosage(
        dose_mg=parse_dose_mg(instructions),
        administrations_per_day=parse_administrations_per_day(instructions),
    )


def extract_dose_amount(instructions: str | None) -> float:
    """Per-administration dose in mg, defaulting to 0 when absent."""
    return parse_dosage(instructions).dose_or_default


def calculate_daily_dose(instructions: str | None) -> float:
    """Total daily dose in mg (dose times administrations per day)."""
    return parse_dosage(instructions).daily_dose_mg


def format_amount(value: float) -> str:
    """Render a dose or weight in fixed notation without trailing zeros."""
    text = f"{value:.3f}".rstrip("0").rstrip(".")
    return text or "0"
