"""Patient counseling topic derivation.

Every dispensed prescription carries a baseline set of counseling topics.
Drug attributes add more, such as controlled schedules, cold-chain storage,
hazardous handling, documented side effects and contraindications.
"""

from __future__ import annotations

from medsafety.validation.models import Prescription

STANDARD_TOPICS = (
    "Medication Purpose",
    "Dosing Instructions",
    "Administration Route",
    "Duration of Therapy",
)


def required_counseling_topics(prescription: Prescription) -> list[str]:
    """Return the ordered, de-duplicated topics required for a prescription."""
    topics: list[str] = list(STANDARD_TOPICS)

    for item in prescription.items:
        drug = item.drug

        if drug.is_controlled:
            topics.extend(["Controlled Substance Precautions", "Storage and Security"])

        if drug.is_refrigerated:
            topics.append("Refrigeration Requirements")

        if drug.is_hazardous:
            topics.extend(["Hazardous Drug Handling", "Special Precautions"])

        if drug.side_effects:
            topics.extend(["Common Side Effects", "When to Contact Provider"])

        if drug.contraindications:
            topics.append("Contraindications and Warnings")

    return list(dict.fromkeys(topics))
