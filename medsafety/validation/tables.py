"""Drug term tables used by the safety rules.

Each table is matched as a case-insensitive substring of the drug's generic
name, so ``"morphine"`` also matches ``"morphine sulfate ER"``. Partial-name
collisions are possible (any generic name that contains a listed term
matches) and are accepted as is.
"""
from __future__ import annotations

from collections.abc import Iterable

BEERS_CRITERIA = (
    "diphenhydramine",
    "hydroxyzine",
    "promethazine",
    "diazepam",
    "lorazepam",
    "alprazolam",
    "zolpidem",
    "eszopiclone",
    "amitriptyline",
    "doxepin",
)

RENAL_ADJUSTMENT = (
    "metformin",
    "gabapentin",
    "pregabalin",
    "atenolol",
    "digoxin",
    "lithium",
    "vancomycin",
    "gentamicin",
    "tobramycin",
    "amikacin",
)

HEPATIC_ADJUSTMENT = (
    "warfarin",
    "phenytoin",
    "carbamazepine",
    "valproic acid",
    "propranolol",
    "morphine",
    "codeine",
    "tramadol",
    "acetaminophen",
)

PREGNANCY_CATEGORY_X = (
    "warfarin",
    "isotretinoin",
    "thalidomide",
    "methotrexate",
    "misoprostol",
    "finasteride",
    "dutasteride",
    "atorvastatin",
    "simvastatin",
)

PREGNANCY_CATEGORY_D = (
    "phenytoin",
    "carbamazepine",
    "valproic acid",
    "lithium",
    "atenolol",
    "lisinopril",
    "losartan",
    "tetracycline",
    "doxycycline",
)

LACTATION_CONTRAINDICATED = (
    "lithium",
    "amiodarone",
    "chloramphenicol",
    "tetracycline",
    "ciprofloxacin",
    "metronidazole",
    "ergotamine",
    "bromocriptine",
)

HEART_FAILURE_WORSENING = ("verapamil", "diltiazem", "nifedipine", "ibuprofen", "naproxen")
RESPIRATORY_WORSENING = ("propranolol", "atenolol", "metoprolol", "aspirin")
GLUCOSE_RAISING = ("prednisone", "prednisolone", "hydrochlorothiazide")

# Single-drug classes
ASPIRIN = ("aspirin",)
MORPHINE = ("morphine",)
METFORMIN = ("metformin",)
ACETAMINOPHEN = ("acetaminophen",)
ENOXAPARIN = ("enoxaparin",)

# Condition synonyms, matched against the patient's condition text
PEDIATRIC_CONTRAINDICATION_TERMS = ("pediatric", "children")
HEART_FAILURE_CONDITIONS = ("heart failure", "chf")
RESPIRATORY_CONDITIONS = ("asthma", "copd")
DIABETES_CONDITIONS = ("diabetes",)


def matches_any(text: str | None, terms: Iterable[str]) -> bool:
    """Case-insensitive substring match of any term within text."""
    if not text:
        return False
    lowered = text.lower()
    return any(term.lower() in lowered for term in terms)
