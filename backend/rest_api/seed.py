"""
Seed data for development and testing.
Creates the reference divisions and their standard karats.
"""

from sqlalchemy.orm import Session

from rest_api.models import Division
from rest_api.repositories import DivisionRepository, KaratRepository
from rest_api.services.domain import DivisionService, KaratService
from shared.config.logging import get_logger

logger = get_logger(__name__)

SEED_EMAIL = "seed@karat-master.local"

# (code, description)
SEED_DIVISIONS = [
    ("GOLD", "Gold"),
    ("SILVER", "Silver"),
]

# division code -> (code, description, standard_purity, minimum, maximum)
SEED_KARATS: dict[str, list[tuple[str, str, float, float, float]]] = {
    "GOLD": [
        ("K24", "24 karat fine gold", 99.9, 99.5, 100.0),
        ("K22", "22 karat gold", 91.6, 91.0, 92.0),
        ("K18", "18 karat gold", 75.0, 74.5, 75.5),
        ("K14", "14 karat gold", 58.5, 58.0, 59.0),
    ],
    "SILVER": [
        ("S999", "Fine silver", 99.9, 99.5, 100.0),
        ("S925", "Sterling silver", 92.5, 92.0, 93.0),
    ],
}


def seed_divisions(db: Session) -> dict[str, int]:
    """
    Create the reference divisions.
    Idempotent: existing codes are left untouched.

    Returns:
        Mapping of division code to id.
    """
    repo = DivisionRepository(db)
    service = DivisionService(db)
    ids: dict[str, int] = {}

    for code, description in SEED_DIVISIONS:
        division: Division | None = repo.find_by_code(code)
        if division is None:
            created = service.create(
                {"code": code, "description": description}, None, SEED_EMAIL
            )
            ids[code] = created.id
        else:
            ids[code] = division.id

    return ids


def seed(db: Session) -> tuple[int, int]:
    """
    Seed divisions and karats.

    Returns:
        (divisions_available, karats_created)
    """
    division_ids = seed_divisions(db)
    karats = KaratRepository(db)
    service = KaratService(db)
    created = 0

    for division_code, rows in SEED_KARATS.items():
        division_id = division_ids[division_code]
        for code, description, purity, minimum, maximum in rows:
            if karats.code_exists(code, division_id):
                continue
            service.create(
                {
                    "code": code,
                    "division_id": division_id,
                    "description": description,
                    "standard_purity": purity,
                    "minimum": minimum,
                    "maximum": maximum,
                },
                None,
                SEED_EMAIL,
            )
            created += 1

    logger.info("Seed completed", divisions=len(division_ids), karats_created=created)
    return len(division_ids), created
