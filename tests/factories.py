"""Record builders shared by the test modules."""

from __future__ import annotations

from melipro.schemas.commons import HiveHealth, InspectionType, Species
from melipro.schemas.hive import Hive
from melipro.schemas.inspection import Inspection


def make_hive(hive_id: str = "h1", **overrides) -> Hive:
    data = {
        "id": hive_id,
        "name": f"CX-{hive_id}",
        "species": Species.JATAI,
        "date_established": "2024-01-10",
        "health": HiveHealth.MEDIUM,
        "location": "",
    }
    data.update(overrides)
    return Hive(**data)


def make_inspection(inspection_id: str = "i1", hive_id: str = "h1", **overrides) -> Inspection:
    data = {
        "id": inspection_id,
        "hive_id": hive_id,
        "date": "2024-05-01",
        "type": InspectionType.INSPECTION,
        "notes": "",
    }
    data.update(overrides)
    return Inspection(**data)
