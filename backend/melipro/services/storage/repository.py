# backend/melipro/services/storage/repository.py
"""巣箱と管理記録のリポジトリ（2つの JSON blob に保存）"""
from __future__ import annotations

import logging
import uuid
from datetime import datetime, timezone
from typing import Optional

from melipro.schemas.commons import (
    HiveClassification,
    HiveGenetics,
    HiveHealth,
    InspectionType,
    MoveDirection,
    Species,
)
from melipro.schemas.hive import Hive
from melipro.schemas.inspection import HiveRef, Inspection, InspectionDetails, InspectionIn
from melipro.services.dates import parse_date
from melipro.services.storage.blobstore import BlobStore
from melipro.services.storage.codec import BlobFormatError, decode_hives, decode_inspections, encode

logger = logging.getLogger(__name__)

HIVES_KEY = "melipro_hives"
INSPECTIONS_KEY = "melipro_inspections"

_OLDEST = datetime.min.replace(tzinfo=timezone.utc)


class HiveNotFoundError(LookupError):
    def __init__(self, hive_id: str):
        super().__init__(f"hive not found: {hive_id}")
        self.hive_id = hive_id


def new_id() -> str:
    return str(uuid.uuid4())


def newest_first(inspections: list[Inspection]) -> list[Inspection]:
    # 日付の新しい順。解析できない日付は末尾
    return sorted(
        inspections,
        key=lambda i: (parse_date(i.date) is not None, parse_date(i.date) or _OLDEST),
        reverse=True,
    )


def resolve_hive(inspection: Inspection, hives_by_id: dict[str, Hive]) -> HiveRef:
    hive = hives_by_id.get(inspection.hive_id)
    if hive is None:
        return HiveRef(id=inspection.hive_id, deleted=True)
    return HiveRef(id=hive.id, name=hive.name, species=hive.species)


class HiveRepository:
    """BlobStore 上の巣箱・管理記録の操作"""

    def __init__(self, store: BlobStore):
        self.store = store

    # ── read ──────────────────────────────────────────────────────────────

    def _load(self, key: str, decode) -> list:
        text = self.store.get(key)
        if not text:
            return []
        try:
            return decode(text)
        except BlobFormatError:
            logger.exception("could not read %s, treating as empty", key)
            return []

    def list_hives(self) -> list[Hive]:
        return self._load(HIVES_KEY, decode_hives)

    def list_inspections(self) -> list[Inspection]:
        return self._load(INSPECTIONS_KEY, decode_inspections)

    def get_hive(self, hive_id: str) -> Optional[Hive]:
        return next((h for h in self.list_hives() if h.id == hive_id), None)

    def require_hive(self, hive_id: str) -> Hive:
        hive = self.get_hive(hive_id)
        if hive is None:
            raise HiveNotFoundError(hive_id)
        return hive

    def inspections_for_hive(self, hive_id: str) -> list[Inspection]:
        return newest_first([i for i in self.list_inspections() if i.hive_id == hive_id])

    # ── write ─────────────────────────────────────────────────────────────

    def save_hives(self, hives: list[Hive]) -> None:
        self.store.put(HIVES_KEY, encode(hives))

    def save_inspections(self, inspections: list[Inspection]) -> None:
        self.store.put(INSPECTIONS_KEY, encode(inspections))

    def upsert_hive(self, hive: Hive) -> Hive:
        hives = self.list_hives()
        for idx, h in enumerate(hives):
            if h.id == hive.id:
                hives[idx] = hive
                break
        else:
            hives.append(hive)
        self.save_hives(hives)
        return hive

    def update_hive(self, hive_id: str, changes: dict) -> Hive:
        current = self.require_hive(hive_id)
        data = current.model_dump()
        data.update(changes)
        return self.upsert_hive(Hive.model_validate(data))

    def delete_hive(self, hive_id: str) -> int:
        """巣箱を削除し、その管理記録もすべて削除。削除した記録数を返す"""
        hives = self.list_hives()
        remaining = [h for h in hives if h.id != hive_id]
        if len(remaining) == len(hives):
            raise HiveNotFoundError(hive_id)
        self.save_hives(remaining)

        inspections = self.list_inspections()
        kept = [i for i in inspections if i.hive_id != hive_id]
        self.save_inspections(kept)
        removed = len(inspections) - len(kept)
        logger.info("deleted hive %s with %d inspections", hive_id, removed)
        return removed

    def append_inspection(self, payload: InspectionIn) -> Inspection:
        hive = self.require_hive(payload.hive_id)
        inspection = payload.to_inspection(new_id())

        inspections = self.list_inspections()
        inspections.append(inspection)
        self.save_inspections(inspections)

        self.upsert_hive(hive.model_copy(update={"last_intervention_date": inspection.date}))
        return inspection

    def move_hive(self, hive_id: str, direction: MoveDirection) -> list[Hive]:
        hives = self.list_hives()
        idx = next((i for i, h in enumerate(hives) if h.id == hive_id), None)
        if idx is None:
            raise HiveNotFoundError(hive_id)
        other = idx - 1 if direction == "prev" else idx + 1
        if 0 <= other < len(hives):
            hives[idx], hives[other] = hives[other], hives[idx]
            self.save_hives(hives)
        return hives

    def seed_demo_data(self) -> bool:
        if self.store.get(HIVES_KEY) is not None:
            return False
        self.save_hives([
            Hive(
                id="1",
                name="CX-01 Matriz",
                species=Species.JATAI,
                genetics=HiveGenetics.MULTIPLICATION,
                date_established="2023-01-15",
                last_intervention_date="2023-11-20",
                health=HiveHealth.STRONG,
                location="São Paulo - Varanda",
                classification=HiveClassification.MATRIZ,
                box_type="AF",
                origin="Resgate",
            ),
            Hive(
                id="2",
                name="CX-02 Produção",
                species=Species.MANDACAIA,
                genetics=HiveGenetics.HONEY,
                date_established="2023-06-20",
                last_intervention_date="2023-12-10",
                health=HiveHealth.STRONG,
                location="Sítio Atibaia",
                classification=HiveClassification.MAE,
                box_type="INPA",
                origin="Compra",
            ),
        ])
        self.save_inspections([
            Inspection(
                id="101",
                hive_id="1",
                date="2023-11-20",
                type=InspectionType.DIVISION,
                notes="Divisão realizada com sucesso. Matriz forte.",
                details=InspectionDetails(populacao="B", estoque_alimento="B"),
            ),
        ])
        logger.info("seeded demo hives")
        return True
