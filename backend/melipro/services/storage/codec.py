# backend/melipro/services/storage/codec.py
"""
巣箱・管理記録コレクションのバージョン付き保存形式。

保存レイアウト::

    {"version": 1, "records": [ {...camelCase のレコード...}, ... ]}

素の JSON 配列は旧ブラウザ保存形式で、version 0 として読む。
アップグレードは読み込み時にのみ、バージョン順に適用する。
各関数は version N の生 dict を受け取り N + 1 の dict を返す（純粋関数）。
"""
from __future__ import annotations

import json
import logging
from typing import Callable, Iterable, Type, TypeVar

from pydantic import BaseModel, ValidationError

from melipro.schemas.commons import HiveClassification, HiveGenetics
from melipro.schemas.hive import Hive
from melipro.schemas.inspection import Inspection

logger = logging.getLogger(__name__)

CURRENT_VERSION = 1

Records = list[dict]
Upgrade = Callable[[Records], Records]
M = TypeVar("M", bound=BaseModel)


class BlobFormatError(ValueError):
    """解析できない、または未知のバージョンの blob"""


def _hives_v0_to_v1(records: Records) -> Records:
    out = []
    for raw in records:
        rec = dict(raw)
        queen_status = rec.pop("queenStatus", None)
        legacy_last = rec.pop("lastInterventionDateDiscos", None)
        if not rec.get("classification"):
            rec["classification"] = (
                HiveClassification.MATRIZ.value if queen_status == "Presente" else HiveClassification.FILHA.value
            )
        rec["lastInterventionDate"] = rec.get("lastInterventionDate") or legacy_last or ""
        rec["genetics"] = rec.get("genetics") or HiveGenetics.MIXED.value
        out.append(rec)
    return out


def _identity(records: Records) -> Records:
    return [dict(r) for r in records]


HIVE_UPGRADES: dict[int, Upgrade] = {0: _hives_v0_to_v1}
INSPECTION_UPGRADES: dict[int, Upgrade] = {0: _identity}


def _unwrap(text: str) -> tuple[int, Records]:
    try:
        payload = json.loads(text)
    except json.JSONDecodeError as e:
        raise BlobFormatError(f"invalid JSON: {e}") from e

    if isinstance(payload, list):
        return 0, payload
    if not isinstance(payload, dict):
        raise BlobFormatError("blob must be a JSON array or object")

    version = payload.get("version")
    records = payload.get("records")
    if not isinstance(version, int) or not isinstance(records, list):
        raise BlobFormatError("blob object needs an integer 'version' and a 'records' array")
    if version > CURRENT_VERSION or version < 0:
        raise BlobFormatError(f"unsupported blob version {version}")
    return version, records


def upgrade(records: Records, version: int, upgrades: dict[int, Upgrade]) -> Records:
    kept = []
    for r in records:
        if isinstance(r, dict):
            kept.append(r)
        else:
            logger.warning("skipping non-object record: %r", r)
    records = kept
    while version < CURRENT_VERSION:
        records = upgrades[version](records)
        version += 1
    return records


def _decode(text: str, model: Type[M], upgrades: dict[int, Upgrade]) -> list[M]:
    version, records = _unwrap(text)
    out: list[M] = []
    for rec in upgrade(records, version, upgrades):
        try:
            out.append(model.model_validate(rec))
        except ValidationError as e:
            logger.warning("skipping invalid %s record id=%r: %s", model.__name__, rec.get("id"), e)
    return out


def decode_hives(text: str) -> list[Hive]:
    return _decode(text, Hive, HIVE_UPGRADES)


def decode_inspections(text: str) -> list[Inspection]:
    return _decode(text, Inspection, INSPECTION_UPGRADES)


def encode(records: Iterable[BaseModel]) -> str:
    payload = {
        "version": CURRENT_VERSION,
        "records": [r.model_dump(mode="json", by_alias=True, exclude_none=True) for r in records],
    }
    return json.dumps(payload, ensure_ascii=False)
