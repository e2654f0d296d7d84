# backend/melipro/schemas/hive.py
from datetime import date as Date
from typing import Optional

from pydantic import Field, field_validator

from .commons import (
    BoxType,
    CamelModel,
    HiveClassification,
    HiveGenetics,
    HiveHealth,
    Species,
)


class Hive(CamelModel):
    id: str
    name: str = Field(min_length=1)
    species: Species
    genetics: HiveGenetics = HiveGenetics.MIXED
    # 日付は文字列のまま保持（旧データに不正な値が残っていても読み込めるように）
    date_established: str = ""
    last_intervention_date: str = ""
    health: HiveHealth = HiveHealth.MEDIUM
    location: str = ""
    origin: str = ""
    classification: HiveClassification = HiveClassification.FILHA
    box_type: BoxType = "INPA"

    @field_validator("genetics", mode="before")
    @classmethod
    def _default_genetics(cls, v):
        return v or HiveGenetics.MIXED

    @field_validator("last_intervention_date", "location", "origin", mode="before")
    @classmethod
    def _none_to_empty(cls, v):
        return "" if v is None else v


class HiveIn(CamelModel):
    name: str = Field(min_length=1)
    species: Species
    genetics: HiveGenetics = HiveGenetics.MIXED
    date_established: Optional[Date] = None
    last_intervention_date: Optional[Date] = None
    health: HiveHealth = HiveHealth.MEDIUM
    location: str = ""
    origin: str = ""
    classification: HiveClassification = HiveClassification.FILHA
    box_type: BoxType = "INPA"

    def to_hive(self, hive_id: str) -> Hive:
        the_date = self.date_established or Date.today()
        return Hive(
            id=hive_id,
            name=self.name,
            species=self.species,
            genetics=self.genetics,
            date_established=the_date.isoformat(),
            last_intervention_date=self.last_intervention_date.isoformat() if self.last_intervention_date else "",
            health=self.health,
            location=self.location,
            origin=self.origin,
            classification=self.classification,
            box_type=self.box_type,
        )


class HiveUpdate(CamelModel):
    name: Optional[str] = Field(default=None, min_length=1)
    species: Optional[Species] = None
    genetics: Optional[HiveGenetics] = None
    date_established: Optional[Date] = None
    last_intervention_date: Optional[Date] = None
    health: Optional[HiveHealth] = None
    location: Optional[str] = None
    origin: Optional[str] = None
    classification: Optional[HiveClassification] = None
    box_type: Optional[BoxType] = None

    def changes(self) -> dict:
        """指定されたフィールドだけを Hive の属性名で返す"""
        out = {}
        for key, value in self.model_dump(exclude_none=True).items():
            if isinstance(value, Date):
                value = value.isoformat()
            out[key] = value
        return out
