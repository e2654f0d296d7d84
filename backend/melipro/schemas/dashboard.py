# backend/melipro/schemas/dashboard.py
from typing import List

from .commons import CamelModel, HiveGenetics
from .hive import Hive


class GeneticsBucket(CamelModel):
    name: HiveGenetics
    value: int
    hives: List[str]


class WaitingHive(CamelModel):
    hive: Hive
    days: int


class MultiplicationOut(CamelModel):
    ready_to_divide: List[Hive]
    waiting_time: List[WaitingHive]


class LocationGroup(CamelModel):
    location: str
    hives: List[Hive]


class DashboardOut(CamelModel):
    total_hives: int
    total_inspections: int
    species_count: int
    multiplication_genetics_count: int
    problem_hives: List[Hive]
    evolving_hives: List[Hive]
    genetics: List[GeneticsBucket]
    multiplication: MultiplicationOut
    locations: List[LocationGroup]
