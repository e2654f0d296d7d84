# backend/melipro/services/analytics/dashboard.py
from __future__ import annotations
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Iterable, Optional

from melipro.schemas.commons import HiveGenetics, HiveHealth
from melipro.schemas.dashboard import (
    DashboardOut,
    GeneticsBucket,
    LocationGroup,
    MultiplicationOut,
    WaitingHive,
)
from melipro.schemas.hive import Hive
from melipro.schemas.inspection import Inspection
from melipro.services.dates import MS_PER_DAY, parse_date, utcnow

MULTIPLICATION_MIN_DAYS = 90
UNDEFINED_LOCATION = "Não Definida"
PROBLEM_HEALTH = (HiveHealth.WEAK, HiveHealth.CRITICAL)


@dataclass
class HealthPartition:
    problem: list[Hive] = field(default_factory=list)  # Fraca | Crítica
    evolving: list[Hive] = field(default_factory=list)  # Aguardando Evolução


@dataclass
class Readiness:
    ready_to_divide: list[Hive] = field(default_factory=list)
    waiting: list[tuple[Hive, int]] = field(default_factory=list)


def species_count(hives: Iterable[Hive]) -> int:
    return len({h.species for h in hives})


def health_partition(hives: Iterable[Hive]) -> HealthPartition:
    part = HealthPartition()
    for h in hives:
        if h.health in PROBLEM_HEALTH:
            part.problem.append(h)
        elif h.health == HiveHealth.EVOLVING:
            part.evolving.append(h)
    return part


def genetics_histogram(hives: Iterable[Hive]) -> list[GeneticsBucket]:
    # 全区分を 0 で初期化し、列挙順を保つ
    names: dict[HiveGenetics, list[str]] = {g: [] for g in HiveGenetics}
    for h in hives:
        names[h.genetics or HiveGenetics.MIXED].append(h.name)
    return [
        GeneticsBucket(name=g, value=len(members), hives=members)
        for g, members in names.items()
        if members
    ]


def reference_date(hive: Hive) -> Optional[datetime]:
    # 最終介入日があればそれ、無ければ導入日
    return parse_date(hive.last_intervention_date or hive.date_established)


def elapsed_days(now: datetime, ref: datetime) -> int:
    diff_ms = abs(now - ref) // timedelta(milliseconds=1)
    return -(-diff_ms // MS_PER_DAY)


def multiplication_readiness(hives: Iterable[Hive], now: Optional[datetime] = None) -> Readiness:
    now = now or utcnow()
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    out = Readiness()
    for h in hives:
        ref = reference_date(h)
        if ref is None:
            continue
        days = elapsed_days(now, ref)
        if days >= MULTIPLICATION_MIN_DAYS:
            out.waiting.append((h, days))
            if h.health == HiveHealth.STRONG:
                out.ready_to_divide.append(h)
    return out


def location_key(location: str) -> str:
    key = location or UNDEFINED_LOCATION
    if "-" in key:
        key = key.split("-", 1)[0].strip()
    return key


def group_by_location(hives: Iterable[Hive]) -> dict[str, list[Hive]]:
    groups: dict[str, list[Hive]] = {}
    for h in hives:
        groups.setdefault(location_key(h.location), []).append(h)
    return groups


def build_dashboard(
    hives: list[Hive],
    inspections: list[Inspection],
    now: Optional[datetime] = None,
) -> DashboardOut:
    health = health_partition(hives)
    readiness = multiplication_readiness(hives, now)
    return DashboardOut(
        total_hives=len(hives),
        total_inspections=len(inspections),
        species_count=species_count(hives),
        multiplication_genetics_count=sum(1 for h in hives if h.genetics == HiveGenetics.MULTIPLICATION),
        problem_hives=health.problem,
        evolving_hives=health.evolving,
        genetics=genetics_histogram(hives),
        multiplication=MultiplicationOut(
            ready_to_divide=readiness.ready_to_divide,
            waiting_time=[WaitingHive(hive=h, days=d) for h, d in readiness.waiting],
        ),
        locations=[LocationGroup(location=k, hives=v) for k, v in group_by_location(hives).items()],
    )
