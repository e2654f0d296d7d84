# backend/melipro/services/report/word.py
"""
Word 互換レポート。
インライン CSS 付き HTML を出力し、.doc 拡張子・application/msword で配信する
（Word 側の HTML インポートで開ける）。
"""
import re
from datetime import date
from pathlib import Path
from typing import Optional

from jinja2 import Environment, FileSystemLoader, select_autoescape

from melipro.schemas.commons import HiveHealth
from melipro.schemas.hive import Hive
from melipro.schemas.inspection import Inspection
from melipro.services.analytics.dashboard import health_partition
from melipro.services.dates import format_date_br
from melipro.services.storage.repository import newest_first, resolve_hive

MEDIA_TYPE = "application/msword"
TEMPLATE_DIR = Path(__file__).resolve().parents[2] / "templates" / "report"

FOOTER = "Gerado pelo sistema MeliPro - Gestão de Meliponário"
FOOTER_SHORT = "MeliPro - Gestão de Meliponário"

_env = Environment(
    loader=FileSystemLoader(str(TEMPLATE_DIR)),
    autoescape=select_autoescape(["html", "j2"]),
    trim_blocks=True,
    lstrip_blocks=True,
)
_env.filters["br_date"] = format_date_br


def render_report(template_name: str, context: dict) -> str:
    tpl = _env.get_template(template_name)
    return tpl.render(**context)


def detail_label(key: str) -> str:
    # qualidadeCaixa → "Qualidade Caixa"
    spaced = re.sub(r"([A-Z])", r" \1", key)
    return spaced[:1].upper() + spaced[1:]


def detail_pairs(inspection: Inspection) -> list[tuple[str, str]]:
    if inspection.details is None:
        return []
    return [
        (detail_label(k), ", ".join(v) if isinstance(v, list) else str(v))
        for k, v in inspection.details.filled()
    ]


def _today(today: Optional[date]) -> date:
    return today or date.today()


def hive_report(hive: Hive, inspections: list[Inspection], today: Optional[date] = None) -> str:
    info_rows = [
        [("Espécie", hive.species.value), ("Saúde", hive.health.value)],
        [("Genética", hive.genetics.value if hive.genetics else "Mista"), ("Classificação", hive.classification.value)],
        [("Tipo de Caixa", hive.box_type), ("Localização", hive.location)],
        [("Origem", hive.origin or "-"), ("Data Chegada", format_date_br(hive.date_established))],
        [("Último Manejo", format_date_br(hive.last_intervention_date)), (None, None)],
    ]
    rows = [
        {
            "date": format_date_br(i.date),
            "type": i.type.value,
            "notes": i.notes,
            "details": detail_pairs(i),
        }
        for i in newest_first(inspections)
    ]
    return render_report("hive.html.j2", {
        "hive": hive,
        "info_rows": info_rows,
        "rows": rows,
        "generated_on": _today(today).strftime("%d/%m/%Y"),
        "footer": FOOTER,
    })


def inspections_report(hives: list[Hive], inspections: list[Inspection], today: Optional[date] = None) -> str:
    by_id = {h.id: h for h in hives}
    rows = []
    for i in newest_first(inspections):
        ref = resolve_hive(i, by_id)
        rows.append({
            "date": format_date_br(i.date),
            "hive_name": "Excluída" if ref.deleted else ref.name,
            "species": "-" if ref.deleted else ref.species.value,
            "type": i.type.value,
            "notes": i.notes,
            "details": detail_pairs(i),
        })
    return render_report("inspections.html.j2", {
        "rows": rows,
        "generated_on": _today(today).strftime("%d/%m/%Y"),
        "footer": FOOTER,
    })


def inventory_report(hives: list[Hive], today: Optional[date] = None) -> str:
    return render_report("inventory.html.j2", {
        "hives": hives,
        "total": len(hives),
        "strong": sum(1 for h in hives if h.health == HiveHealth.STRONG),
        "attention": len(health_partition(hives).problem),
        "generated_on": _today(today).strftime("%d/%m/%Y"),
        "footer": FOOTER_SHORT,
    })
