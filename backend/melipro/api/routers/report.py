# backend/melipro/api/routers/report.py
from fastapi import APIRouter, Depends
from datetime import date

from melipro.api.deps import get_repository, hive_or_404
from melipro.api.routers.export import attachment
from melipro.services.export.csv_export import sanitize
from melipro.services.report.word import MEDIA_TYPE, hive_report, inspections_report, inventory_report
from melipro.services.storage.repository import HiveRepository

router = APIRouter()


@router.get("/hives/{hive_id}")
def report_hive(hive_id: str, repo: HiveRepository = Depends(get_repository)):
    hive = hive_or_404(repo, hive_id)
    html = hive_report(hive, repo.inspections_for_hive(hive_id))
    filename = f"Relatorio_{sanitize(hive.name)}_{date.today().isoformat()}.doc"
    return attachment(html, filename, MEDIA_TYPE)


@router.get("/inspections")
def report_inspections(repo: HiveRepository = Depends(get_repository)):
    html = inspections_report(repo.list_hives(), repo.list_inspections())
    return attachment(html, f"Historico_Manejos_Geral_{date.today().isoformat()}.doc", MEDIA_TYPE)


@router.get("/inventory")
def report_inventory(repo: HiveRepository = Depends(get_repository)):
    html = inventory_report(repo.list_hives())
    return attachment(html, f"Inventario_Geral_{date.today().isoformat()}.doc", MEDIA_TYPE)
