# backend/melipro/api/routers/export.py
import unicodedata
from fastapi import APIRouter, Depends, Response
from datetime import date
from urllib.parse import quote

from melipro.api.deps import get_repository
from melipro.services.export.csv_export import hives_csv, inspections_csv
from melipro.services.storage.repository import HiveRepository

router = APIRouter()

CSV_MEDIA_TYPE = "text/csv; charset=utf-8"


def content_disposition(filename: str) -> str:
    # filename= は ASCII 代替名、filename*= は RFC 5987 の UTF-8 名
    fallback = unicodedata.normalize("NFKD", filename).encode("ascii", "ignore").decode("ascii")
    fallback = "".join(c for c in fallback if c not in '"\\/') or "download"
    return f"attachment; filename=\"{fallback}\"; filename*=UTF-8''{quote(filename, safe='')}"


def attachment(content: str, filename: str, media_type: str) -> Response:
    headers = {"Content-Disposition": content_disposition(filename)}
    return Response(content=content.encode("utf-8"), media_type=media_type, headers=headers)


@router.get("/hives.csv")
def export_hives(repo: HiveRepository = Depends(get_repository)):
    data = hives_csv(repo.list_hives())
    return attachment(data, f"melipro_enxames_{date.today().isoformat()}.csv", CSV_MEDIA_TYPE)


@router.get("/inspections.csv")
def export_inspections(repo: HiveRepository = Depends(get_repository)):
    data = inspections_csv(repo.list_hives(), repo.list_inspections())
    return attachment(data, f"melipro_manejos_detalhado_{date.today().isoformat()}.csv", CSV_MEDIA_TYPE)
