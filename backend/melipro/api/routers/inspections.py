from fastapi import APIRouter, Depends, HTTPException

from melipro.api.deps import get_repository
from melipro.schemas.inspection import Inspection, InspectionIn, InspectionOut
from melipro.services.storage.repository import (
    HiveNotFoundError,
    HiveRepository,
    newest_first,
    resolve_hive,
)

router = APIRouter()


@router.get("")
@router.get("/")
def list_inspections(repo: HiveRepository = Depends(get_repository)) -> list[InspectionOut]:
    """
    全管理記録を新しい順で返す。
    削除済み巣箱を指す記録は hive.deleted=true。
    """
    by_id = {h.id: h for h in repo.list_hives()}
    return [
        InspectionOut(**i.model_dump(), hive=resolve_hive(i, by_id))
        for i in newest_first(repo.list_inspections())
    ]


@router.post("", status_code=201)
@router.post("/", status_code=201)
def record_inspection(payload: InspectionIn, repo: HiveRepository = Depends(get_repository)) -> Inspection:
    try:
        return repo.append_inspection(payload)
    except HiveNotFoundError:
        raise HTTPException(status_code=404, detail="hive not found")
