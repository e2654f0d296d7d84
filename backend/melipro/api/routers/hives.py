from fastapi import APIRouter, Depends, HTTPException

from melipro.api.deps import get_repository, hive_or_404
from melipro.schemas.commons import MoveDirection
from melipro.schemas.hive import Hive, HiveIn, HiveUpdate
from melipro.schemas.inspection import Inspection
from melipro.services.storage.repository import HiveNotFoundError, HiveRepository, new_id

router = APIRouter()


@router.get("")
@router.get("/")
def list_hives(repo: HiveRepository = Depends(get_repository)) -> list[Hive]:
    return repo.list_hives()


@router.post("", status_code=201)
@router.post("/", status_code=201)
def create_hive(payload: HiveIn, repo: HiveRepository = Depends(get_repository)) -> Hive:
    return repo.upsert_hive(payload.to_hive(new_id()))


@router.get("/{hive_id}")
def get_hive(hive_id: str, repo: HiveRepository = Depends(get_repository)) -> Hive:
    return hive_or_404(repo, hive_id)


@router.put("/{hive_id}")
def replace_hive(hive_id: str, payload: HiveIn, repo: HiveRepository = Depends(get_repository)) -> Hive:
    # 既存なら置換、無ければこの id で作成
    return repo.upsert_hive(payload.to_hive(hive_id))


@router.patch("/{hive_id}")
def update_hive(hive_id: str, payload: HiveUpdate, repo: HiveRepository = Depends(get_repository)) -> Hive:
    try:
        return repo.update_hive(hive_id, payload.changes())
    except HiveNotFoundError:
        raise HTTPException(status_code=404, detail="hive not found")


@router.delete("/{hive_id}")
def delete_hive(hive_id: str, repo: HiveRepository = Depends(get_repository)):
    try:
        removed = repo.delete_hive(hive_id)
    except HiveNotFoundError:
        raise HTTPException(status_code=404, detail="hive not found")
    return {"ok": True, "inspections_deleted": removed}


@router.post("/{hive_id}/move")
def move_hive(hive_id: str, direction: MoveDirection, repo: HiveRepository = Depends(get_repository)) -> list[Hive]:
    try:
        return repo.move_hive(hive_id, direction)
    except HiveNotFoundError:
        raise HTTPException(status_code=404, detail="hive not found")


@router.get("/{hive_id}/inspections")
def hive_inspections(hive_id: str, repo: HiveRepository = Depends(get_repository)) -> list[Inspection]:
    hive_or_404(repo, hive_id)
    return repo.inspections_for_hive(hive_id)
