from fastapi import Depends, HTTPException
from sqlalchemy.orm import Session

from melipro.db import get_db
from melipro.schemas.hive import Hive
from melipro.services.storage.blobstore import SqlBlobStore
from melipro.services.storage.repository import HiveNotFoundError, HiveRepository


def get_repository(db: Session = Depends(get_db)) -> HiveRepository:
    return HiveRepository(SqlBlobStore(db))


def hive_or_404(repo: HiveRepository, hive_id: str) -> Hive:
    try:
        return repo.require_hive(hive_id)
    except HiveNotFoundError:
        raise HTTPException(status_code=404, detail="hive not found")
