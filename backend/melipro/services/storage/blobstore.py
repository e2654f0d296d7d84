# backend/melipro/services/storage/blobstore.py
from typing import Optional, Protocol

from sqlalchemy.orm import Session

from melipro.models.blob import StoredBlob


class BlobStore(Protocol):
    def get(self, key: str) -> Optional[str]: ...

    def put(self, key: str, value: str) -> None: ...


class SqlBlobStore:
    """blobs テーブル（key → JSON 文字列）"""

    def __init__(self, db: Session):
        self.db = db

    def get(self, key: str) -> Optional[str]:
        row = self.db.get(StoredBlob, key)
        return row.value if row else None

    def put(self, key: str, value: str) -> None:
        row = self.db.get(StoredBlob, key)
        if row is None:
            row = StoredBlob(key=key, value=value)
        else:
            row.value = value
        self.db.add(row)
        self.db.commit()


class MemoryBlobStore:
    def __init__(self, initial: Optional[dict] = None):
        self.data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self.data.get(key)

    def put(self, key: str, value: str) -> None:
        self.data[key] = value
