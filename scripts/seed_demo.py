# scripts/seed_demo.py
# 設定済みDB（DATABASE_URL）にデモ用の巣箱と管理記録を投入
import logging

from melipro.db import SessionLocal, init_db
from melipro.services.storage.blobstore import SqlBlobStore
from melipro.services.storage.repository import HiveRepository

logging.basicConfig(level=logging.INFO)

init_db()
db = SessionLocal()
try:
    seeded = HiveRepository(SqlBlobStore(db)).seed_demo_data()
finally:
    db.close()
print("seeded" if seeded else "hive data already present, nothing to do")
