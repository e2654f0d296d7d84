from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import logging

from melipro.api.routers import hives, inspections, dashboard, export, report
from melipro.config import settings
from melipro.db import SessionLocal, init_db
from melipro.services.storage.blobstore import SqlBlobStore
from melipro.services.storage.repository import HiveRepository

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(title="MeliPro API", version="0.1.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/health")
def health():
    return {"ok": True}


# 初回起動時にDBスキーマを作成（必要ならデモデータ投入）
@app.on_event("startup")
def on_startup():
    init_db()
    if settings.SEED_DEMO_DATA:
        db = SessionLocal()
        try:
            HiveRepository(SqlBlobStore(db)).seed_demo_data()
        finally:
            db.close()


app.include_router(hives.router,       prefix="/hives",       tags=["hives"])
app.include_router(inspections.router, prefix="/inspections", tags=["inspections"])
app.include_router(dashboard.router,   prefix="/dashboard",   tags=["dashboard"])
app.include_router(export.router,      prefix="/export",      tags=["export"])
app.include_router(report.router,      prefix="/report",      tags=["report"])
