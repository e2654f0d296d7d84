from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import StaticPool
from pathlib import Path
import logging

# モデル定義側の Base（melipro.models.base）を利用してメタデータを統一
from melipro.models.base import Base
from melipro.config import settings

logger = logging.getLogger(__name__)

# 1) DATABASE_URL が指定されていれば優先（例: postgresql+psycopg://...）
# 2) それ以外は SQLite ファイル（data/app.db）
SQLALCHEMY_DATABASE_URL = settings.DATABASE_URL
_is_sqlite = SQLALCHEMY_DATABASE_URL.startswith("sqlite")
_is_memory = _is_sqlite and (
    SQLALCHEMY_DATABASE_URL in ("sqlite://", "sqlite:///") or ":memory:" in SQLALCHEMY_DATABASE_URL
)

if _is_sqlite and not _is_memory:
    # ディレクトリ作成（存在しない場合）
    db_file = SQLALCHEMY_DATABASE_URL.split("sqlite:///", 1)[-1]
    Path(db_file).parent.mkdir(parents=True, exist_ok=True)

_connect_args = {"check_same_thread": False} if _is_sqlite else {}
# in-memory SQLite は接続ごとに別DBになるため単一接続を共有
_engine_kwargs = {"poolclass": StaticPool} if _is_memory else {}

engine = create_engine(
    SQLALCHEMY_DATABASE_URL,
    connect_args=_connect_args,
    **_engine_kwargs,
)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def init_db() -> None:
    # モデルモジュールを明示 import してメタデータ登録を確実化
    import melipro.models.blob  # noqa: F401
    Base.metadata.create_all(bind=engine)
    logger.info("database ready at %s", engine.url.render_as_string(hide_password=True))


def get_db():
    db: Session = SessionLocal()
    try:
        yield db
    finally:
        db.close()
