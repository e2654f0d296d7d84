"""
MeliPro 設定。環境変数はすべてここで読む。
"""

from __future__ import annotations

import os
from pathlib import Path


def _default_database_url() -> str:
    # コンテナ内は /app/data、ローカル開発は repo 直下の data
    container_data = Path("/app/data")
    if container_data.exists():
        data_dir = container_data
    else:
        # backend/melipro/config.py → ../../.. = <repo root>
        data_dir = Path(__file__).resolve().parents[2] / "data"
    return f"sqlite:///{data_dir / 'app.db'}"


def _env_flag(name: str, default: bool = False) -> bool:
    raw = os.environ.get(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


class Settings:
    """環境変数から読むアプリ設定"""

    # データベース
    DATABASE_URL: str = os.environ.get("DATABASE_URL") or _default_database_url()

    # ログ
    LOG_LEVEL: str = os.environ.get("LOG_LEVEL", "INFO").upper()

    # 初回起動時、巣箱データが空ならデモデータを投入
    SEED_DEMO_DATA: bool = _env_flag("SEED_DEMO_DATA")

    # CORS
    CORS_ORIGINS: list[str] = [
        o.strip() for o in os.environ.get("CORS_ORIGINS", "*").split(",") if o.strip()
    ]


settings = Settings()
