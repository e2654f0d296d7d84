# backend/melipro/services/dates.py
import re
from datetime import datetime, timezone
from typing import Optional

MS_PER_DAY = 1000 * 60 * 60 * 24

# 拡張形式のみ（YYYY-MM-DD[THH:MM[:SS[.fff]][±HH:MM]]）。基本形式・週日付は不正扱い
_ISO_EXTENDED = re.compile(
    r"\d{4}-\d{2}-\d{2}"
    r"(?:[T ]\d{2}:\d{2}(?::\d{2}(?:\.(?:\d{3}|\d{6}))?)?"
    r"(?:[+-]\d{2}:\d{2})?)?"
)


def parse_date(value: Optional[str]) -> Optional[datetime]:
    """
    ISO 日付/日時文字列を UTC aware datetime に変換。
    - "YYYY-MM-DD" は UTC 0時
    - タイムゾーン無しの日時は UTC とみなす
    - 空・不正な値は None（例外は投げない）
    """
    if not value or not isinstance(value, str):
        return None
    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    if not _ISO_EXTENDED.fullmatch(text):
        return None
    try:
        dt = datetime.fromisoformat(text)
    except ValueError:
        return None
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt


def format_date_br(value: Optional[str]) -> str:
    dt = parse_date(value)
    return dt.strftime("%d/%m/%Y") if dt else "-"


def utcnow() -> datetime:
    return datetime.now(timezone.utc)
