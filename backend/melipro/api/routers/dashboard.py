from fastapi import APIRouter, Depends

from melipro.api.deps import get_repository
from melipro.schemas.dashboard import DashboardOut
from melipro.services.analytics.dashboard import build_dashboard
from melipro.services.storage.repository import HiveRepository

router = APIRouter()


@router.get("")
@router.get("/")
def dashboard(repo: HiveRepository = Depends(get_repository)) -> DashboardOut:
    # 毎回全件から再計算（キャッシュなし）
    return build_dashboard(repo.list_hives(), repo.list_inspections())
