from fastapi import APIRouter

from dashboard.core.http_errors import api_error_from_exception
from dashboard.features.meta.schemas import MetaPayload
from dashboard.features.stats.dependencies import StatsServiceDep

router = APIRouter(tags=["meta"])


@router.get("/meta", response_model=MetaPayload)
async def get_meta_stats(service: StatsServiceDep) -> MetaPayload:
    """Get hero and item meta statistics"""
    try:
        return await service.get_meta_stats()
    except Exception as e:
        raise api_error_from_exception(e, "Failed to load Deadlock meta statistics.")
