from fastapi import APIRouter

from .categories import router as categories_router
from .months import router as months_router
from .entries import router as entries_router
from .summary import router as summary_router
from .transactions import router as transactions_router

api_router = APIRouter()


@api_router.get("/health")
def health_check():
    """Health check endpoint."""
    return {"status": "ok"}


api_router.include_router(categories_router, prefix="/categories", tags=["categories"])
api_router.include_router(months_router, prefix="/months", tags=["months"])
api_router.include_router(entries_router, prefix="/months/{month_id}/entries", tags=["entries"])
api_router.include_router(summary_router, prefix="/months/{month_id}/summary", tags=["summary"])
api_router.include_router(transactions_router, prefix="/transactions", tags=["transactions"])
