"""API router aggregator."""

from fastapi import APIRouter

from lexora.api.v1.prompts import router as prompts_router
from lexora.api.v1.share import router as share_router
from lexora.api.v1.summaries import router as summaries_router

router = APIRouter(prefix="/api")
router.include_router(summaries_router)
router.include_router(prompts_router)
router.include_router(share_router)
