from __future__ import annotations

from fastapi import APIRouter

from salesboard.api.dashboard import router as dashboard_router
from salesboard.api.goals import router as goals_router
from salesboard.api.health import router as health_router
from salesboard.api.meetings import router as meetings_router
from salesboard.api.orders import router as orders_router
from salesboard.api.sales import router as sales_router
from salesboard.api.sync import router as sync_router


api_router = APIRouter()
api_router.include_router(health_router)
api_router.include_router(dashboard_router)
api_router.include_router(goals_router)
api_router.include_router(meetings_router)
api_router.include_router(sales_router)
api_router.include_router(orders_router)
api_router.include_router(sync_router)
