from fastapi import APIRouter

from savrdeals.api.routes import badges, deals, health, notifications, rewards

api_router = APIRouter()

api_router.include_router(health.router, tags=["health"])
api_router.include_router(badges.router, prefix="/badges", tags=["badges"])
api_router.include_router(rewards.router, prefix="/users", tags=["rewards"])
api_router.include_router(deals.router, prefix="/deals", tags=["deals"])
api_router.include_router(notifications.router, tags=["notifications"])
