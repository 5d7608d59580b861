from fastapi import APIRouter

from app.api.notifications.router.notification_router import router as notification_router

router = APIRouter(
    tags=["API - Notifications"]
)

router.include_router(notification_router)
