from fastapi import APIRouter
from travelmart.api.v1.routes.auth import router as auth_router
from travelmart.api.v1.routes.catalog import router as catalog_router
from travelmart.api.v1.routes.reservations import router as reservations_router
from travelmart.api.v1.routes.provider import router as provider_router
from travelmart.api.v1.routes.admin import router as admin_router
from travelmart.api.v1.routes.notifications import router as notifications_router
from travelmart.api.v1.routes.provider_requests import router as provider_requests_router

api_router = APIRouter(prefix="/api/v1")
api_router.include_router(auth_router)
api_router.include_router(catalog_router)
api_router.include_router(reservations_router)
api_router.include_router(provider_router)
api_router.include_router(admin_router)
api_router.include_router(notifications_router)
api_router.include_router(provider_requests_router)
