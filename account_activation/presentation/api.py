from fastapi import APIRouter

from account_activation.presentation.routers.v1.accounts import (
    router as accounts_router,
)
from account_activation.presentation.routes.health import router as health_router

api = APIRouter()
api.include_router(health_router)

# Add all v1 routers here
routers = (accounts_router,)
for router in routers:
    api.include_router(router, prefix="/v1")
