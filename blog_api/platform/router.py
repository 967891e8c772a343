from fastapi import APIRouter

from blog_api.platform.healthcheck import router as healthcheck

api_router = APIRouter()
api_router.include_router(healthcheck.router, tags=['healthcheck'])
