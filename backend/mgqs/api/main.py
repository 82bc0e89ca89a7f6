from fastapi import APIRouter

from mgqs.api.routes import generate, utils

api_router = APIRouter()
api_router.include_router(utils.router, tags=["utils"])
api_router.include_router(generate.router, prefix="/generate", tags=["generate"])
