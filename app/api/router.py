from fastapi import APIRouter

from app.api.v1 import github, resumes

api_router = APIRouter(prefix="/api/v1")

api_router.include_router(github.router)
api_router.include_router(resumes.router)
