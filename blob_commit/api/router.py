from fastapi import APIRouter

from blob_commit.api.v1 import commits

api_router = APIRouter(prefix="/api/v1")

api_router.include_router(commits.router)
