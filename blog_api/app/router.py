from fastapi import APIRouter

from blog_api.app.github.router import router as github_router
from blog_api.app.posts.router import router as posts_router

# Create the root API router
api_router = APIRouter()

# Include domain routers
api_router.include_router(github_router, tags=['github'])
api_router.include_router(posts_router, tags=['posts'])
