"""
Post API routes (read-only)
"""

from typing import List
from fastapi import APIRouter, Depends

from crud_backend.api.dependencies import get_posts_service
from crud_backend.models.post import Post
from crud_backend.services.posts_service import PostsService

router = APIRouter()


@router.get("", response_model=List[Post])
async def list_posts(posts_service: PostsService = Depends(get_posts_service)):
    """List all posts"""
    result = await posts_service.list_posts()
    return result.data
