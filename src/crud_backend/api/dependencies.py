"""
Request-scoped accessors for the services bound at startup
"""

from fastapi import Request

from crud_backend.database.factory import Stores
from crud_backend.services.posts_service import PostsService
from crud_backend.services.users_service import UsersService


def get_users_service(request: Request) -> UsersService:
    return request.app.state.users_service


def get_posts_service(request: Request) -> PostsService:
    return request.app.state.posts_service


def get_stores(request: Request) -> Stores:
    return request.app.state.stores
