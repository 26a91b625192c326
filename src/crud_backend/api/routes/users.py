"""
User API routes

Validation failures surface as 400 through the error handlers, absent
ids as 404. Store faults are left to the terminal 500 handler.
"""

from typing import Any, List
from fastapi import APIRouter, Body, Depends, HTTPException, Response

from crud_backend.api.dependencies import get_users_service
from crud_backend.models.user import User
from crud_backend.services.base_service import ServiceResult, VALIDATION_ERROR, RESOURCE_NOT_FOUND
from crud_backend.services.users_service import UsersService
from crud_backend.utils.error_handling import PayloadValidationError

router = APIRouter()


def _raise_for_failure(result: ServiceResult) -> None:
    if result.success:
        return
    if result.error_type == VALIDATION_ERROR:
        raise PayloadValidationError(result.details)
    if result.error_type == RESOURCE_NOT_FOUND:
        raise HTTPException(status_code=404, detail="Not found")
    raise HTTPException(status_code=500, detail=result.error)


@router.get("", response_model=List[User])
async def list_users(users_service: UsersService = Depends(get_users_service)):
    """List all users"""
    result = await users_service.list_users()
    return result.data


@router.get("/{user_id}", response_model=User)
async def get_user(user_id: str, users_service: UsersService = Depends(get_users_service)):
    """Get a user by id"""
    result = await users_service.get_user(user_id)
    _raise_for_failure(result)
    return result.data[0]


@router.post("", response_model=User, status_code=201)
async def create_user(
    payload: Any = Body(...),
    users_service: UsersService = Depends(get_users_service)
):
    """Create a user from {email, name}"""
    result = await users_service.create_user(payload)
    _raise_for_failure(result)
    return result.data[0]


@router.patch("/{user_id}", response_model=User)
async def update_user(
    user_id: str,
    payload: Any = Body(...),
    users_service: UsersService = Depends(get_users_service)
):
    """Partially update a user; omitted fields keep their values"""
    result = await users_service.update_user(user_id, payload)
    _raise_for_failure(result)
    return result.data[0]


@router.delete("/{user_id}", status_code=204)
async def delete_user(user_id: str, users_service: UsersService = Depends(get_users_service)):
    """Delete a user; a second delete of the same id is a 404"""
    result = await users_service.delete_user(user_id)
    _raise_for_failure(result)
    return Response(status_code=204)
