"""
Post-related Pydantic models
"""

from pydantic import BaseModel


class Post(BaseModel):
    id: str
    userId: str  # loose reference to a User, not checked
    title: str
    body: str
