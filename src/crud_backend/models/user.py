"""
User-related Pydantic models
"""

from typing import Annotated, Optional
from email_validator import EmailNotValidError, validate_email
from pydantic import AfterValidator, BaseModel, Field, field_validator


def _check_email(value: str) -> str:
    # Format check only; the address is stored exactly as the client sent it
    try:
        validate_email(value, check_deliverability=False, test_environment=True)
    except EmailNotValidError as e:
        raise ValueError(f"value is not a valid email address: {e}")
    return value


EmailAddress = Annotated[str, AfterValidator(_check_email)]


class User(BaseModel):
    id: str
    email: str
    name: str


class UserCreate(BaseModel):
    """Payload accepted by POST /v1/users. Unknown keys, including id, are dropped."""
    email: EmailAddress
    name: str = Field(..., min_length=1)


class UserUpdate(BaseModel):
    """Partial update: omitted fields are left as they are"""
    email: Optional[EmailAddress] = None
    name: Optional[str] = Field(None, min_length=1)

    @field_validator("email", "name", mode="before")
    @classmethod
    def reject_null(cls, value):
        # Runs only for supplied keys; omission is fine, an explicit null is not
        if value is None:
            raise ValueError("may be omitted but not null")
        return value
