"""User data model.

Users are exposed to the analytics filter UI as "employees"; the password
hash owned by the authentication layer is never loaded here.
"""

from typing import Literal, Optional

from pydantic import Field

from flowchain.models.base import BaseDataModel

UserRole = Literal["project_manager", "team_member", "finance", "admin"]


class User(BaseDataModel):
    """Represents an application user.

    Attributes:
        id: Unique user identifier
        name: Display name
        email: Optional email address
        role: Optional role
    """

    id: str = Field(..., min_length=1, description="Unique user identifier")
    name: str = Field(..., min_length=1, description="Display name")
    email: Optional[str] = Field(None, description="Email address")
    role: Optional[UserRole] = Field(None, description="Role")
