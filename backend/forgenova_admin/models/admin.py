"""Request models for the admin endpoints.

Field names follow the JSON the admin dashboard already sends (camelCase
where the pages use it, e.g. ``userId``).
"""

from typing import Any, Dict, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class SettingUpdate(BaseModel):
    """POST /api/admin-settings"""

    key: str = Field(..., min_length=1, max_length=200)
    value: Any


class FeatureFlagUpdate(BaseModel):
    """POST /api/admin-feature-flags"""

    id: str
    enabled: bool


class RoleUpdate(BaseModel):
    """POST /api/admin-users-roles -- the role value is checked by the manager."""

    userId: str
    role: str


class EmailSettingsUpdate(BaseModel):
    """POST /api/admin-email-settings -- any settings columns are accepted."""

    model_config = ConfigDict(extra="allow")

    notification_signups: Optional[bool] = None
    from_name: Optional[str] = None
    from_email: Optional[str] = None
    reply_to: Optional[str] = None

    @field_validator("notification_signups")
    @classmethod
    def signups_not_null(cls, v: Optional[bool]) -> bool:
        # column is NOT NULL; omit the field to leave it unchanged
        if v is None:
            raise ValueError("notification_signups must be true or false")
        return v

    def fields(self) -> Dict[str, Any]:
        return self.model_dump(exclude_unset=True)


class APIKeyCreate(BaseModel):
    """POST /api/admin-api-keys"""

    name: str = Field(..., min_length=1, max_length=200)
    environment: Literal["production", "test"] = "test"


class IdRequest(BaseModel):
    """Body carrying only a target id (DELETE bodies, revoke)."""

    id: str


class UserIdRequest(BaseModel):
    """Body for the user lifecycle endpoints."""

    userId: str


class WorkspaceUpdate(BaseModel):
    """PUT /api/admin-workspaces"""

    id: str
    name: Optional[str] = Field(None, min_length=1, max_length=200)
    description: Optional[str] = None

    def patch(self) -> Dict[str, Any]:
        return self.model_dump(exclude_unset=True, exclude={"id"})


class TemplateCreate(BaseModel):
    """POST /api/admin-templates"""

    name: str = Field(..., min_length=1, max_length=200)
    description: Optional[str] = None


class TemplateUpdate(BaseModel):
    """PUT /api/admin-templates"""

    id: str
    name: Optional[str] = Field(None, min_length=1, max_length=200)
    description: Optional[str] = None

    def patch(self) -> Dict[str, Any]:
        return self.model_dump(exclude_unset=True, exclude={"id"})


class LoginRequest(BaseModel):
    """POST /api/admin-login"""

    email: str = Field(..., min_length=3, max_length=254)
    password: str = Field(..., min_length=1)


class SignupNotification(BaseModel):
    """POST /api/admin-notification"""

    type: str
    userData: Dict[str, Any] = Field(default_factory=dict)


class ProfileCreate(BaseModel):
    """POST /api/create-profile"""

    user_id: str = Field(..., min_length=1)
    full_name: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    company: Optional[str] = None
    position: Optional[str] = None
    email: Optional[str] = None
