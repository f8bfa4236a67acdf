"""SQLAlchemy models."""

from user_service.models.image import Image
from user_service.models.user import User
from user_service.models.user_profile import UserProfile
from user_service.models.workspace import Workspace
from user_service.models.workspace_join_request import WorkspaceJoinRequest
from user_service.models.workspace_member import WorkspaceMember

__all__ = [
    "Image",
    "User",
    "UserProfile",
    "Workspace",
    "WorkspaceJoinRequest",
    "WorkspaceMember",
]
