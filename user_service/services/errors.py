"""Domain errors for users, workspaces, membership and join requests.

Each error carries the HTTP status the API layer maps it to. None of them are
retried: they describe client or state errors, not transient faults.
"""

from __future__ import annotations


class WorkspaceServiceError(Exception):
    """Base class for domain errors surfaced to callers."""

    status_code: int = 400
    default_detail: str = "Request could not be processed"

    def __init__(self, detail: str | None = None) -> None:
        self.detail = detail or self.default_detail
        super().__init__(self.detail)


# ── Not found (404) ──────────────────────────────────────────────────


class UserNotFoundError(WorkspaceServiceError):
    status_code = 404
    default_detail = "User not found"


class ProfileNotFoundError(WorkspaceServiceError):
    status_code = 404
    default_detail = "Profile not found"


class WorkspaceNotFoundError(WorkspaceServiceError):
    status_code = 404
    default_detail = "Workspace not found"


class MemberNotFoundError(WorkspaceServiceError):
    status_code = 404
    default_detail = "Member not found"


class RequestNotFoundError(WorkspaceServiceError):
    """No join request in a state that allows the requested transition."""

    status_code = 404
    default_detail = "Pending join request not found"


# ── Authorization (403) ──────────────────────────────────────────────


class NotAMemberError(WorkspaceServiceError):
    status_code = 403
    default_detail = "User is not a member of this workspace"


class ForbiddenError(WorkspaceServiceError):
    """Caller is a member but lacks the required role."""

    status_code = 403
    default_detail = "Insufficient workspace role for this action"


class CannotRemoveOwnerError(WorkspaceServiceError):
    status_code = 403
    default_detail = "Cannot remove workspace owner"


class CannotRemoveSelfError(WorkspaceServiceError):
    status_code = 403
    default_detail = "Cannot remove yourself"


class CannotDemoteOwnerError(WorkspaceServiceError):
    status_code = 403
    default_detail = "Cannot change the owner's role; transfer ownership instead"


# ── Conflicts (409) ──────────────────────────────────────────────────


class AlreadyMemberError(WorkspaceServiceError):
    status_code = 409
    default_detail = "User is already a member of this workspace"


class JoinRequestAlreadyPendingError(WorkspaceServiceError):
    status_code = 409
    default_detail = "A pending join request already exists for this workspace"


class EmailAlreadyExistsError(WorkspaceServiceError):
    status_code = 409
    default_detail = "Email already exists"


# ── Bad input (400) ──────────────────────────────────────────────────


class MemberWorkspaceMismatchError(WorkspaceServiceError):
    default_detail = "Member does not belong to this workspace"


class RequestWorkspaceMismatchError(WorkspaceServiceError):
    default_detail = "Join request does not belong to this workspace"


class InvalidRoleError(WorkspaceServiceError):
    default_detail = "Invalid workspace role"


class InvalidStatusError(WorkspaceServiceError):
    default_detail = "Invalid join request status"


class PasswordTooLongError(WorkspaceServiceError):
    default_detail = "Password must be at most 72 bytes"
