"""Join-request workflow.

State machine: PENDING -> APPROVED or PENDING -> REJECTED, both terminal.
At most one PENDING request exists per (workspace, user); a new request can be
filed once earlier ones are resolved. Approval creates the MEMBER membership
in the same commit as the status change.
"""

from __future__ import annotations

import logging
import uuid

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from user_service.models.workspace_join_request import WorkspaceJoinRequest
from user_service.models.workspace_member import WorkspaceMember
from user_service.schemas.workspace import JoinRequestResponse, JoinRequestStatus, WorkspaceRole
from user_service.services.errors import (
    AlreadyMemberError,
    InvalidStatusError,
    JoinRequestAlreadyPendingError,
    RequestNotFoundError,
    RequestWorkspaceMismatchError,
    UserNotFoundError,
)
from user_service.services.workspace_access import require_admin_or_owner
from user_service.services.workspace_views import (
    to_join_request_response,
    to_join_request_responses,
)
from user_service.services.workspaces import get_active_workspace_or_raise
from user_service.store import join_requests, users, workspace_members

logger = logging.getLogger(__name__)

_PENDING = JoinRequestStatus.PENDING.value


def create_join_request(
    db: Session, workspace_id: uuid.UUID, user_id: uuid.UUID
) -> JoinRequestResponse:
    """File a PENDING request for user_id to join workspace_id."""
    logger.info("Creating join request: workspace_id=%s, user_id=%s", workspace_id, user_id)

    if users.find_active_by_id(db, user_id) is None:
        logger.warning("User not found: %s", user_id)
        raise UserNotFoundError()
    get_active_workspace_or_raise(db, workspace_id)

    if workspace_members.exists_by_workspace_id_and_user_id(db, workspace_id, user_id):
        logger.warning(
            "User is already a member of workspace: workspace_id=%s, user_id=%s",
            workspace_id,
            user_id,
        )
        raise AlreadyMemberError()

    if join_requests.find_by_workspace_id_and_user_id_and_status(
        db, workspace_id, user_id, _PENDING
    ):
        logger.warning(
            "Pending join request already exists: workspace_id=%s, user_id=%s",
            workspace_id,
            user_id,
        )
        raise JoinRequestAlreadyPendingError()

    request = WorkspaceJoinRequest(
        join_request_id=uuid.uuid4(),
        workspace_id=workspace_id,
        user_id=user_id,
        status=_PENDING,
    )
    join_requests.save(db, request)
    try:
        db.commit()
    except IntegrityError as exc:
        # concurrent request for the same pair won the partial unique index
        db.rollback()
        logger.warning(
            "Pending join request already exists: workspace_id=%s, user_id=%s",
            workspace_id,
            user_id,
        )
        raise JoinRequestAlreadyPendingError() from exc

    db.refresh(request)
    logger.info("Join request created: request_id=%s", request.join_request_id)
    return to_join_request_response(db, request)


def _resolve(db: Session, request: WorkspaceJoinRequest, status: JoinRequestStatus) -> None:
    """Apply a terminal transition and commit. APPROVED adds a MEMBER membership."""
    if status == JoinRequestStatus.APPROVED:
        if workspace_members.exists_by_workspace_id_and_user_id(
            db, request.workspace_id, request.user_id
        ):
            logger.warning(
                "User is already a member of workspace: workspace_id=%s, user_id=%s",
                request.workspace_id,
                request.user_id,
            )
            raise AlreadyMemberError()
        workspace_members.save(
            db,
            WorkspaceMember(
                id=uuid.uuid4(),
                workspace_id=request.workspace_id,
                user_id=request.user_id,
                role=WorkspaceRole.MEMBER.value,
                is_default=False,
                is_active=True,
            ),
        )

    request.status = status.value
    try:
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        logger.warning(
            "Membership already exists: workspace_id=%s, user_id=%s",
            request.workspace_id,
            request.user_id,
        )
        raise AlreadyMemberError() from exc
    db.refresh(request)
    logger.info(
        "Join request %s: request_id=%s, workspace_id=%s, user_id=%s",
        status.value.lower(),
        request.join_request_id,
        request.workspace_id,
        request.user_id,
    )


def _get_pending_or_raise(
    db: Session, workspace_id: uuid.UUID, user_id: uuid.UUID
) -> WorkspaceJoinRequest:
    request = join_requests.find_by_workspace_id_and_user_id_and_status(
        db, workspace_id, user_id, _PENDING, for_update=True
    )
    if request is None:
        logger.warning(
            "Pending join request not found: workspace_id=%s, user_id=%s", workspace_id, user_id
        )
        raise RequestNotFoundError()
    return request


def approve_join_request(
    db: Session, workspace_id: uuid.UUID, user_id: uuid.UUID, responder_id: uuid.UUID
) -> JoinRequestResponse:
    """Approve the user's PENDING request (OWNER or ADMIN) and add them as MEMBER."""
    logger.info(
        "Approving join request: workspace_id=%s, user_id=%s, responder=%s",
        workspace_id,
        user_id,
        responder_id,
    )
    require_admin_or_owner(db, workspace_id, responder_id, for_update=True)
    get_active_workspace_or_raise(db, workspace_id)
    request = _get_pending_or_raise(db, workspace_id, user_id)
    _resolve(db, request, JoinRequestStatus.APPROVED)
    return to_join_request_response(db, request)


def reject_join_request(
    db: Session, workspace_id: uuid.UUID, user_id: uuid.UUID, responder_id: uuid.UUID
) -> JoinRequestResponse:
    """Reject the user's PENDING request (OWNER or ADMIN)."""
    logger.info(
        "Rejecting join request: workspace_id=%s, user_id=%s, responder=%s",
        workspace_id,
        user_id,
        responder_id,
    )
    require_admin_or_owner(db, workspace_id, responder_id, for_update=True)
    get_active_workspace_or_raise(db, workspace_id)
    request = _get_pending_or_raise(db, workspace_id, user_id)
    _resolve(db, request, JoinRequestStatus.REJECTED)
    return to_join_request_response(db, request)


def update_join_request(
    db: Session,
    workspace_id: uuid.UUID,
    request_id: uuid.UUID,
    new_status: str | JoinRequestStatus,
    responder_id: uuid.UUID,
) -> JoinRequestResponse:
    """Approve or reject a request addressed by its id (OWNER or ADMIN)."""
    logger.info(
        "Updating join request: workspace_id=%s, request_id=%s, status=%s, responder=%s",
        workspace_id,
        request_id,
        new_status,
        responder_id,
    )
    require_admin_or_owner(db, workspace_id, responder_id, for_update=True)
    get_active_workspace_or_raise(db, workspace_id)

    status = JoinRequestStatus.parse(new_status)
    if status == JoinRequestStatus.PENDING:
        raise InvalidStatusError("Join request can only be approved or rejected")

    request = join_requests.find_by_id(db, request_id, for_update=True)
    if request is None:
        logger.warning("Join request not found: %s", request_id)
        raise RequestNotFoundError("Join request not found")
    if request.workspace_id != workspace_id:
        logger.warning(
            "Join request does not belong to workspace: request_id=%s, workspace_id=%s",
            request_id,
            workspace_id,
        )
        raise RequestWorkspaceMismatchError()
    if request.status != _PENDING:
        logger.warning(
            "Join request already resolved: request_id=%s, status=%s", request_id, request.status
        )
        raise RequestNotFoundError()

    _resolve(db, request, status)
    return to_join_request_response(db, request)


def get_join_requests(
    db: Session,
    workspace_id: uuid.UUID,
    requester_id: uuid.UUID,
    status: str | JoinRequestStatus | None = None,
) -> list[JoinRequestResponse]:
    """List the workspace's join requests (OWNER or ADMIN), newest first."""
    logger.debug("Fetching join requests: workspace_id=%s, status=%s", workspace_id, status)
    require_admin_or_owner(db, workspace_id, requester_id)
    get_active_workspace_or_raise(db, workspace_id)

    status_filter = JoinRequestStatus.parse(status).value if status else None
    rows = join_requests.find_by_workspace_id(db, workspace_id, status_filter)
    return to_join_request_responses(db, rows)
