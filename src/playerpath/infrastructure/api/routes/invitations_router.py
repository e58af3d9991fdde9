"""Invitation API routes.

Lets an athlete create coach invitations and read back their delivery
status. Creating an invitation publishes the record-created event that
triggers the invitation email.
"""

import uuid
from datetime import datetime, timezone

from fastapi import APIRouter, BackgroundTasks, Depends, Request, status
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from playerpath.core.config import get_settings
from playerpath.core.hooks import HookRegistry
from playerpath.core.logging import get_logger
from playerpath.domain.entities.hook_context import HookContext
from playerpath.domain.entities.invitation import CoachInvitation
from playerpath.infrastructure.api.dependencies import (
    AuthenticatedUser,
    get_db_session,
    get_hook_registry,
)
from playerpath.infrastructure.api.schemas import (
    InvitationCreateRequest,
    InvitationListResponse,
    InvitationResponse,
)
from playerpath.infrastructure.hooks import publish_record_created
from playerpath.infrastructure.persistence.models import CoachInvitationModel
from playerpath.infrastructure.persistence.repositories import InvitationRepository

logger = get_logger(__name__)

router = APIRouter()


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=InvitationResponse,
    response_model_exclude_none=True,
)
async def create_invitation(
    request: InvitationCreateRequest,
    current_user: AuthenticatedUser,
    background_tasks: BackgroundTasks,
    http_request: Request,
    registry: HookRegistry = Depends(get_hook_registry),
    session: AsyncSession = Depends(get_db_session),
) -> InvitationResponse:
    """Create a coach invitation owned by the caller.

    The invitation email is sent asynchronously once the document is
    committed; poll the invitation to observe `emailSent`.
    """
    invitation = CoachInvitation(
        id=str(uuid.uuid4()),
        athlete_id=current_user.uid,
        athlete_name=request.athlete_name,
        coach_email=str(request.coach_email),
        folder_id=request.folder_id,
        folder_name=request.folder_name,
        permissions=request.permissions.to_entity(),
        created_at=datetime.now(timezone.utc),
    )

    await InvitationRepository(session).create(CoachInvitationModel.from_entity(invitation))
    await session.commit()

    logger.info(
        "Invitation created",
        invitation_id=invitation.id,
        athlete_id=current_user.uid,
        coach_email=invitation.coach_email,
    )

    background_tasks.add_task(
        publish_record_created,
        registry,
        get_settings().invitations_collection,
        invitation.to_document(),
        HookContext(app=http_request.app, user_id=current_user.uid),
    )

    return InvitationResponse.from_entity(invitation)


@router.get(
    "",
    response_model=InvitationListResponse,
    response_model_exclude_none=True,
)
async def list_invitations(
    current_user: AuthenticatedUser,
    session: AsyncSession = Depends(get_db_session),
) -> InvitationListResponse:
    """List the caller's invitations, newest first."""
    models = await InvitationRepository(session).list_by_athlete(current_user.uid)
    invitations = [InvitationResponse.from_entity(model.to_entity()) for model in models]
    return InvitationListResponse(invitations=invitations, total=len(invitations))


@router.get(
    "/{invitation_id}",
    response_model=InvitationResponse,
    response_model_exclude_none=True,
    responses={404: {"description": "Invitation not found"}},
)
async def get_invitation(
    invitation_id: str,
    current_user: AuthenticatedUser,
    session: AsyncSession = Depends(get_db_session),
) -> InvitationResponse | JSONResponse:
    """Get one of the caller's invitations, including delivery status."""
    model = await InvitationRepository(session).get_by_id(invitation_id)
    if model is None or model.athlete_id != current_user.uid:
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND,
            content={"error": "not-found", "message": "Invitation not found"},
        )
    return InvitationResponse.from_entity(model.to_entity())
