"""Callable operations.

Each operation takes a JSON body and answers either with its result or
with a structured error `{"error": <category>, "message": <text>}`. Bodies
are read leniently so that a malformed payload is reported in that shape
too, after the caller has been identified.
"""

from typing import Any

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse

from playerpath.core.logging import get_logger
from playerpath.domain.services.callable_error import CallableError, ErrorCategory
from playerpath.domain.services.invitation_notifier import InvitationNotifier
from playerpath.infrastructure.api.dependencies import OptionalUser, get_notifier
from playerpath.infrastructure.api.schemas import (
    CallableErrorResponse,
    ResendInvitationRequest,
    ResendInvitationResponse,
)

logger = get_logger(__name__)

router = APIRouter()

ERROR_STATUS_CODES = {
    ErrorCategory.UNAUTHENTICATED: status.HTTP_401_UNAUTHORIZED,
    ErrorCategory.INVALID_ARGUMENT: status.HTTP_400_BAD_REQUEST,
    ErrorCategory.PERMISSION_DENIED: status.HTTP_403_FORBIDDEN,
    ErrorCategory.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCategory.INTERNAL: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def callable_error_response(error: CallableError) -> JSONResponse:
    return JSONResponse(
        status_code=ERROR_STATUS_CODES[error.category],
        content=error.to_dict(),
    )


async def read_json_body(request: Request) -> dict[str, Any]:
    """Return the JSON object body, or an empty dict if there is none."""
    try:
        body = await request.json()
    except ValueError:
        return {}
    return body if isinstance(body, dict) else {}


def _string_argument(body: dict[str, Any], name: str) -> str | None:
    value = body.get(name)
    return value if isinstance(value, str) else None


@router.post(
    "/resendInvitationEmail",
    response_model=ResendInvitationResponse,
    responses={
        400: {"model": CallableErrorResponse},
        401: {"model": CallableErrorResponse},
        403: {"model": CallableErrorResponse},
        404: {"model": CallableErrorResponse},
        500: {"model": CallableErrorResponse},
    },
    openapi_extra={
        "requestBody": {
            "content": {
                "application/json": {
                    "schema": ResendInvitationRequest.model_json_schema(by_alias=True)
                }
            }
        }
    },
)
async def resend_invitation_email(
    request: Request,
    current_user: OptionalUser,
    notifier: InvitationNotifier = Depends(get_notifier),
) -> ResendInvitationResponse | JSONResponse:
    """Resend an invitation email. Only the invitation's creator may call this."""
    caller_uid = current_user.uid if current_user is not None else None
    invitation_id = _string_argument(await read_json_body(request), "invitationId")

    try:
        result = await notifier.resend_invitation_email(caller_uid, invitation_id)
    except CallableError as e:
        logger.info(
            "Resend invitation email rejected",
            invitation_id=invitation_id,
            category=e.category.value,
            error_message=e.message,
        )
        return callable_error_response(e)
    except Exception as e:
        logger.error("Error resending invitation email", invitation_id=invitation_id, error=str(e))
        return callable_error_response(
            CallableError(ErrorCategory.INTERNAL, "Failed to resend email")
        )

    return ResendInvitationResponse(success=result.success, message=result.message)
