"""Login API endpoints.

Each endpoint maps one presentation-layer action onto the login controller
and returns the resulting state snapshot.
"""

import asyncio

from fastapi import APIRouter, Depends, Request, Response, status

from loginguard.api.models import FlagUpdate, LoginStateResponse, TextFieldUpdate
from loginguard.core import ControllerUnavailableError, get_logger
from loginguard.login import LoginController

logger = get_logger(__name__)
router = APIRouter(prefix="/login", tags=["login"])


def get_login_controller(request: Request) -> LoginController:
    """Dependency returning the controller started by the app lifespan."""
    controller = getattr(request.app.state, "login_controller", None)
    if controller is None or not controller.started:
        raise ControllerUnavailableError()
    return controller


@router.get("/state", response_model=LoginStateResponse, response_model_by_alias=True)
async def get_state(
    controller: LoginController = Depends(get_login_controller),
) -> LoginStateResponse:
    """Current login state snapshot."""
    return LoginStateResponse.from_state(controller.state)


@router.put("/username", response_model=LoginStateResponse, response_model_by_alias=True)
async def update_username(
    body: TextFieldUpdate,
    controller: LoginController = Depends(get_login_controller),
) -> LoginStateResponse:
    controller.on_user_name_change(body.value)
    return LoginStateResponse.from_state(controller.state)


@router.put("/password", response_model=LoginStateResponse, response_model_by_alias=True)
async def update_password(
    body: TextFieldUpdate,
    controller: LoginController = Depends(get_login_controller),
) -> LoginStateResponse:
    controller.on_password_change(body.value)
    return LoginStateResponse.from_state(controller.state)


@router.put("/remember-me", response_model=LoginStateResponse, response_model_by_alias=True)
async def update_remember_me(
    body: FlagUpdate,
    controller: LoginController = Depends(get_login_controller),
) -> LoginStateResponse:
    controller.on_remember_me_change(body.value)
    return LoginStateResponse.from_state(controller.state)


@router.post("", response_model=LoginStateResponse, response_model_by_alias=True)
async def login(
    controller: LoginController = Depends(get_login_controller),
) -> LoginStateResponse:
    """
    Attempt a login and wait for the outcome.

    A rejected attempt (disabled button, offline) is not an HTTP error;
    the snapshot carries the reason. A dropped client connection does not
    cancel the attempt itself.
    """
    task = controller.login()
    if task is not None:
        await asyncio.shield(task)
    return LoginStateResponse.from_state(controller.state)


@router.delete("/lockout-timer", status_code=status.HTTP_204_NO_CONTENT)
async def cancel_lockout_timer(
    controller: LoginController = Depends(get_login_controller),
) -> Response:
    """
    Stop the lockout countdown.

    Teardown action: the lockout itself is not lifted. During a lockout the
    snapshot stays locked with its last remaining-seconds value until the
    app restarts, when the persisted deadline is resumed.
    """
    controller.cancel_lockout_timer()
    logger.info("Lockout timer cancelled via API")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
