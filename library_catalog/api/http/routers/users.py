"""User API router: registration, profile maintenance and authentication."""

from typing import Any

from fastapi import APIRouter, Body, Depends, HTTPException, Response
from loguru import logger

from library_catalog.api.http.converters import (
    paginated_json,
    user_from_json,
    user_to_json,
)
from library_catalog.api.http.deps import (
    get_authenticated_user,
    get_jwt_generation_service,
    get_optional_user,
    get_user_service,
    require_role,
)
from library_catalog.api.http.filters import user_filter
from library_catalog.api.http.resource_message import ResourceMessage
from library_catalog.core.exceptions import LibraryError, NotFoundError
from library_catalog.core.models import UserFilter
from library_catalog.core.services import JwtGeneratorService, UserService
from library_catalog.entities import Role, User, UserType

RESOURCE_MESSAGE = ResourceMessage("user")

router = APIRouter(prefix="/users", tags=["users"])


def _check_admin_or_self(current_user: User, user_id: int) -> None:
    if not current_user.is_admin() and current_user.id != user_id:
        raise HTTPException(
            status_code=403, detail="Only administrators may change other users"
        )


@router.post("", status_code=201)
def add_user(
    payload: dict[str, Any] = Body(...),
    current_user: User | None = Depends(get_optional_user),
    service: UserService = Depends(get_user_service),
):
    """Register a user.

    Anyone may register as a customer; only administrators may create
    employees.
    """
    logger.debug("Adding a new user with email {}", payload.get("email"))
    user = user_from_json(payload)
    if user.type == UserType.EMPLOYEE and (current_user is None or not current_user.is_admin()):
        logger.warning("Refused employee creation for {}", payload.get("email"))
        raise HTTPException(
            status_code=403, detail="Only administrators may create employees"
        )

    try:
        user = service.add(user)
    except LibraryError as e:
        logger.error("User not added: {}", e)
        return RESOURCE_MESSAGE.error_response(e)
    return {"id": user.id}


@router.post("/authenticate")
def authenticate(
    payload: dict[str, Any] = Body(...),
    service: UserService = Depends(get_user_service),
    jwt_gen: JwtGeneratorService = Depends(get_jwt_generation_service),
):
    """Exchange email and password for the user record plus a bearer token."""
    email = payload.get("email")
    password = payload.get("password")
    if not isinstance(email, str) or not isinstance(password, str):
        raise HTTPException(status_code=401, detail="Invalid credentials")

    try:
        user = service.find_by_email_and_password(email, password)
    except NotFoundError:
        logger.info("Authentication failed for {}", email)
        raise HTTPException(status_code=401, detail="Invalid credentials") from None

    token = jwt_gen.generate_access_token(
        user.id, roles=[str(role) for role in user.roles]  # type: ignore[arg-type]
    )
    logger.debug("User {} authenticated", user.id)
    return {**user_to_json(user), "token": token}


@router.put("/{user_id}")
def update_user(
    user_id: int,
    payload: dict[str, Any] = Body(...),
    current_user: User = Depends(get_authenticated_user),
    service: UserService = Depends(get_user_service),
):
    """Change name and email of a user."""
    logger.debug("Updating the user {}", user_id)
    _check_admin_or_self(current_user, user_id)
    try:
        user = service.update(user_from_json(payload, user_id))
    except LibraryError as e:
        logger.error("User {} not updated: {}", user_id, e)
        return RESOURCE_MESSAGE.error_response(e)
    return user_to_json(user)


@router.put("/{user_id}/password")
def update_user_password(
    user_id: int,
    payload: dict[str, Any] = Body(...),
    current_user: User = Depends(get_authenticated_user),
    service: UserService = Depends(get_user_service),
):
    logger.debug("Updating the password of user {}", user_id)
    _check_admin_or_self(current_user, user_id)
    try:
        service.update_password(user_id, payload.get("password"))
    except LibraryError as e:
        logger.error("Password of user {} not updated: {}", user_id, e)
        return RESOURCE_MESSAGE.error_response(e)
    return Response(status_code=200)


@router.get("/{user_id}", dependencies=[Depends(require_role(Role.ADMIN))])
def find_user(
    user_id: int,
    service: UserService = Depends(get_user_service),
):
    logger.debug("Find user: {}", user_id)
    try:
        user = service.find_by_id(user_id)
    except LibraryError as e:
        logger.error("No user found for id {}", user_id)
        return RESOURCE_MESSAGE.error_response(e)
    return user_to_json(user)


@router.get("", dependencies=[Depends(require_role(Role.ADMIN))])
def find_users(
    filters: UserFilter = Depends(user_filter),
    service: UserService = Depends(get_user_service),
):
    logger.debug("Finding users using filter: {}", filters)
    try:
        users = service.find_by_filter(filters)
    except LibraryError as e:
        logger.error("Users not listed: {}", e)
        return RESOURCE_MESSAGE.error_response(e)
    logger.debug("Found {} users", users.number_of_rows)
    return paginated_json(users, user_to_json)
