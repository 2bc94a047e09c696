"""FastAPI dependency implementations."""

from __future__ import annotations

from collections.abc import Iterator

from fastapi import Depends, HTTPException, Request
from fastapi.security import (
    HTTPAuthorizationCredentials,
    HTTPBasic,
    HTTPBasicCredentials,
    HTTPBearer,
)
from loguru import logger
from sqlmodel import Session

from library_catalog.api.http.app_data import ApplicationDependencies
from library_catalog.core.exceptions import NotFoundError
from library_catalog.core.services import (
    AuthorService,
    BookService,
    CategoryService,
    JwtGeneratorService,
    JwtVerificationService,
    UserService,
)
from library_catalog.entities import (
    AuthorRepository,
    BookRepository,
    CategoryRepository,
    Role,
    User,
    UserRepository,
)
from library_catalog.runtime.context import get_config

_CHALLENGE = {"WWW-Authenticate": 'Basic realm="library-catalog"'}


def get_db_session(request: Request) -> Iterator[Session]:
    """Open a database session for the duration of the request."""
    app_deps: ApplicationDependencies = request.app.state.app_dependencies
    session = app_deps.database_service.get_session()
    try:
        yield session
    finally:
        session.close()


def get_jwt_verify_service(request: Request) -> JwtVerificationService:
    """Get the JWT verification service instance."""
    app_deps: ApplicationDependencies = request.app.state.app_dependencies
    return app_deps.jwt_verify_service


def get_jwt_generation_service(request: Request) -> JwtGeneratorService:
    """Get the JWT generation service instance."""
    app_deps: ApplicationDependencies = request.app.state.app_dependencies
    return app_deps.jwt_generation_service


def get_category_service(db: Session = Depends(get_db_session)) -> CategoryService:
    return CategoryService(CategoryRepository(db))


def get_author_service(db: Session = Depends(get_db_session)) -> AuthorService:
    return AuthorService(AuthorRepository(db))


def get_user_service(db: Session = Depends(get_db_session)) -> UserService:
    return UserService(UserRepository(db))


def get_book_service(db: Session = Depends(get_db_session)) -> BookService:
    return BookService(BookRepository(db), CategoryRepository(db), AuthorRepository(db))


_basic_scheme = HTTPBasic(realm="library-catalog", auto_error=False)
_bearer_scheme = HTTPBearer(auto_error=False)


def _authenticate(
    request: Request,
    db: Session,
    jwt_verify: JwtVerificationService,
    basic: HTTPBasicCredentials | None,
    bearer: HTTPAuthorizationCredentials | None,
) -> User | None:
    """Resolve the caller from Basic credentials or a Bearer token.

    Returns None when the request carries no Authorization header at all;
    credentials that are present but wrong are always a 401.
    """
    if bearer is not None:
        claims = jwt_verify.verify_jwt(bearer.credentials)
        subject = str(claims.get("sub", ""))
        user = UserRepository(db).get(int(subject)) if subject.isdigit() else None
        if user is None:
            raise HTTPException(
                status_code=401, detail="Token subject is not a known user"
            )
        request.state.auth_method = "jwt"
    elif basic is not None:
        try:
            user = UserService(UserRepository(db)).find_by_email_and_password(
                basic.username, basic.password
            )
        except NotFoundError:
            logger.info("Rejected credentials for {}", basic.username)
            raise HTTPException(
                status_code=401, detail="Invalid credentials", headers=_CHALLENGE
            ) from None
        request.state.auth_method = "basic"
    elif request.headers.get("Authorization"):
        raise HTTPException(
            status_code=401, detail="Unsupported authorization scheme", headers=_CHALLENGE
        )
    else:
        return None

    request.state.roles = set(user.roles)
    return user


def get_optional_user(
    request: Request,
    db: Session = Depends(get_db_session),
    jwt_verify: JwtVerificationService = Depends(get_jwt_verify_service),
    basic: HTTPBasicCredentials | None = Depends(_basic_scheme),
    bearer: HTTPAuthorizationCredentials | None = Depends(_bearer_scheme),
) -> User | None:
    """Authenticated caller, or None for anonymous requests."""
    return _authenticate(request, db, jwt_verify, basic, bearer)


def get_authenticated_user(
    user: User | None = Depends(get_optional_user),
) -> User:
    """Authentication dependency accepting HTTP Basic or a Bearer token."""
    if user is None:
        raise HTTPException(
            status_code=401,
            detail="Authentication required. Provide Basic credentials or a Bearer token.",
            headers=_CHALLENGE,
        )
    return user


def require_role(required_role: Role):
    """Create a dependency that requires a specific role for the authenticated user."""

    def dep(user: User = Depends(get_authenticated_user)) -> User:
        if not user.has_role(required_role):
            raise HTTPException(
                status_code=403, detail=f"Missing required role: {required_role}"
            )
        return user

    return dep


def require_seed_endpoints() -> None:
    """Hide the /DB seeding endpoints unless the configuration enables them."""
    if not get_config().app.seed_endpoints_enabled:
        raise HTTPException(status_code=404, detail="Not Found")
