"""Core services exports."""

from .author.author_service import AuthorService
from .book.book_service import BookService
from .category.category_service import CategoryService
from .database.db_manage import DbManageService
from .database.db_session import DbSessionService
from .jwt.jwt_gen import JwtGeneratorService
from .jwt.jwt_verify import JwtVerificationService
from .user.user_service import UserService

__all__ = [
    # Catalog Services
    "AuthorService",
    "BookService",
    "CategoryService",
    "UserService",
    # JWT Services
    "JwtGeneratorService",
    "JwtVerificationService",
    # Database Services
    "DbManageService",
    "DbSessionService",
]
