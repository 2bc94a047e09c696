from dataclasses import dataclass

from library_catalog.core.services import (
    DbSessionService,
    JwtGeneratorService,
    JwtVerificationService,
)


@dataclass
class ApplicationDependencies:
    database_service: DbSessionService
    jwt_generation_service: JwtGeneratorService
    jwt_verify_service: JwtVerificationService
