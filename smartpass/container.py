"""
Name: Dependency Injection Container

Responsibilities:
  - Wire up repositories, services and use cases
  - Manage singleton instances
  - Enable dependency injection in FastAPI endpoints

Collaborators:
  - infrastructure.repositories: Postgres* / InMemory* repositories
  - infrastructure.services: PngQRCodeGenerator
  - identity: TokenService, BcryptPasswordHasher
  - application.use_cases
  - FastAPI Depends(): Dependency injection mechanism

Constraints:
  - Manual DI (no library like dependency-injector)
  - Singletons via functools.lru_cache
  - APP_ENV=test selects in-memory repositories

Notes:
  - This is the composition root (where dependencies are wired)
  - Tests call reset_container() to drop cached singletons
"""

from functools import lru_cache

from .application.use_cases import (
    ChangePasswordUseCase,
    CreateEmployeeUseCase,
    CreateUserUseCase,
    CustomReportUseCase,
    DeleteEmployeeUseCase,
    DeleteUserUseCase,
    ExportActivityUseCase,
    GetCurrentUserUseCase,
    GetEmployeeUseCase,
    GetGrowthUseCase,
    GetRecentActivityUseCase,
    GetSettingsUseCase,
    GetStatsUseCase,
    GetUserUseCase,
    ListActivityUseCase,
    ListEmployeesUseCase,
    ListUsersUseCase,
    LoginUseCase,
    PublicEmployeeLookupUseCase,
    RegenerateQRCodeUseCase,
    RevokeQRCodeUseCase,
    UpdateEmployeeUseCase,
    UpdateSettingsUseCase,
    UpdateUserUseCase,
)
from .config import get_settings
from .domain.repositories import (
    ActivityRepository,
    EmployeeRepository,
    UserRepository,
)
from .domain.services import PasswordHasher, QRCodeGenerator
from .identity.passwords import BcryptPasswordHasher
from .identity.tokens import TokenService
from .infrastructure.repositories import (
    InMemoryActivityRepository,
    InMemoryEmployeeRepository,
    InMemoryUserRepository,
    PostgresActivityRepository,
    PostgresEmployeeRepository,
    PostgresUserRepository,
)
from .infrastructure.services import PngQRCodeGenerator


def _use_in_memory() -> bool:
    return get_settings().is_test()


# R: Repository factories (singletons)
@lru_cache
def get_user_repository() -> UserRepository:
    """R: Credential store (PostgreSQL, or in-memory under APP_ENV=test)."""
    if _use_in_memory():
        return InMemoryUserRepository()
    return PostgresUserRepository()


@lru_cache
def get_employee_repository() -> EmployeeRepository:
    if _use_in_memory():
        return InMemoryEmployeeRepository()
    return PostgresEmployeeRepository()


@lru_cache
def get_activity_repository() -> ActivityRepository:
    if _use_in_memory():
        return InMemoryActivityRepository(users=get_user_repository())
    return PostgresActivityRepository()


# R: Service factories (singletons)
@lru_cache
def get_token_service() -> TokenService:
    settings = get_settings()
    return TokenService(
        secret=settings.jwt_secret,
        expires_days=settings.jwt_expires_days,
    )


@lru_cache
def get_password_hasher() -> PasswordHasher:
    return BcryptPasswordHasher(rounds=get_settings().bcrypt_rounds)


@lru_cache
def get_qr_code_generator() -> QRCodeGenerator:
    return PngQRCodeGenerator(public_base_url=get_settings().public_app_url)


def reset_container() -> None:
    """R: Drop cached singletons (tests, settings reload)."""
    for factory in (
        get_user_repository,
        get_employee_repository,
        get_activity_repository,
        get_token_service,
        get_password_hasher,
        get_qr_code_generator,
    ):
        factory.cache_clear()


# R: Use case factories (new instance per request)
def get_login_use_case() -> LoginUseCase:
    return LoginUseCase(
        users=get_user_repository(),
        hasher=get_password_hasher(),
        tokens=get_token_service(),
    )


def get_current_user_use_case() -> GetCurrentUserUseCase:
    return GetCurrentUserUseCase(users=get_user_repository())


def get_change_password_use_case() -> ChangePasswordUseCase:
    return ChangePasswordUseCase(
        users=get_user_repository(),
        hasher=get_password_hasher(),
        activities=get_activity_repository(),
    )


def get_list_employees_use_case() -> ListEmployeesUseCase:
    return ListEmployeesUseCase(repository=get_employee_repository())


def get_get_employee_use_case() -> GetEmployeeUseCase:
    return GetEmployeeUseCase(repository=get_employee_repository())


def get_create_employee_use_case() -> CreateEmployeeUseCase:
    return CreateEmployeeUseCase(
        repository=get_employee_repository(),
        qr_codes=get_qr_code_generator(),
        activities=get_activity_repository(),
    )


def get_update_employee_use_case() -> UpdateEmployeeUseCase:
    return UpdateEmployeeUseCase(
        repository=get_employee_repository(),
        activities=get_activity_repository(),
    )


def get_delete_employee_use_case() -> DeleteEmployeeUseCase:
    return DeleteEmployeeUseCase(
        repository=get_employee_repository(),
        activities=get_activity_repository(),
    )


def get_regenerate_qr_code_use_case() -> RegenerateQRCodeUseCase:
    return RegenerateQRCodeUseCase(
        repository=get_employee_repository(),
        qr_codes=get_qr_code_generator(),
        activities=get_activity_repository(),
    )


def get_revoke_qr_code_use_case() -> RevokeQRCodeUseCase:
    return RevokeQRCodeUseCase(
        repository=get_employee_repository(),
        activities=get_activity_repository(),
    )


def get_public_employee_lookup_use_case() -> PublicEmployeeLookupUseCase:
    return PublicEmployeeLookupUseCase(repository=get_employee_repository())


def get_list_users_use_case() -> ListUsersUseCase:
    return ListUsersUseCase(repository=get_user_repository())


def get_get_user_use_case() -> GetUserUseCase:
    return GetUserUseCase(repository=get_user_repository())


def get_create_user_use_case() -> CreateUserUseCase:
    return CreateUserUseCase(
        repository=get_user_repository(),
        hasher=get_password_hasher(),
        activities=get_activity_repository(),
        allow_open_registration=get_settings().allow_open_registration,
    )


def get_update_user_use_case() -> UpdateUserUseCase:
    return UpdateUserUseCase(
        repository=get_user_repository(),
        hasher=get_password_hasher(),
        activities=get_activity_repository(),
    )


def get_delete_user_use_case() -> DeleteUserUseCase:
    return DeleteUserUseCase(
        repository=get_user_repository(),
        activities=get_activity_repository(),
    )


def get_get_settings_use_case() -> GetSettingsUseCase:
    return GetSettingsUseCase(repository=get_user_repository())


def get_update_settings_use_case() -> UpdateSettingsUseCase:
    return UpdateSettingsUseCase(
        repository=get_user_repository(),
        activities=get_activity_repository(),
    )


def get_stats_use_case() -> GetStatsUseCase:
    return GetStatsUseCase(
        employees=get_employee_repository(), users=get_user_repository()
    )


def get_growth_use_case() -> GetGrowthUseCase:
    return GetGrowthUseCase(employees=get_employee_repository())


def get_recent_activity_use_case() -> GetRecentActivityUseCase:
    return GetRecentActivityUseCase(employees=get_employee_repository())


def get_custom_report_use_case() -> CustomReportUseCase:
    return CustomReportUseCase(employees=get_employee_repository())


def get_list_activity_use_case() -> ListActivityUseCase:
    return ListActivityUseCase(
        activities=get_activity_repository(), users=get_user_repository()
    )


def get_export_activity_use_case() -> ExportActivityUseCase:
    return ExportActivityUseCase(activities=get_activity_repository())
