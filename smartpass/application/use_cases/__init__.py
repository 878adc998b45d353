"""Application use cases"""

from .activity import ExportActivityUseCase, ListActivityInput, ListActivityUseCase
from .auth import (
    ChangePasswordInput,
    ChangePasswordUseCase,
    GetCurrentUserUseCase,
    LoginInput,
    LoginUseCase,
)
from .employees import (
    CreateEmployeeInput,
    CreateEmployeeUseCase,
    DeleteEmployeeUseCase,
    GetEmployeeUseCase,
    ListEmployeesInput,
    ListEmployeesUseCase,
    PublicEmployeeLookupUseCase,
    RegenerateQRCodeUseCase,
    RevokeQRCodeUseCase,
    UpdateEmployeeInput,
    UpdateEmployeeUseCase,
)
from .reports import (
    CustomReportInput,
    CustomReportUseCase,
    GetGrowthUseCase,
    GetRecentActivityUseCase,
    GetStatsUseCase,
)
from .results import ServiceError, ServiceErrorCode
from .users import (
    CreateUserInput,
    CreateUserUseCase,
    DeleteUserUseCase,
    GetSettingsUseCase,
    GetUserUseCase,
    ListUsersInput,
    ListUsersUseCase,
    UpdateSettingsInput,
    UpdateSettingsUseCase,
    UpdateUserInput,
    UpdateUserUseCase,
)

__all__ = [
    "ChangePasswordInput",
    "ChangePasswordUseCase",
    "CreateEmployeeInput",
    "CreateEmployeeUseCase",
    "CreateUserInput",
    "CreateUserUseCase",
    "CustomReportInput",
    "CustomReportUseCase",
    "DeleteEmployeeUseCase",
    "DeleteUserUseCase",
    "ExportActivityUseCase",
    "GetCurrentUserUseCase",
    "GetEmployeeUseCase",
    "GetGrowthUseCase",
    "GetRecentActivityUseCase",
    "GetSettingsUseCase",
    "GetStatsUseCase",
    "GetUserUseCase",
    "ListActivityInput",
    "ListActivityUseCase",
    "ListEmployeesInput",
    "ListEmployeesUseCase",
    "ListUsersInput",
    "ListUsersUseCase",
    "LoginInput",
    "LoginUseCase",
    "PublicEmployeeLookupUseCase",
    "RegenerateQRCodeUseCase",
    "RevokeQRCodeUseCase",
    "ServiceError",
    "ServiceErrorCode",
    "UpdateEmployeeInput",
    "UpdateEmployeeUseCase",
    "UpdateSettingsInput",
    "UpdateSettingsUseCase",
    "UpdateUserInput",
    "UpdateUserUseCase",
]
