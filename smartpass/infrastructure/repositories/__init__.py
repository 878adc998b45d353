"""Infrastructure repositories"""

from .postgres_user_repo import PostgresUserRepository
from .postgres_employee_repo import PostgresEmployeeRepository
from .postgres_activity_repo import PostgresActivityRepository
from .in_memory_user_repo import InMemoryUserRepository
from .in_memory_employee_repo import InMemoryEmployeeRepository
from .in_memory_activity_repo import InMemoryActivityRepository

__all__ = [
    "PostgresUserRepository",
    "PostgresEmployeeRepository",
    "PostgresActivityRepository",
    "InMemoryUserRepository",
    "InMemoryEmployeeRepository",
    "InMemoryActivityRepository",
]
