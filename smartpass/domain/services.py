"""
Name: Domain Service Interfaces

Responsibilities:
  - Define contracts for external collaborators used by use cases

Collaborators:
  - infrastructure.services.qr_code_generator: QR implementation
  - identity.passwords / identity.tokens: hashing and tokens
"""

from typing import Protocol


class QRCodeGenerator(Protocol):
    """R: Render the public link of an employee as an image data URL."""

    def generate(self, employee_id: str) -> str:
        """
        Args:
            employee_id: 24-hex id of the employee

        Returns:
            data:image/png;base64,... URL
        """
        ...


class PasswordHasher(Protocol):
    def hash(self, plaintext: str) -> str:
        ...

    def compare(self, plaintext: str, hashed: str) -> bool:
        """R: False on mismatch or unparsable hash; never raises."""
        ...

    def dummy_compare(self, plaintext: str) -> None:
        """R: Spend the same time as a real compare (unknown accounts)."""
        ...


class TokenIssuer(Protocol):
    def issue(self, subject_id: str) -> str:
        ...
