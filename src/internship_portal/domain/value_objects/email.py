"""
Login e-mail of an identity

Stored trimmed; the comparison used for login is exact, so the value is
not case-folded.
"""
import re
from dataclasses import dataclass


_ADDRESS = re.compile(r'^[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}$')


@dataclass(frozen=True)
class Email:
    value: str

    def __post_init__(self):
        address = (self.value or "").strip()
        if not self.is_valid(address):
            raise ValueError(f"Invalid email format: {self.value!r}")
        object.__setattr__(self, "value", address)

    @staticmethod
    def is_valid(address: str) -> bool:
        return bool(address) and _ADDRESS.match(address) is not None

    def __str__(self) -> str:
        return self.value
