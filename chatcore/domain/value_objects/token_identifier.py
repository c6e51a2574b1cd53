"""
TokenIdentifier Value Object - Stable external credential of a caller.

Built from the identity provider's issuer and subject claims
("<issuer>|<subject>"), so the same person always maps to the same User.
"""

from __future__ import annotations
from dataclasses import dataclass


@dataclass(frozen=True)
class TokenIdentifier:
    value: str

    def __post_init__(self):
        if not self.value or not self.value.strip():
            raise ValueError("Token identifier cannot be empty")

    @classmethod
    def from_claims(cls, issuer: str, subject: str) -> TokenIdentifier:
        return cls(f"{issuer}|{subject}")

    def __str__(self) -> str:
        return self.value
