"""Claim value object."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Claim:
    """A typed ``(type, value)`` assertion about a user.

    Two claims are the same claim when type and value are equal; no case
    normalization is applied.
    """

    type: str
    value: str

    def __post_init__(self) -> None:
        if not self.type:
            msg = "Claim type cannot be empty"
            raise ValueError(msg)
        if self.value is None:
            msg = "Claim value cannot be None"
            raise ValueError(msg)

    def __str__(self) -> str:
        return f"{self.type}: {self.value}"
