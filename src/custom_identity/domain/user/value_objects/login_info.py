"""External login value object."""

from dataclasses import dataclass


@dataclass(frozen=True)
class UserLoginInfo:
    """Binding to an external login provider."""

    login_provider: str
    provider_key: str
    provider_display_name: str | None = None
