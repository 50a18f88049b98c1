from custom_identity.domain.user.aggregates.user import User

__all__ = ["User"]
