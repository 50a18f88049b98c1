"""Mapping between the User aggregate and UserModel rows."""

from custom_identity.domain.user.aggregates.user import User
from custom_identity.infrastructure.persistence.sqlalchemy.models import UserModel


def map_to_domain(model: UserModel) -> User:
    return User.reconstitute(
        id=model.id,
        user_name=model.user_name,
        normalized_user_name=model.normalized_user_name,
        email=model.email,
        normalized_email=model.normalized_email,
        email_confirmed=model.email_confirmed,
        password_hash=model.password_hash,
        security_stamp=model.security_stamp,
        concurrency_stamp=model.concurrency_stamp,
        two_factor_enabled=model.two_factor_enabled,
        access_failed_count=model.access_failed_count,
        created_at=model.created_at,
        updated_at=model.updated_at,
    )


def map_to_model(user: User) -> UserModel:
    model = UserModel(id=user.id, created_at=user.created_at)
    update_model(model, user)
    return model


def update_model(model: UserModel, user: User) -> None:
    """Copy every mutable field, the concurrency stamp included."""
    model.user_name = user.user_name
    model.normalized_user_name = user.normalized_user_name
    model.email = user.email
    model.normalized_email = user.normalized_email
    model.email_confirmed = user.email_confirmed
    model.password_hash = user.password_hash
    model.security_stamp = user.security_stamp
    model.concurrency_stamp = user.concurrency_stamp
    model.two_factor_enabled = user.two_factor_enabled
    model.access_failed_count = user.access_failed_count
    model.updated_at = user.updated_at
