"""User domain exceptions."""


class RoleNotFoundError(Exception):
    """Role does not exist."""

    def __init__(self, normalized_role_name: str) -> None:
        self.normalized_role_name = normalized_role_name
        super().__init__(f"Role {normalized_role_name} does not exist.")
