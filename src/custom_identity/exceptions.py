"""Identity store exceptions.

These are programming errors: they are raised synchronously at the store
boundary and are never turned into an ``IdentityResult``.
"""


class IdentityStoreError(Exception):
    """Base exception for identity store misuse."""

    def __init__(self, message: str = "Identity store error"):
        self.message = message
        super().__init__(self.message)


class StoreDisposedError(IdentityStoreError):
    """Raised when a disposed store is used."""

    def __init__(self, store_name: str = "UserStore"):
        self.store_name = store_name
        super().__init__(f"Cannot access a disposed object: {store_name}")


class OperationCancelledError(IdentityStoreError):
    """Raised when an operation is entered with a cancelled token."""

    def __init__(self, message: str = "The operation was cancelled"):
        super().__init__(message)
