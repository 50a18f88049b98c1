"""Shared domain helpers."""

from custom_identity.domain.shared.cancellation import CancellationToken
from custom_identity.domain.shared.guards import require_argument
from custom_identity.domain.shared.time import utc_now

__all__ = [
    "CancellationToken",
    "require_argument",
    "utc_now",
]
