"""Boundary Protocols — contracts between core and shell.

Invariants:
    - Core NEVER imports from shell — dependency arrows point inward only
    - External IO (payment provider, file storage) accessed through Protocol types
    - Implementations provided by shell via FastAPI dependency injection

Design Decisions:
    - Protocol over ABC: structural subtyping, test fakes need no inheritance
    - Async in Protocol: implementations do network or disk IO
"""

from typing import Protocol

from event_site.core.domain_types import PaymentRef

from event_site.core.payment_types import (
    GatewayCredentials, Payment, Preference, PreferenceRequest,
)


class PaymentGateway(Protocol):
    """Contract for the checkout provider — implemented by infrastructure."""
    async def create_preference(
        self, credentials: GatewayCredentials, request: PreferenceRequest,
    ) -> Preference: ...
    async def get_payment(
        self, credentials: GatewayCredentials, payment_id: PaymentRef,
    ) -> Payment: ...


class FileStorage(Protocol):
    """Contract for uploaded image storage — implemented by infrastructure."""
    async def save(
        self, namespace: str, filename: str, content_type: str | None, data: bytes,
    ) -> str: ...
    def remove(self, reference: str | None) -> bool: ...
