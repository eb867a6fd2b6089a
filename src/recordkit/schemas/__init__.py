"""Domain contracts built on the Record base contract.

Importing this package registers every built-in contract in
:data:`recordkit.domain.registry.CONTRACT_REGISTRY`.
"""

from __future__ import annotations

from recordkit.schemas import communication, content, documents, forms, learning, productivity

DOMAINS: tuple[str, ...] = (
    communication.DOMAIN,
    content.DOMAIN,
    documents.DOMAIN,
    forms.DOMAIN,
    learning.DOMAIN,
    productivity.DOMAIN,
)

__all__ = [
    "DOMAINS",
    "communication",
    "content",
    "documents",
    "forms",
    "learning",
    "productivity",
]
