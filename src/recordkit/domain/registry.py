"""Contract registry — named lookup for built-in and plugin contracts.

Keys are ``"<domain>.<snake_name>"`` (``communication.message``).  The
schema modules under :mod:`recordkit.schemas` register their contracts at
import time; plugins add theirs through the ``register_contracts`` hook.
"""

from __future__ import annotations

import re

from recordkit.domain.record import Contract

CONTRACT_REGISTRY: dict[str, Contract] = {}

_KEY_PATTERN = re.compile(r"^[a-z][a-z0-9_]*\.[a-z][a-z0-9_]*$")


def register_contract(key: str, contract: Contract) -> None:
    """Register *contract* under *key*.

    Raises:
        TypeError: If *contract* is not a :class:`Contract`.
        ValueError: If *key* is malformed or already bound to another contract.
    """
    if not isinstance(contract, Contract):
        msg = f"Expected a Contract for {key!r}, got {type(contract).__name__}"
        raise TypeError(msg)

    normalized = key.strip()
    if not _KEY_PATTERN.match(normalized):
        msg = f"Contract key {key!r} must look like 'domain.name'"
        raise ValueError(msg)

    existing = CONTRACT_REGISTRY.get(normalized)
    if existing is not None and existing is not contract:
        msg = f"Contract {normalized!r} is already registered"
        raise ValueError(msg)

    CONTRACT_REGISTRY[normalized] = contract


def get_contract(name: str) -> Contract:
    """Look up a contract by key or by unique bare name.

    ``"communication.message"``, ``"message"`` and ``"Message"`` all resolve
    to the same contract as long as the bare name is unambiguous.

    Raises:
        KeyError: If nothing matches or a bare name matches several domains.
    """
    if name in CONTRACT_REGISTRY:
        return CONTRACT_REGISTRY[name]

    bare = _snake(name)
    matches = [key for key in CONTRACT_REGISTRY if key.split(".", 1)[1] == bare]
    if len(matches) == 1:
        return CONTRACT_REGISTRY[matches[0]]
    if matches:
        msg = f"Contract name {name!r} is ambiguous; use one of {sorted(matches)}"
        raise KeyError(msg)
    msg = f"No contract registered for {name!r}"
    raise KeyError(msg)


def list_contracts(domain: str | None = None) -> dict[str, Contract]:
    """Registered contracts sorted by key, optionally filtered by *domain*."""
    return {
        key: CONTRACT_REGISTRY[key]
        for key in sorted(CONTRACT_REGISTRY)
        if domain is None or key.split(".", 1)[0] == domain
    }


def contract_key(domain: str, contract: Contract) -> str:
    """Build the registry key for *contract* within *domain*."""
    return f"{domain}.{_snake(contract.name)}"


def _snake(name: str) -> str:
    if "." in name:
        name = name.rsplit(".", 1)[1]
    return re.sub(r"(?<!^)(?=[A-Z])", "_", name).lower()
