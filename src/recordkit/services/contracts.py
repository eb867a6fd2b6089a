"""ContractService — list, describe and validate against registered contracts.

Importing this module imports :mod:`recordkit.schemas`, which fills the
contract registry with the built-in domains.
"""

from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path
from typing import TYPE_CHECKING, Any

import recordkit.schemas  # noqa: F401  (registers built-in contracts)
from recordkit.domain.record import utc_now
from recordkit.domain.registry import get_contract, list_contracts
from recordkit.infrastructure.documents import DocumentError, load_documents
from recordkit.services.result import ServiceError, ServiceResult

if TYPE_CHECKING:
    from collections.abc import Iterable

    from recordkit.domain.record import Contract
    from recordkit.infrastructure.documents import Document

logger = logging.getLogger(__name__)


class ContractService:
    """Read-only operations over the contract registry.

    Args:
        now: Fixed clock reading for ``createdAt`` defaults.  When None,
            each :meth:`validate_documents` call reads the UTC clock once
            and every document in that call shares the reading.
        reject_unknown: Report undeclared keys as violations.
    """

    def __init__(self, *, now: datetime | None = None, reject_unknown: bool = False) -> None:
        self._now = now
        self._reject_unknown = reject_unknown

    def list_contracts(self, domain: str | None = None) -> ServiceResult:
        """Summarize registered contracts, optionally for one *domain*."""
        items = [
            {
                "key": key,
                "name": contract.name,
                "domain": key.split(".", 1)[0],
                "fields": len(contract.fields),
                "required": len(contract.required_fields),
                "doc": contract.doc or "",
            }
            for key, contract in list_contracts(domain).items()
        ]
        warnings: list[str] = []
        if domain is not None and not items:
            warnings.append(f"No contracts registered for domain {domain!r}")
        return ServiceResult(
            ok=True,
            op="list_contracts",
            data={"count": len(items), "items": items},
            warnings=warnings,
        )

    def describe_contract(self, name: str, *, schema: bool = False) -> ServiceResult:
        """Field table for one contract, plus its JSON Schema if *schema*."""
        op = "describe_contract"
        resolved = self._resolve(op, name)
        if isinstance(resolved, ServiceResult):
            return resolved
        key, contract = resolved

        data: dict[str, Any] = {
            "key": key,
            "name": contract.name,
            "doc": contract.doc or "",
            "required": contract.required_fields,
            "fields": contract.describe(),
        }
        if schema:
            data["schema"] = contract.json_schema()
        return ServiceResult(ok=True, op=op, data=data)

    def validate_documents(self, name: str, paths: Iterable[Path]) -> ServiceResult:
        """Validate every document found in *paths* against contract *name*.

        Fails with ``UNREADABLE_DOCUMENT`` before validating anything if
        a file cannot be loaded, and with ``INVALID_RECORD`` when at least
        one document is invalid.  The per-document report is in ``data``
        either way.
        """
        op = "validate"
        resolved = self._resolve(op, name)
        if isinstance(resolved, ServiceResult):
            return resolved
        key, contract = resolved

        documents: list[Document] = []
        warnings: list[str] = []
        for path in paths:
            try:
                loaded = load_documents(path)
            except DocumentError as exc:
                return ServiceResult(
                    ok=False,
                    op=op,
                    error=ServiceError(
                        code="UNREADABLE_DOCUMENT",
                        message=str(exc),
                        detail={"path": str(exc.path), "reason": exc.reason},
                    ),
                )
            if not loaded:
                warnings.append(f"No documents found in {path}")
            documents.extend(loaded)

        now = self._now or utc_now()
        items = [self._check(contract, document, now) for document in documents]
        invalid = sum(1 for item in items if not item["ok"])
        data = {
            "contract": key,
            "count": len(items),
            "valid": len(items) - invalid,
            "invalid": invalid,
            "items": items,
        }
        meta = {"now": now.isoformat(), "reject_unknown": self._reject_unknown}
        logger.debug("Validated %d documents against %s (%d invalid)", len(items), key, invalid)

        if invalid:
            noun = "document" if len(items) == 1 else "documents"
            return ServiceResult(
                ok=False,
                op=op,
                data=data,
                warnings=warnings,
                error=ServiceError(
                    code="INVALID_RECORD",
                    message=f"{invalid} of {len(items)} {noun} failed {contract.name}",
                    detail={
                        "violations": [
                            {"source": item["source"], **violation}
                            for item in items
                            for violation in item["violations"]
                        ]
                    },
                ),
                meta=meta,
            )
        return ServiceResult(ok=True, op=op, data=data, warnings=warnings, meta=meta)

    # --- Internals ---

    @staticmethod
    def _resolve(op: str, name: str) -> tuple[str, Contract] | ServiceResult:
        """Return ``(key, contract)`` for *name*, or a failed result."""
        try:
            contract = get_contract(name)
        except KeyError as exc:
            return ServiceResult(
                ok=False,
                op=op,
                error=ServiceError(
                    code="UNKNOWN_CONTRACT",
                    message=str(exc.args[0]),
                    detail={"name": name},
                ),
            )
        key = next(k for k, c in list_contracts().items() if c is contract)
        return key, contract

    def _check(self, contract: Contract, document: Document, now: datetime) -> dict[str, Any]:
        result = contract.check(document.data, now=now, reject_unknown=self._reject_unknown)
        item: dict[str, Any] = {
            "source": document.source,
            "ok": result.valid,
            "id": None,
            "violations": [v.to_dict() for v in result.violations],
        }
        if result.valid:
            item["id"] = result.value.id
            item["record"] = contract.dump(result.value)
        elif isinstance(document.data, dict):
            raw_id = document.data.get("id")
            item["id"] = str(raw_id) if raw_id is not None else None
        return item
