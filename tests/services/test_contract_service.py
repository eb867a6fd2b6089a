"""Tests for ContractService — list, describe and validate."""

from __future__ import annotations

import json
from datetime import datetime
from pathlib import Path

import pytest

from recordkit.domain.record import RECORD, extend, required
from recordkit.domain.registry import register_contract
from recordkit.services.contracts import ContractService
from tests.conftest import message_doc, write_json


class TestListContracts:
    def test_lists_every_domain(self) -> None:
        result = ContractService().list_contracts()
        assert result.ok
        assert result.op == "list_contracts"
        keys = [item["key"] for item in result.data["items"]]
        assert keys == sorted(keys)
        assert "communication.message" in keys
        assert "productivity.task" in keys
        assert result.data["count"] == len(keys)

    def test_item_summary(self) -> None:
        result = ContractService().list_contracts("communication")
        item = next(i for i in result.data["items"] if i["key"] == "communication.message")
        assert item["name"] == "Message"
        assert item["domain"] == "communication"
        assert item["required"] == 4
        assert item["fields"] == 9
        assert item["doc"]

    def test_domain_filter(self) -> None:
        result = ContractService().list_contracts("learning")
        assert result.data["count"] > 0
        assert all(item["domain"] == "learning" for item in result.data["items"])

    def test_unknown_domain_warns(self) -> None:
        result = ContractService().list_contracts("astronomy")
        assert result.ok
        assert result.data["count"] == 0
        assert result.warnings == ["No contracts registered for domain 'astronomy'"]


class TestDescribeContract:
    def test_by_key(self) -> None:
        result = ContractService().describe_contract("communication.message")
        assert result.ok
        assert result.data["key"] == "communication.message"
        assert result.data["name"] == "Message"
        assert result.data["required"] == ["id", "senderId", "receiverId", "content"]
        names = [row["name"] for row in result.data["fields"]]
        assert names[:3] == ["id", "createdAt", "updatedAt"]
        assert "schema" not in result.data

    def test_by_bare_name(self) -> None:
        result = ContractService().describe_contract("Message")
        assert result.data["key"] == "communication.message"

    def test_with_schema(self) -> None:
        result = ContractService().describe_contract("message", schema=True)
        assert result.data["schema"]["title"] == "Message"
        assert "senderId" in result.data["schema"]["properties"]

    def test_unknown_contract(self) -> None:
        result = ContractService().describe_contract("spaceship")
        assert not result.ok
        assert result.error is not None
        assert result.error.code == "UNKNOWN_CONTRACT"
        assert result.error.detail == {"name": "spaceship"}

    def test_ambiguous_name(self) -> None:
        result = ContractService().describe_contract("tag")
        assert result.error is not None
        assert result.error.code == "UNKNOWN_CONTRACT"
        assert "ambiguous" in result.error.message

    @pytest.mark.usefixtures("restore_registry")
    def test_plugin_registered_contract(self) -> None:
        ticket = extend(RECORD, "Ticket", {"summary": required(str)})
        register_contract("support.ticket", ticket)
        result = ContractService().describe_contract("ticket")
        assert result.data["key"] == "support.ticket"


class TestValidateDocuments:
    def test_all_valid(self, tmp_path: Path, now: datetime) -> None:
        doc = message_doc()
        path = write_json(tmp_path / "msg.json", doc)
        result = ContractService(now=now).validate_documents("message", [path])
        assert result.ok
        assert result.op == "validate"
        assert result.data["contract"] == "communication.message"
        assert result.data["count"] == 1
        assert result.data["valid"] == 1
        (item,) = result.data["items"]
        assert item["ok"] is True
        assert item["id"] == doc["id"]
        assert item["violations"] == []
        assert item["record"]["createdAt"] == "2024-01-01T12:00:00Z"
        assert item["record"]["sentAt"] == "2024-01-01T12:00:00Z"
        assert result.meta == {"now": now.isoformat(), "reject_unknown": False}

    def test_some_invalid(self, tmp_path: Path, now: datetime) -> None:
        bad = message_doc(senderId="nope", content="")
        path = write_json(tmp_path / "msgs.json", [message_doc(), bad])
        result = ContractService(now=now).validate_documents("message", [path])
        assert not result.ok
        assert result.error is not None
        assert result.error.code == "INVALID_RECORD"
        assert result.error.message == "1 of 2 documents failed Message"
        assert result.data["valid"] == 1
        assert result.data["invalid"] == 1
        invalid = result.data["items"][1]
        assert invalid["ok"] is False
        assert invalid["id"] == bad["id"]
        assert "record" not in invalid
        assert [v["field"] for v in invalid["violations"]] == ["senderId", "content"]
        sources = {v["source"] for v in result.error.detail["violations"]}
        assert sources == {f"{path}#1"}

    def test_single_failure_message(self, tmp_path: Path) -> None:
        path = write_json(tmp_path / "msg.json", {"content": "hi"})
        result = ContractService().validate_documents("message", [path])
        assert result.error is not None
        assert result.error.message == "1 of 1 document failed Message"
        assert result.data["items"][0]["id"] is None

    def test_non_mapping_document(self, tmp_path: Path) -> None:
        path = write_json(tmp_path / "list.json", ["just a string"])
        result = ContractService().validate_documents("message", [path])
        (violation,) = result.data["items"][0]["violations"]
        assert violation["field"] == ""
        assert violation["rule"] == "type"

    def test_shared_clock_across_documents(self, tmp_path: Path) -> None:
        path = write_json(tmp_path / "msgs.json", [message_doc(), message_doc()])
        result = ContractService().validate_documents("message", [path])
        first, second = (item["record"]["createdAt"] for item in result.data["items"])
        assert first == second

    def test_reject_unknown(self, tmp_path: Path) -> None:
        path = write_json(tmp_path / "msg.json", message_doc(mood="happy"))
        lenient = ContractService().validate_documents("message", [path])
        strict = ContractService(reject_unknown=True).validate_documents("message", [path])
        assert lenient.ok
        assert not strict.ok
        (violation,) = strict.data["items"][0]["violations"]
        assert violation == {"field": "mood", "rule": "unknown", "message": "is not a known field"}
        assert strict.meta is not None
        assert strict.meta["reject_unknown"] is True

    def test_multiple_files(self, tmp_path: Path) -> None:
        first = write_json(tmp_path / "a.json", message_doc())
        second = tmp_path / "b.jsonl"
        second.write_text("\n".join(json.dumps(message_doc()) for _ in range(2)))
        result = ContractService().validate_documents("message", [first, second])
        assert result.data["count"] == 3

    def test_empty_file_warns(self, tmp_path: Path) -> None:
        path = write_json(tmp_path / "empty.json", [])
        result = ContractService().validate_documents("message", [path])
        assert result.ok
        assert result.data["count"] == 0
        assert result.warnings == [f"No documents found in {path}"]

    def test_unreadable_document_aborts(self, tmp_path: Path) -> None:
        good = write_json(tmp_path / "good.json", message_doc())
        bad = tmp_path / "bad.json"
        bad.write_text("{broken")
        result = ContractService().validate_documents("message", [good, bad])
        assert not result.ok
        assert result.error is not None
        assert result.error.code == "UNREADABLE_DOCUMENT"
        assert result.error.detail["path"] == str(bad)
        assert result.data == {}

    def test_non_utf8_document_is_unreadable(self, tmp_path: Path) -> None:
        bad = tmp_path / "latin.json"
        bad.write_bytes(b'{"id": "\xff"}')
        result = ContractService().validate_documents("message", [bad])
        assert not result.ok
        assert result.error is not None
        assert result.error.code == "UNREADABLE_DOCUMENT"
        assert result.error.detail["path"] == str(bad)
        assert result.error.detail["reason"].startswith("not valid UTF-8")

    def test_unknown_contract(self, tmp_path: Path) -> None:
        path = write_json(tmp_path / "msg.json", message_doc())
        result = ContractService().validate_documents("spaceship", [path])
        assert result.error is not None
        assert result.error.code == "UNKNOWN_CONTRACT"
