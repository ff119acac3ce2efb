"""Version ledger: gapless append-only numbering per document."""

from datetime import UTC, datetime

import pytest

from clinidocs.domain.entities import VersionDraft
from clinidocs.domain.exceptions import (
    DocumentVersionConflictException,
    ResourceNotFoundException,
)
from clinidocs.infrastructure.persistence.version_ledger import VersionLedger


def _draft(version_id: str) -> VersionDraft:
    return VersionDraft(
        id=version_id,
        upload_date=datetime(2024, 1, 1, tzinfo=UTC),
        uploaded_by="u",
        blob_ref=f"b/{version_id}",
        filename="f.pdf",
        file_size=1,
        checksum="c",
    )


def test_append_numbers_consecutively() -> None:
    ledger = VersionLedger()
    ledger.open("d1")
    numbers = [ledger.append("d1", _draft(f"v{i}")).version for i in range(3)]
    assert numbers == [1, 2, 3]
    assert [v.id for v in ledger.list("d1")] == ["v0", "v1", "v2"]
    assert all(v.document_id == "d1" for v in ledger.list("d1"))


def test_documents_are_numbered_independently() -> None:
    ledger = VersionLedger()
    ledger.open("d1")
    ledger.open("d2")
    ledger.append("d1", _draft("a"))
    ledger.append("d1", _draft("b"))
    assert ledger.append("d2", _draft("c")).version == 1


def test_stale_expected_number_conflicts() -> None:
    ledger = VersionLedger()
    ledger.open("d1")
    ledger.append("d1", _draft("a"))
    with pytest.raises(DocumentVersionConflictException) as exc_info:
        ledger.append("d1", _draft("b"), expected_number=1)
    assert exc_info.value.details["actual"] == 2
    assert len(ledger.list("d1")) == 1


def test_unknown_document_raises() -> None:
    ledger = VersionLedger()
    with pytest.raises(ResourceNotFoundException):
        ledger.append("missing", _draft("a"))
    with pytest.raises(ResourceNotFoundException):
        ledger.list("missing")


def test_discard_drops_versions() -> None:
    ledger = VersionLedger()
    ledger.open("d1")
    ledger.append("d1", _draft("a"))
    assert [v.id for v in ledger.discard("d1")] == ["a"]
    assert "d1" not in ledger
    assert ledger.discard("d1") == []


def test_list_returns_a_copy() -> None:
    ledger = VersionLedger()
    ledger.open("d1")
    ledger.append("d1", _draft("a"))
    ledger.list("d1").clear()
    assert len(ledger.list("d1")) == 1
