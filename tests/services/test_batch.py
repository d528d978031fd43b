"""Tests for BoundedBatchValidator batch-size enforcement."""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path
from uuid import UUID, uuid4

import pytest

from propcheck.config.discovery import CONFIG_ENV_VAR, CONFIG_FILENAME
from propcheck.config.settings import PropcheckSettings
from propcheck.domain.errors import BatchSizeExceededError
from propcheck.services.batch import BoundedBatchValidator
from propcheck.services.contracts import (
    BatchEntityValidator,
    EntityExistenceResult,
    EntityType,
    RelationshipValidationResult,
)


class _RecordingValidator:
    """Reports every id as missing and remembers what it was asked."""

    def __init__(self) -> None:
        self.calls: list[str] = []

    def validate_entities_exist(
        self,
        matter_ids: Iterable[UUID],
        document_ids: Iterable[UUID],
        revision_ids: Iterable[UUID],
    ) -> EntityExistenceResult:
        self.calls.append("exist")
        return EntityExistenceResult(
            missing_by_type={
                EntityType.MATTER: list(matter_ids),
                EntityType.DOCUMENT: list(document_ids),
                EntityType.REVISION: list(revision_ids),
            }
        )

    def validate_relationships(
        self,
        document_matter_pairs: Iterable[tuple[UUID, UUID]],
        revision_document_pairs: Iterable[tuple[UUID, UUID]],
    ) -> RelationshipValidationResult:
        self.calls.append("relationships")
        return RelationshipValidationResult()


def _ids(n: int) -> list[UUID]:
    return [uuid4() for _ in range(n)]


class TestBoundedBatchValidator:
    def test_satisfies_protocol(self) -> None:
        bounded = BoundedBatchValidator(_RecordingValidator(), max_batch_size=2)
        assert isinstance(bounded, BatchEntityValidator)

    def test_within_limit_delegates(self) -> None:
        inner = _RecordingValidator()
        bounded = BoundedBatchValidator(inner, max_batch_size=2)
        missing = _ids(2)
        result = bounded.validate_entities_exist(iter(missing), [], [])
        assert inner.calls == ["exist"]
        assert result.all_exist is False
        assert result.missing_by_type[EntityType.MATTER] == missing

    def test_oversized_batch_rejected_before_lookup(self) -> None:
        inner = _RecordingValidator()
        bounded = BoundedBatchValidator(inner, max_batch_size=2)
        with pytest.raises(BatchSizeExceededError) as excinfo:
            bounded.validate_entities_exist([], [], _ids(3))
        assert excinfo.value.kind == EntityType.REVISION
        assert inner.calls == []

    def test_relationship_pairs_bounded(self) -> None:
        inner = _RecordingValidator()
        bounded = BoundedBatchValidator(inner, max_batch_size=1)
        pairs = [(uuid4(), uuid4()), (uuid4(), uuid4())]
        with pytest.raises(BatchSizeExceededError):
            bounded.validate_relationships(pairs, [])
        assert bounded.validate_relationships(pairs[:1], pairs[1:]).all_valid is True
        assert inner.calls == ["relationships"]


class TestFromSettings:
    def test_default_limit(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)
        settings = PropcheckSettings.from_cli(start=tmp_path)
        bounded = BoundedBatchValidator.from_settings(_RecordingValidator(), settings)
        assert bounded.max_batch_size == 1000

    def test_limit_from_toml(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)
        (tmp_path / CONFIG_FILENAME).write_text("[batch]\nmax_batch_size = 3\n", encoding="utf-8")
        settings = PropcheckSettings.from_cli(start=tmp_path)
        bounded = BoundedBatchValidator.from_settings(_RecordingValidator(), settings)
        bounded.validate_entities_exist(_ids(3), [], [])
        with pytest.raises(BatchSizeExceededError):
            bounded.validate_entities_exist(_ids(4), [], [])
