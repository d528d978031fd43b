"""Batch-size enforcement in front of a BatchEntityValidator.

The wrapped validator only ever sees batches within ``[batch]
max_batch_size``. Oversized batches raise BatchSizeExceededError before
any lookup runs; missing entities are still reported in the result.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import TYPE_CHECKING, Self
from uuid import UUID

from propcheck.services.contracts import (
    BatchEntityValidator,
    EntityExistenceResult,
    EntityType,
    RelationshipValidationResult,
    ensure_batch_size,
)

if TYPE_CHECKING:
    from propcheck.config.settings import PropcheckSettings

logger = logging.getLogger(__name__)


class BoundedBatchValidator:
    """BatchEntityValidator that rejects batches larger than *max_batch_size*."""

    def __init__(self, inner: BatchEntityValidator, *, max_batch_size: int) -> None:
        self._inner = inner
        self._limit = max_batch_size

    @classmethod
    def from_settings(cls, inner: BatchEntityValidator, settings: PropcheckSettings) -> Self:
        return cls(inner, max_batch_size=settings.batch.max_batch_size)

    @property
    def max_batch_size(self) -> int:
        return self._limit

    def validate_entities_exist(
        self,
        matter_ids: Iterable[UUID],
        document_ids: Iterable[UUID],
        revision_ids: Iterable[UUID],
    ) -> EntityExistenceResult:
        matters, documents, revisions = list(matter_ids), list(document_ids), list(revision_ids)
        ensure_batch_size(EntityType.MATTER, matters, self._limit)
        ensure_batch_size(EntityType.DOCUMENT, documents, self._limit)
        ensure_batch_size(EntityType.REVISION, revisions, self._limit)
        logger.debug(
            "Checking existence of %d matters, %d documents, %d revisions",
            len(matters),
            len(documents),
            len(revisions),
        )
        return self._inner.validate_entities_exist(matters, documents, revisions)

    def validate_relationships(
        self,
        document_matter_pairs: Iterable[tuple[UUID, UUID]],
        revision_document_pairs: Iterable[tuple[UUID, UUID]],
    ) -> RelationshipValidationResult:
        documents = list(document_matter_pairs)
        revisions = list(revision_document_pairs)
        ensure_batch_size(EntityType.DOCUMENT, documents, self._limit)
        ensure_batch_size(EntityType.REVISION, revisions, self._limit)
        return self._inner.validate_relationships(documents, revisions)
