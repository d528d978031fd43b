"""Typed payload contracts for service and collaborator boundaries.

Two kinds of contract live here:

- Payload models validated before they leave a service (diagnostics).
- Protocols for collaborators the surrounding API depends on but which
  are implemented elsewhere: the upload malware scanner and the batch
  entity-existence checker. Only their boundary shapes are defined.
"""

from __future__ import annotations

from collections.abc import Collection, Iterable
from datetime import UTC, datetime
from enum import StrEnum
from typing import Any, BinaryIO, Literal, Protocol, Self, runtime_checkable
from uuid import UUID

from pydantic import BaseModel, Field, computed_field

from propcheck.domain.errors import BatchSizeExceededError


def dump_validated[T: BaseModel](model_cls: type[T], data: dict[str, Any]) -> dict[str, Any]:
    """Validate *data* against *model_cls* and return a normalized payload dict."""
    model = model_cls.model_validate(data)
    return model.model_dump(mode="python")


def _utcnow() -> datetime:
    return datetime.now(UTC)


# ---------------------------------------------------------------------------
# Diagnostics
# ---------------------------------------------------------------------------


class DiagnosticInfo(BaseModel):
    """Payload contract for ``PropertyValidationService.get_diagnostic_info``."""

    service_name: str
    service_status: Literal["healthy", "error"]
    property_cache_count: int = Field(ge=0)
    validation_cache_count: int = Field(ge=0)
    schema_computations: int = Field(ge=0)
    cached_types: list[str]
    last_update: str


# ---------------------------------------------------------------------------
# Malware scanning
# ---------------------------------------------------------------------------


class ThreatType(StrEnum):
    UNKNOWN = "unknown"
    VIRUS = "virus"
    TROJAN = "trojan"
    WORM = "worm"
    SPYWARE = "spyware"
    ADWARE = "adware"
    ROOTKIT = "rootkit"
    RANSOMWARE = "ransomware"
    POTENTIALLY_UNWANTED = "potentially_unwanted"
    SUSPICIOUS = "suspicious"
    SCANNING_ERROR = "scanning_error"


class ThreatSeverity(StrEnum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class HealthStatus(StrEnum):
    HEALTHY = "healthy"
    DEGRADED = "degraded"
    UNHEALTHY = "unhealthy"


class ThreatDetails(BaseModel):
    """What a scanner found."""

    model_config = {"frozen": True}

    name: str
    threat_type: ThreatType
    severity: ThreatSeverity
    description: str | None = None
    confidence: float = Field(default=1.0, ge=0.0, le=1.0)
    recommended_action: str | None = None


class ScanResult(BaseModel):
    """Outcome of scanning one byte stream.

    A scanner error is reported as an unclean result: a file that could
    not be scanned is never treated as safe.
    """

    model_config = {"frozen": True}

    is_clean: bool
    threat: ThreatDetails | None = None
    duration_ms: float = Field(default=0.0, ge=0.0)
    scanner_name: str | None = None
    scanner_version: str | None = None
    scanned_at: datetime = Field(default_factory=_utcnow)
    metadata: dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def clean(
        cls,
        duration_ms: float,
        scanner_name: str | None = None,
        scanner_version: str | None = None,
    ) -> Self:
        return cls(
            is_clean=True,
            duration_ms=duration_ms,
            scanner_name=scanner_name,
            scanner_version=scanner_version,
        )

    @classmethod
    def threat_detected(
        cls,
        threat: ThreatDetails,
        duration_ms: float,
        scanner_name: str | None = None,
        scanner_version: str | None = None,
    ) -> Self:
        return cls(
            is_clean=False,
            threat=threat,
            duration_ms=duration_ms,
            scanner_name=scanner_name,
            scanner_version=scanner_version,
        )

    @classmethod
    def scan_error(cls, message: str, details: str | None = None) -> Self:
        return cls(
            is_clean=False,
            threat=ThreatDetails(
                name="SCANNING_ERROR",
                threat_type=ThreatType.SCANNING_ERROR,
                severity=ThreatSeverity.HIGH,
                description=message,
                recommended_action="Review scanning configuration and retry",
            ),
            metadata={"error_details": details} if details is not None else {},
        )


class ScannerHealth(BaseModel):
    """Result of a scanner health probe."""

    model_config = {"frozen": True}

    available: bool
    status: HealthStatus = HealthStatus.UNHEALTHY
    scanner_name: str | None = None
    definitions_current: bool = False
    response_time_ms: float = 0.0
    issues: list[str] = Field(default_factory=list)
    checked_at: datetime = Field(default_factory=_utcnow)


class ScannerInfo(BaseModel):
    """Static capabilities of a scanner backend."""

    model_config = {"frozen": True}

    name: str
    version: str | None = None
    max_file_size_bytes: int | None = Field(default=None, gt=0)
    supports_streaming: bool = True
    supported_threat_types: list[ThreatType] = Field(default_factory=list)


@runtime_checkable
class VirusScanner(Protocol):
    """Scans uploaded content before it is stored."""

    def scan(self, stream: BinaryIO) -> ScanResult: ...

    def check_health(self) -> ScannerHealth: ...

    def get_scanner_info(self) -> ScannerInfo: ...


# ---------------------------------------------------------------------------
# Batch entity existence
# ---------------------------------------------------------------------------


class EntityType(StrEnum):
    MATTER = "matter"
    DOCUMENT = "document"
    REVISION = "revision"


class EntityExistenceResult(BaseModel):
    """Aggregate existence check. Missing entities are data, not errors."""

    model_config = {"frozen": True}

    missing_by_type: dict[EntityType, list[UUID]] = Field(default_factory=dict)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def all_exist(self) -> bool:
        return not any(self.missing_by_type.values())


class RelationshipValidationResult(BaseModel):
    """Aggregate parent/child check, keyed by the child entity type."""

    model_config = {"frozen": True}

    invalid_pairs_by_type: dict[EntityType, list[tuple[UUID, UUID]]] = Field(
        default_factory=dict
    )

    @computed_field  # type: ignore[prop-decorator]
    @property
    def all_valid(self) -> bool:
        return not any(self.invalid_pairs_by_type.values())


@runtime_checkable
class BatchEntityValidator(Protocol):
    """Checks existence and parent/child links of domain entities in bulk."""

    def validate_entities_exist(
        self,
        matter_ids: Iterable[UUID],
        document_ids: Iterable[UUID],
        revision_ids: Iterable[UUID],
    ) -> EntityExistenceResult: ...

    def validate_relationships(
        self,
        document_matter_pairs: Iterable[tuple[UUID, UUID]],
        revision_document_pairs: Iterable[tuple[UUID, UUID]],
    ) -> RelationshipValidationResult: ...


def ensure_batch_size(kind: str, items: Collection[Any], limit: int) -> None:
    """Raise BatchSizeExceededError when *items* is larger than *limit*."""
    if len(items) > limit:
        raise BatchSizeExceededError(kind, len(items), limit)
