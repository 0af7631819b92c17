"""Detection and repair of divergence between catalog and blob store.

Uploads and deletes touch two stores without a shared transaction, so
a crash or a storage failure can leave them disagreeing:

- missing_blob: catalog row without content (failed upload)
- size_mismatch: content size differs from the catalog (partial upload)
- orphan_blob: content without a catalog row (failed content removal)

Anomalies younger than the grace period are skipped, they may belong
to uploads or deletes still in flight.
"""

import enum
import logging
from collections.abc import Iterable
from dataclasses import dataclass, field, replace
from datetime import datetime, timedelta

from django.core.exceptions import ValidationError
from django.utils import timezone

from server.apps.files.exceptions import BlobNotFoundError
from server.apps.files.infrastructure.storage import BlobStore, get_blob_store
from server.apps.files.logic import catalog
from server.apps.files.models import FileDescriptor

logger = logging.getLogger(__name__)


class AnomalyKind(enum.StrEnum):
    """Ways the two stores can disagree about a key."""

    MISSING_BLOB = 'missing_blob'
    SIZE_MISMATCH = 'size_mismatch'
    ORPHAN_BLOB = 'orphan_blob'


@dataclass(frozen=True)
class Anomaly:
    """One key on which the stores disagree."""

    kind: AnomalyKind
    owner: str
    filename: str
    detail: str
    repaired: bool = False


@dataclass
class ReconciliationReport:
    """Outcome of a reconciliation pass."""

    checked: int = 0
    skipped: int = 0
    anomalies: list[Anomaly] = field(default_factory=list)

    @property
    def repaired(self) -> int:
        """Number of anomalies that were repaired."""
        return sum(1 for anomaly in self.anomalies if anomaly.repaired)


def reconcile(
    grace_period: timedelta,
    *,
    repair: bool = False,
    owners: Iterable[str] | None = None,
) -> ReconciliationReport:
    """Compare catalog and blob store and optionally repair them.

    Repair deletes anomalous catalog rows together with whatever content
    they have, and removes orphaned content. The catalog stays the
    authority: nothing is re-registered from the blob store.

    Args:
        grace_period: Minimum age of an anomaly before it is reported.
        repair: Whether to fix the anomalies found.
        owners: Restrict the pass to these owners; all owners known to
            either store when None.

    Returns:
        ReconciliationReport describing what was found and fixed.
    """
    blob_store = get_blob_store()
    cutoff = timezone.now() - grace_period

    if owners is None:
        target_owners = sorted(
            set(catalog.list_owners()) | set(blob_store.list_owners()),
        )
    else:
        target_owners = sorted(set(owners))

    report = ReconciliationReport()
    for owner in target_owners:
        _reconcile_owner(owner, blob_store, cutoff, repair, report)

    logger.info(
        'Reconciliation finished: %d checked, %d anomalies, '
        '%d repaired, %d skipped',
        report.checked,
        len(report.anomalies),
        report.repaired,
        report.skipped,
    )
    return report


def _reconcile_owner(
    owner: str,
    blob_store: BlobStore,
    cutoff: datetime,
    repair: bool,
    report: ReconciliationReport,
) -> None:
    """Reconcile one owner's namespace into the report."""
    descriptors = {
        descriptor.filename: descriptor
        for descriptor in catalog.list_descriptors(owner)
    }
    stored_filenames = set(blob_store.list_filenames(owner))

    for filename, descriptor in descriptors.items():
        report.checked += 1
        anomaly = _check_descriptor(
            descriptor,
            blob_store,
            present=filename in stored_filenames,
        )
        if anomaly is None:
            continue
        if descriptor.registered_at > cutoff:
            report.skipped += 1
            continue
        if repair:
            anomaly = _repair_descriptor(anomaly, descriptor, blob_store)
        logger.warning(
            'Catalog anomaly %s for %s: %s',
            anomaly.kind,
            descriptor,
            anomaly.detail,
        )
        report.anomalies.append(anomaly)

    for filename in sorted(stored_filenames - descriptors.keys()):
        report.checked += 1
        try:
            modified_at = blob_store.modified_time(owner, filename)
        except ValidationError:
            logger.warning(
                'Skipping stored file with unsupported name: %s/%s',
                owner,
                filename,
            )
            continue
        if modified_at > cutoff:
            report.skipped += 1
            continue
        anomaly = Anomaly(
            kind=AnomalyKind.ORPHAN_BLOB,
            owner=owner,
            filename=filename,
            detail='content without catalog row',
        )
        if repair:
            anomaly = _repair_orphan(anomaly, blob_store)
        logger.warning(
            'Blob anomaly %s for %s/%s',
            anomaly.kind,
            owner,
            filename,
        )
        report.anomalies.append(anomaly)


def _check_descriptor(
    descriptor: FileDescriptor,
    blob_store: BlobStore,
    *,
    present: bool,
) -> Anomaly | None:
    """Compare a catalog row with its content."""
    if present:
        try:
            stored_bytes = blob_store.size(descriptor.owner, descriptor.filename)
        except BlobNotFoundError:
            present = False
        else:
            if stored_bytes == descriptor.content_length:
                return None
            return Anomaly(
                kind=AnomalyKind.SIZE_MISMATCH,
                owner=descriptor.owner,
                filename=descriptor.filename,
                detail=(
                    f'expected {descriptor.content_length} bytes, '
                    f'stored {stored_bytes}'
                ),
            )

    return Anomaly(
        kind=AnomalyKind.MISSING_BLOB,
        owner=descriptor.owner,
        filename=descriptor.filename,
        detail='catalog row without content',
    )


def _repair_descriptor(
    anomaly: Anomaly,
    descriptor: FileDescriptor,
    blob_store: BlobStore,
) -> Anomaly:
    """Drop an anomalous catalog row and any partial content.

    Only the inspected row is deleted. When it is already gone, or the
    key was registered again meanwhile, the content belongs to someone
    else's upload and is left alone.
    """
    if not catalog.delete_descriptor(descriptor):
        logger.info('Catalog row already gone, not repairing: %s', descriptor)
        return anomaly
    if catalog.exists(anomaly.owner, anomaly.filename):
        logger.info('Key registered again, keeping content: %s', descriptor)
        return replace(anomaly, repaired=True)
    removed = blob_store.remove(anomaly.owner, anomaly.filename)
    return replace(anomaly, repaired=removed)


def _repair_orphan(anomaly: Anomaly, blob_store: BlobStore) -> Anomaly:
    """Remove content no catalog row points to."""
    if catalog.exists(anomaly.owner, anomaly.filename):
        logger.info(
            'Orphan registered meanwhile, keeping content: %s/%s',
            anomaly.owner,
            anomaly.filename,
        )
        return anomaly
    removed = blob_store.remove(anomaly.owner, anomaly.filename)
    return replace(anomaly, repaired=removed)
