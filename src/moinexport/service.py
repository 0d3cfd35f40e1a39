"""Fetch-then-convert entry point."""

import logging

from .core.model import PadId
from .core.ports import DocumentStore
from .export.moinmoin import ExportOptions, atext_to_moinmoin

logger = logging.getLogger(__name__)


async def convert(
    store: DocumentStore,
    pad_id: PadId,
    revision: int | str | None = None,
    options: ExportOptions | None = None,
) -> str:
    """
    Export a pad, optionally at a given revision, as MoinMoin markup.

    Store errors (NotFound, RevisionUnavailable) propagate unchanged. Once the
    pad is fetched the conversion always runs to completion.
    """
    snapshot = await store.fetch(pad_id, revision)
    logger.debug("Converting pad %s at revision %s", pad_id, snapshot.revision)
    return atext_to_moinmoin(snapshot.atext, snapshot.pool, options)
