from typing import Iterable, Protocol

from .model import PadId, PadSnapshot


class DocumentStore(Protocol):
    """
    Source of attributed text. Fetching may block or hit the network, so it is
    awaited; everything after the fetch is synchronous.
    """

    async def fetch(self, pad_id: PadId, revision: int | str | None = None) -> PadSnapshot:
        """Raises NotFound or RevisionUnavailable."""
        ...

    def list_pads(self) -> Iterable[PadId]:
        ...
