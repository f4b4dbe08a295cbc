"""Template catalog updater.

Merges the remote Imgflip catalog into the local :class:`~memey.store.TemplateStore`:
templates whose id is not yet known are appended, the whole store is
sorted by id, and the result is persisted. Running the update twice with no
upstream change is a no-op the second time, down to the bytes on disk.
"""

from __future__ import annotations

from collections.abc import Iterable

from memey.models import Template
from memey.output import info
from memey.store import TemplateStore, save_templates


def merge_templates(store: TemplateStore, remote: Iterable[Template]) -> bool:
    """Append every remote template whose id is absent from *store*, then sort.

    Returns:
        ``True`` if at least one template was appended.
    """
    added = False
    for template in remote:
        if not store.contains(template.id):
            info(f"Added: {template.name}")
            store.append(template)
            added = True
    store.sort()
    return added


def update_catalog(store: TemplateStore, remote: Iterable[Template]) -> bool:
    """Merge *remote* into *store* and persist the sorted result.

    Args:
        store: Local catalog; modified in place.
        remote: Templates fetched from the API (see
            :meth:`~memey.client.ImgflipClient.get_memes`).

    Returns:
        Whether any new template was added.
    """
    added = merge_templates(store, remote)
    save_templates(store)
    return added
