import logging
from enum import Enum
from typing import Callable, Hashable, Iterable

logger = logging.getLogger(__name__)

Listener = Callable[[frozenset, frozenset], None]


class SelectionAggregate(Enum):
    NONE = "none"
    SOME = "some"
    ALL = "all"


def aggregate_from_counts(hits: int, total: int) -> SelectionAggregate:
    if total <= 0 or hits <= 0:
        return SelectionAggregate.NONE
    if hits >= total:
        return SelectionAggregate.ALL
    return SelectionAggregate.SOME


class SelectionModel:
    """Set of selected row identifiers, independent of what is on screen.

    The set is a frozenset replaced on every mutation, so a snapshot handed to
    a renderer never changes underneath it. Listeners get (added, removed)
    after each real change and nothing for no-op mutations.
    """

    def __init__(self, initial: Iterable[Hashable] = ()):
        self._selected = frozenset(initial)
        self._listeners: list[Listener] = []
        self.version = 0

    # ---------- queries ----------
    @property
    def snapshot(self) -> frozenset:
        return self._selected

    def __len__(self):
        return len(self._selected)

    def __contains__(self, row_id):
        return row_id in self._selected

    def is_selected(self, row_id) -> bool:
        return row_id in self._selected

    def aggregate_state(self, all_ids: Iterable[Hashable]) -> SelectionAggregate:
        """Tri-state of `all_ids` against the selection.

        Only ids passed in count, so identifiers left over from rows that no
        longer exist can never make the result read ALL.
        """
        ids = all_ids if isinstance(all_ids, (set, frozenset)) else set(all_ids)
        return aggregate_from_counts(len(ids & self._selected), len(ids))

    def stale_ids(self, current_ids: Iterable[Hashable]) -> frozenset:
        return self._selected - frozenset(current_ids)

    # ---------- mutations ----------
    def toggle(self, row_id) -> bool:
        """Flip one id; returns the new selected state."""
        selected = row_id not in self._selected
        self.set_selected(row_id, selected)
        return selected

    def set_selected(self, row_id, selected: bool) -> bool:
        """Returns True if the selection actually changed."""
        if selected == (row_id in self._selected):
            return False
        if selected:
            self._replace(self._selected | {row_id})
        else:
            self._replace(self._selected - {row_id})
        return True

    def select_all(self, all_ids: Iterable[Hashable]) -> frozenset:
        """Add every id; returns the ids that were newly selected."""
        return self._replace(self._selected | frozenset(all_ids))[0]

    def deselect_all(self, all_ids: Iterable[Hashable]) -> frozenset:
        return self._replace(self._selected - frozenset(all_ids))[1]

    def clear(self) -> frozenset:
        return self._replace(frozenset())[1]

    def reconcile(self, current_ids: Iterable[Hashable]) -> frozenset:
        """Drop ids that no longer resolve to a row; returns what was dropped."""
        stale = self.stale_ids(current_ids)
        if stale:
            logger.debug("dropping %d stale selection ids", len(stale))
            self._replace(self._selected - stale)
        return stale

    # ---------- listeners ----------
    def subscribe(self, listener: Listener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe():
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _replace(self, new_selected: frozenset):
        added = new_selected - self._selected
        removed = self._selected - new_selected
        if not added and not removed:
            return added, removed
        self._selected = new_selected
        self.version += 1
        for listener in list(self._listeners):
            listener(added, removed)
        return added, removed
