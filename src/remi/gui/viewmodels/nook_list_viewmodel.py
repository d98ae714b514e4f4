"""NookListViewModel: selection and navigation over the nook list (no Qt).

Owns the sorted nook list, the live text filter and the current selection.
Selection changes arrive from four directions: explicit selection, index
hotkeys, next/previous navigation and list mutations (create, rename, update,
delete). The filter only narrows what index and next/previous navigation see;
it never clears the selection on its own.

Every public operation finishes by committing one immutable
:class:`NookListState` snapshot to :attr:`NookListViewModel.state`, so
subscribers never observe a half-applied operation.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, Optional

from remi.domain.models import Nook
from remi.domain.repositories import INookRepository, IPreferenceSink
from remi.errors import RemiError
from remi.events.bus import EventBus
from remi.events.nook_events import (
    NookCreatedEvent,
    NookDeletedEvent,
    NookLibraryChangedEvent,
    NookRenamedEvent,
    NookSelectedEvent,
    NookUpdatedEvent,
)
from remi.gui.viewmodels.base import BaseViewModel
from remi.gui.viewmodels.signal import ObservableProperty, Signal


@dataclass(frozen=True)
class NookListState:
    nooks: tuple[Nook, ...] = ()
    filter_text: str = ""
    selected: Optional[Nook] = None


def sort_nooks(nooks: Iterable[Nook]) -> list[Nook]:
    return sorted(nooks, key=lambda nook: nook.name)


def matches_filter(name: str, filter_text: str) -> bool:
    """Case-insensitive substring match; an empty filter matches everything."""
    if not filter_text:
        return True
    return filter_text.casefold() in name.casefold()


def _same_nook(a: Optional[Nook], b: Optional[Nook]) -> bool:
    # Selection identity is the id; other fields may be stale.
    if a is None or b is None:
        return a is b
    return a.id == b.id


class NookListViewModel(BaseViewModel):
    """Selection and navigation state for the nook list."""

    def __init__(
        self,
        repository: INookRepository,
        preferences: IPreferenceSink,
        event_bus: Optional[EventBus] = None,
    ) -> None:
        super().__init__(event_bus)
        self._repository = repository
        self._preferences = preferences
        self._logger = logging.getLogger(__name__)

        self._nooks: list[Nook] = []
        self._filter_text = ""
        self._selected: Optional[Nook] = None

        # One-shot notifications, emitted after ``state`` is committed
        self.selection_changed = Signal("selection_changed")
        self.nooks_changed = Signal("nooks_changed")
        self.error_occurred = Signal("error_occurred")

        try:
            self._nooks = sort_nooks(self._repository.fetch_all())
        except RemiError as exc:
            self._logger.error("Failed to load nooks: %s", exc)

        last_url = self._preferences.read_last_viewed_reference()
        if last_url:
            self._selected = next((n for n in self._nooks if n.url == last_url), None)
            if self._selected is None:
                self._logger.debug("Last viewed nook %s no longer exists", last_url)

        self.state = ObservableProperty(self._snapshot(), name="state")

        self.subscribe_event(NookLibraryChangedEvent, self._on_library_changed)

    # -- Read access ---------------------------------------------------------

    @property
    def nooks(self) -> tuple[Nook, ...]:
        return tuple(self._nooks)

    @property
    def filter_text(self) -> str:
        return self._filter_text

    @property
    def selected(self) -> Optional[Nook]:
        return self._selected

    def visible_nooks(self) -> list[Nook]:
        """Return the nooks matching the current filter, in list order."""
        if not self._filter_text:
            return list(self._nooks)
        return [n for n in self._nooks if matches_filter(n.name, self._filter_text)]

    def selected_index(self) -> Optional[int]:
        """Position of the selection within :meth:`visible_nooks`, if visible."""
        return self._index_of(self.visible_nooks(), self._selected)

    # -- Selection -----------------------------------------------------------

    def select(self, nook: Optional[Nook]) -> bool:
        """Explicitly select *nook*, or clear the selection with ``None``.

        Returns ``True`` when the selection changed.
        """
        if nook is None:
            if self._selected is None:
                return False
            self._selected = None
            self._commit(NookSelectedEvent())
            return True

        target = self._cached(nook.id)
        if target is None:
            self._logger.debug("Ignoring selection of unknown nook %s", nook.id)
            return False
        if _same_nook(target, self._selected):
            return False
        self._select_and_persist(target)
        return True

    def select_by_index(self, index: int) -> bool:
        """Select the *index*-th visible nook.

        Out-of-range indices are ignored: hotkey indices may be stale after
        the list or the filter changed.
        """
        visible = self.visible_nooks()
        if not 0 <= index < len(visible):
            self._logger.debug("Ignoring out-of-range nook index %s (%s visible)", index, len(visible))
            return False
        self._select_and_persist(visible[index])
        return True

    def select_next(self) -> bool:
        return self._step(1)

    def select_previous(self) -> bool:
        return self._step(-1)

    def clear_selection(self) -> bool:
        return self.select(None)

    # -- Filtering -----------------------------------------------------------

    def set_filter_text(self, text: str) -> None:
        self._filter_text = text
        self._commit()

    # -- List mutations ------------------------------------------------------

    def refresh(self) -> None:
        """Reload the list from the repository. Selection and filter are kept.

        A selected nook that is still listed is swapped for its fresh copy.
        """
        try:
            self._nooks = sort_nooks(self._repository.fetch_all())
        except RemiError as exc:
            self._report("Failed to refresh nooks", exc)
            return
        if self._selected is not None:
            self._selected = self._cached(self._selected.id) or self._selected
        self._commit()

    def create(self, name: str) -> Optional[Nook]:
        """Create a nook called *name*, or focus the one that already has it.

        The name check ignores case and surrounding whitespace; a collision
        selects the existing nook without touching the repository.
        """
        folded = name.strip().casefold()
        existing = next((n for n in self._nooks if n.name.casefold() == folded), None)
        if existing is not None:
            if not _same_nook(existing, self._selected):
                self._selected = existing
                self._commit(NookSelectedEvent(nook_id=existing.id, url=existing.url))
            return existing

        try:
            created = self._repository.create(name)
        except RemiError as exc:
            self._report(f"Failed to create nook '{name}'", exc)
            return None
        if created is None:
            self._logger.info("Repository declined to create nook '%s'", name)
            return None

        self._reload(created)
        self._selected = self._cached(created.id) or created
        self._filter_text = ""
        self._commit(
            NookCreatedEvent(nook_id=created.id, name=created.name),
            NookSelectedEvent(nook_id=created.id, url=created.url),
        )
        return created

    def rename(self, nook: Nook, new_name: str) -> Optional[Nook]:
        """Rename *nook*; the renamed nook always becomes the selection."""
        try:
            renamed = self._repository.rename(nook, new_name)
        except RemiError as exc:
            self._report(f"Failed to rename nook '{nook.name}'", exc)
            return None
        if renamed is None:
            self._logger.info("Repository declined to rename nook '%s'", nook.name)
            return None

        self._reload(renamed)
        self._selected = self._cached(renamed.id) or renamed
        self._commit(
            NookRenamedEvent(nook_id=renamed.id, old_name=nook.name, new_name=renamed.name),
            NookSelectedEvent(nook_id=renamed.id, url=renamed.url),
        )
        return renamed

    def update(self, nook: Nook) -> Optional[Nook]:
        """Persist non-name fields of *nook* and patch the cached entry in place."""
        try:
            updated = self._repository.update(nook)
        except RemiError as exc:
            self._report(f"Failed to update nook '{nook.name}'", exc)
            return None
        if updated is None:
            self._logger.info("Repository declined to update nook '%s'", nook.name)
            return None

        # The sort key only changes through rename, so no re-sort here.
        for position, cached in enumerate(self._nooks):
            if cached.id == nook.id:
                self._nooks[position] = updated
                break
        if self._selected is not None and self._selected.id == nook.id:
            self._selected = updated
        self._commit(NookUpdatedEvent(nook_id=updated.id))
        return updated

    def delete(self, nook: Nook) -> bool:
        """Delete *nook*; clears the selection when it pointed at *nook*."""
        try:
            self._repository.delete(nook)
        except RemiError as exc:
            self._report(f"Failed to delete nook '{nook.name}'", exc)
            return False

        self._nooks = [n for n in self._nooks if n.id != nook.id]
        events: list[object] = [NookDeletedEvent(nook_id=nook.id, name=nook.name)]
        if self._selected is not None and self._selected.id == nook.id:
            self._selected = None
            events.append(NookSelectedEvent())
        self._commit(*events)
        return True

    # -- Internals -----------------------------------------------------------

    def _step(self, offset: int) -> bool:
        visible = self.visible_nooks()
        if not visible:
            return False
        current = self._index_of(visible, self._selected)
        if current is None:
            target = visible[0] if offset > 0 else visible[-1]
        else:
            target = visible[(current + offset) % len(visible)]
        if _same_nook(target, self._selected):
            return False
        self._select_and_persist(target)
        return True

    def _select_and_persist(self, nook: Nook) -> None:
        self._selected = nook
        try:
            self._preferences.write_last_viewed(nook)
        except RemiError as exc:
            self._report("Failed to remember last viewed nook", exc)
        self._commit(NookSelectedEvent(nook_id=nook.id, url=nook.url))

    def _reload(self, fallback: Nook) -> None:
        """Re-fetch after a mutation; patch the cache locally if that fails."""
        try:
            self._nooks = sort_nooks(self._repository.fetch_all())
        except RemiError as exc:
            self._report("Failed to refresh nooks", exc)
            others = [n for n in self._nooks if n.id != fallback.id]
            self._nooks = sort_nooks([*others, fallback])

    def _cached(self, nook_id: str) -> Optional[Nook]:
        return next((n for n in self._nooks if n.id == nook_id), None)

    @staticmethod
    def _index_of(nooks: list[Nook], nook: Optional[Nook]) -> Optional[int]:
        if nook is None:
            return None
        for position, candidate in enumerate(nooks):
            if candidate.id == nook.id:
                return position
        return None

    def _snapshot(self) -> NookListState:
        return NookListState(
            nooks=tuple(self._nooks),
            filter_text=self._filter_text,
            selected=self._selected,
        )

    def _commit(self, *events: object) -> None:
        previous = self.state.value
        current = self._snapshot()
        self.state.value = current
        if current.nooks != previous.nooks:
            self.nooks_changed.emit(current.nooks)
        if current.selected != previous.selected:
            self.selection_changed.emit(current.selected)
        for event in events:
            self.publish_event(event)

    def _report(self, message: str, exc: Exception) -> None:
        self._logger.error("%s: %s", message, exc)
        self.error_occurred.emit(str(exc))

    # -- EventBus handlers ---------------------------------------------------

    def _on_library_changed(self, event: NookLibraryChangedEvent) -> None:
        self.refresh()


# The component is referred to as the selection controller by the hotkey layer.
SelectionController = NookListViewModel
