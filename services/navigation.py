# ============================================================================
# NAVIGATION / DEEP-LINK RESOLVER
# ============================================================================
# STATUS: Core - Focus state machine and locator codec
# PURPOSE: Map shareable locators to focused entities and back
# ============================================================================
"""
Navigation

A locator is the URL-fragment form of what the user is looking at:

    dataset=<url-encoded id>      attribute=<url-encoded key>

Navigator keeps two independent focus slots (dataset, attribute) plus the
active view, and mirrors the active focus into a History:

- empty locator      -> push a clean, fragment-free location (unless already clean)
- new locator        -> push a new entry (back/forward and sharing work)
- identical locator  -> nothing

State transitions:

    Unfocused --select / resolved locator--> Focused(A)
    Focused(A) --select B (either kind)--> Focused(B)   other slot untouched

Listeners receive a NavigationEvent after every state change; rendering
layers subscribe instead of being called directly.

Cold start: start(locator) consumes an incoming locator first. Only when
none is supplied (or it is malformed) does the FocusPolicy pick a default.
A well-formed locator that does not resolve yields NotFound and no default
is applied.
"""

from dataclasses import dataclass, replace
from typing import Callable, List, Optional, Tuple
from urllib.parse import quote, unquote

from core.contracts import FocusPolicy, NoRoute, NotFound, Resolution, Route, ViewKind
from core.logging import ComponentType, get_logger, log_context
from services.catalog_store import CatalogStore

logger = get_logger(__name__, ComponentType.NAVIGATION)


# ============================================================================
# LOCATOR CODEC
# ============================================================================

def encode_locator(view: ViewKind, entity_id: str) -> str:
    """`dataset=<id>` / `attribute=<key>` with the value URL-encoded."""
    return f"{view.value}={quote(entity_id, safe='')}"


def parse_locator(locator: Optional[str]) -> Optional[Tuple[ViewKind, str]]:
    """
    Split a locator into (view, entity id).

    Accepts an optional leading '#'. Returns None for empty or
    malformed input.
    """
    text = (locator or "").strip()
    if text.startswith("#"):
        text = text[1:]
    if not text:
        return None

    key, sep, value = text.partition("=")
    if not sep:
        return None
    try:
        view = ViewKind(key)
    except ValueError:
        return None

    entity_id = unquote(value)
    if not entity_id:
        return None
    return view, entity_id


def resolve_locator(store: CatalogStore, locator: Optional[str]) -> Resolution:
    """Resolve a locator against the loaded catalog."""
    parsed = parse_locator(locator)
    if parsed is None:
        return NoRoute(locator or "")

    view, entity_id = parsed
    if view == ViewKind.DATASET:
        found = store.get_dataset_by_id(entity_id)
    else:
        found = store.get_attribute_by_id(entity_id)

    if found is None:
        return NotFound(view, entity_id)
    return Route(view, entity_id)


# ============================================================================
# HISTORY
# ============================================================================

class InMemoryHistory:
    """
    Browser-style history of locations.

    A location is `base_url` optionally followed by `#<locator>`.
    """

    def __init__(self, base_url: str = "/", initial_locator: str = ""):
        self.base_url = base_url.split("#", 1)[0]
        self._entries: List[str] = [self._location(initial_locator)]
        self._position = 0

    def _location(self, locator: str) -> str:
        locator = locator.lstrip("#")
        return f"{self.base_url}#{locator}" if locator else self.base_url

    @property
    def location(self) -> str:
        return self._entries[self._position]

    @property
    def locator(self) -> str:
        _, _, fragment = self.location.partition("#")
        return fragment

    @property
    def entries(self) -> List[str]:
        return list(self._entries)

    def push(self, locator: str) -> None:
        """Add a new entry, dropping any forward history."""
        del self._entries[self._position + 1:]
        self._entries.append(self._location(locator))
        self._position += 1

    def back(self) -> str:
        if self._position > 0:
            self._position -= 1
        return self.locator

    def forward(self) -> str:
        if self._position < len(self._entries) - 1:
            self._position += 1
        return self.locator


# ============================================================================
# NAVIGATOR
# ============================================================================

@dataclass(frozen=True)
class NavigationState:
    """What is focused. Dataset and attribute slots are independent."""
    active_view: ViewKind = ViewKind.DATASET
    dataset_id: Optional[str] = None
    attribute_id: Optional[str] = None
    not_found: Optional[NotFound] = None

    def focused_id(self, view: Optional[ViewKind] = None) -> Optional[str]:
        view = view or self.active_view
        return self.dataset_id if view == ViewKind.DATASET else self.attribute_id

    @property
    def is_focused(self) -> bool:
        return self.focused_id() is not None

    @property
    def locator(self) -> str:
        """Locator for the active view's focus, or '' when unfocused."""
        entity_id = self.focused_id()
        return encode_locator(self.active_view, entity_id) if entity_id else ""


@dataclass(frozen=True)
class NavigationEvent:
    previous: NavigationState
    current: NavigationState
    locator: str


Listener = Callable[[NavigationEvent], None]


class Navigator:
    """Focus state machine over a loaded CatalogStore."""

    def __init__(
        self,
        store: CatalogStore,
        history: Optional[InMemoryHistory] = None,
        focus_policy: FocusPolicy = FocusPolicy.NONE,
    ):
        self.store = store
        self.history = history or InMemoryHistory()
        self.focus_policy = focus_policy
        self.state = NavigationState()
        self._listeners: List[Listener] = []

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a listener; returns an unsubscribe function."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    # ------------------------------------------------------------------
    # Cold start
    # ------------------------------------------------------------------

    def start(self, locator: Optional[str] = None) -> Resolution:
        """
        Initial focus after the catalog has loaded.

        An incoming locator wins over the focus policy.
        """
        if (locator or "").strip().lstrip("#"):
            resolution = self.open(locator)
            if not isinstance(resolution, NoRoute):
                return resolution

        if self.focus_policy == FocusPolicy.FIRST:
            return self._focus_first()
        return NoRoute("")

    def _focus_first(self) -> Resolution:
        datasets = self.store.datasets
        attributes = self.store.attributes
        dataset_id = datasets[0].id if datasets else None
        attribute_id = attributes[0].key if attributes else None

        # Default focus is not a user choice, so the location stays clean
        self._transition(replace(
            self.state,
            dataset_id=dataset_id,
            attribute_id=attribute_id,
            not_found=None,
        ), write_locator=False)

        if dataset_id:
            return Route(ViewKind.DATASET, dataset_id)
        return NoRoute("")

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------

    def open(self, locator: Optional[str]) -> Resolution:
        """Follow a locator (shared link, back/forward)."""
        resolution = resolve_locator(self.store, locator)
        if isinstance(resolution, Route):
            self._select(resolution.view, resolution.entity_id)
        elif isinstance(resolution, NotFound):
            logger.info(resolution.message)
            self._transition(replace(
                self.state,
                active_view=resolution.view,
                not_found=resolution,
            ), write_locator=False)
        else:
            logger.debug(f"Ignoring malformed locator: {locator!r}")
        return resolution

    def select_dataset(self, dataset_id: str) -> Resolution:
        return self._select_checked(ViewKind.DATASET, dataset_id)

    def select_attribute(self, attribute_id: str) -> Resolution:
        return self._select_checked(ViewKind.ATTRIBUTE, attribute_id)

    def show_view(self, view: ViewKind) -> None:
        """Switch tabs; each tab keeps its own focus."""
        self._transition(replace(self.state, active_view=view, not_found=None))

    def clear(self) -> None:
        """Drop the active view's focus and clean the location."""
        if self.state.active_view == ViewKind.DATASET:
            new_state = replace(self.state, dataset_id=None, not_found=None)
        else:
            new_state = replace(self.state, attribute_id=None, not_found=None)
        self._transition(new_state)

    def back(self) -> Resolution:
        return self._follow(self.history.back())

    def forward(self) -> Resolution:
        return self._follow(self.history.forward())

    def _follow(self, locator: str) -> Resolution:
        # History already points at the entry; only state moves
        resolution = resolve_locator(self.store, locator)
        if isinstance(resolution, Route):
            new_state = self._focus(resolution.view, resolution.entity_id)
        elif isinstance(resolution, NotFound):
            new_state = replace(self.state, active_view=resolution.view, not_found=resolution)
        else:
            new_state = replace(self.state, not_found=None)
            if self.state.active_view == ViewKind.DATASET:
                new_state = replace(new_state, dataset_id=None)
            else:
                new_state = replace(new_state, attribute_id=None)
        self._transition(new_state, write_locator=False)
        return resolution

    def _select_checked(self, view: ViewKind, entity_id: str) -> Resolution:
        resolution = resolve_locator(self.store, encode_locator(view, entity_id))
        if isinstance(resolution, Route):
            self._select(view, entity_id)
        elif isinstance(resolution, NotFound):
            self._transition(replace(self.state, active_view=view, not_found=resolution), write_locator=False)
        return resolution

    def _focus(self, view: ViewKind, entity_id: str) -> NavigationState:
        if view == ViewKind.DATASET:
            return replace(self.state, active_view=view, dataset_id=entity_id, not_found=None)
        return replace(self.state, active_view=view, attribute_id=entity_id, not_found=None)

    def _select(self, view: ViewKind, entity_id: str) -> None:
        with log_context(view=view.value):
            logger.debug(f"Focus {view.value} {entity_id}")
            self._transition(self._focus(view, entity_id))

    def _transition(self, new_state: NavigationState, write_locator: bool = True) -> None:
        previous = self.state
        self.state = new_state
        if write_locator:
            self.set_locator(new_state.locator)
        if new_state != previous:
            event = NavigationEvent(previous=previous, current=new_state, locator=self.history.locator)
            for listener in list(self._listeners):
                listener(event)

    # ------------------------------------------------------------------
    # Locator persistence
    # ------------------------------------------------------------------

    def set_locator(self, locator: str) -> bool:
        """
        Persist a locator in history.

        Returns True if a history entry was pushed.
        """
        locator = locator.lstrip("#")
        if locator == self.history.locator:
            return False
        self.history.push(locator)
        return True


__all__ = [
    "encode_locator",
    "parse_locator",
    "resolve_locator",
    "InMemoryHistory",
    "NavigationState",
    "NavigationEvent",
    "Navigator",
]
