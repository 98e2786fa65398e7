"""DocumentStateManager: single owner of the Document and its serialized text.

This is the central wiring layer between the editing surfaces.  It keeps a
canonical tree and its text form mutually consistent and tells every
subscriber about each change.

Architecture:
- Every mutation runs *mutate canonical representation -> reserialize the
  other representation -> notify observers* without yielding in between,
  so no observer ever sees a torn intermediate state.
- ``immediate=True`` conversions run synchronously in the calling turn.
  Otherwise the conversion goes into a single-slot ``DebounceSlot``; a newer
  call replaces a pending one ("last write wins").
- Failures never reach the caller.  Malformed text keeps the last valid
  tree, an unserializable tree keeps the last valid text, and unresolvable
  paths leave the Document untouched; the reason is carried by the next
  notification's ``error`` field.
- Observer exceptions are logged and swallowed one by one, so a broken
  subscriber can neither starve the others nor abort the mutation.
- A mutating call made from inside an observer callback is deferred to the
  next tick of the scheduler instead of nesting a second delivery.
"""

from __future__ import annotations

import copy
import functools
import logging
from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from docsync.cache import PathCache
from docsync.codecs import YamlCodec
from docsync.config import Origin, SyncConfig
from docsync.errors import CodecError, PathError
from docsync.result import ChangeNotification
from docsync.scheduling import DebounceSlot, TickScheduler
from docsync.tree.nodes import empty_default
from docsync.tree.paths import MISSING, Path, assign, coerce_to_array, match_key, resolve

if TYPE_CHECKING:
    from docsync.protocols import Codec, Observer, Scheduler

__all__ = ["DocumentStateManager", "Subscription"]

logger = logging.getLogger(__name__)


def _defer_reentrant(
    method: Callable[..., None],
) -> Callable[..., None]:
    """Defer a mutating method to the next tick when called during delivery."""

    @functools.wraps(method)
    def wrapper(self: DocumentStateManager, *args: Any, **kwargs: Any) -> None:
        if self._delivering:
            logger.warning(
                "%s called while notifying observers; deferring to the next tick",
                method.__name__,
            )
            self._scheduler.call_later(
                0.0, functools.partial(method, self, *args, **kwargs)
            )
            return
        method(self, *args, **kwargs)

    return wrapper


class Subscription:
    """Handle returned by ``DocumentStateManager.subscribe``.

    Unsubscribing through the handle does not depend on callback identity,
    so bound methods and lambdas are removed reliably.  Usable as a context
    manager::

        with manager.subscribe(print):
            manager.set_text("a: 1", immediate=True)
    """

    def __init__(self, manager: DocumentStateManager, observer: Observer) -> None:
        self._manager: DocumentStateManager | None = manager
        self.observer = observer

    @property
    def active(self) -> bool:
        """True until ``unsubscribe`` is called or the manager is destroyed."""
        return self._manager is not None and self._manager._has_subscription(self)

    def unsubscribe(self) -> None:
        """Stop delivering notifications to this observer.  Idempotent."""
        if self._manager is not None:
            self._manager._drop_subscription(self)
            self._manager = None

    def __enter__(self) -> Subscription:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.unsubscribe()


class DocumentStateManager:
    """Canonical owner of a Document, its text form and their validity.

    Path arguments are path strings or pre-parsed segment tuples; a tuple
    addresses keys containing ``.``, brackets, or the empty key exactly.

    Every public mutation accepts ``immediate`` (run the conversion now
    instead of debouncing it) and ``origin`` (which surface asked for it;
    echoed back in the notification so that surface can ignore it).

    With the default ``TickScheduler``, debounced conversions run when the
    host calls ``manager.scheduler.run_pending()`` (or ``flush()``).

    Example::

        from docsync import DocumentStateManager

        manager = DocumentStateManager("customer:\\n  name: Ada\\n")
        manager.update_path("customer.age", 36, immediate=True)
        manager.get_text()   # "customer:\\n  name: Ada\\n  age: 36\\n"
    """

    def __init__(
        self,
        initial_text: str = "",
        codec: Codec | None = None,
        config: SyncConfig | None = None,
        scheduler: Scheduler | None = None,
    ) -> None:
        """Initialise the manager and parse ``initial_text`` synchronously.

        Args:
            initial_text: Initial serialized text.  Empty text starts the
                Document as an empty map.
            codec: Text <-> tree codec.  Defaults to ``YamlCodec(config)``.
            config: Timing and formatting parameters.  Defaults to ``SyncConfig()``.
            scheduler: Where debounced conversions run.  Defaults to a fresh
                ``TickScheduler``.
        """
        self._config: SyncConfig = config if config is not None else SyncConfig()
        self._codec: Codec = codec if codec is not None else YamlCodec(self._config)
        self._scheduler: Scheduler = scheduler if scheduler is not None else TickScheduler()
        self._slot = DebounceSlot(self._scheduler)
        self._paths = PathCache(max_size=self._config.path_cache_size)

        self._tree: Any = {}
        self._text: str = ""
        self._is_valid: bool = True
        self._error: str | None = None
        self._origin: Origin | None = None

        self._subscriptions: list[Subscription] = []
        self._delivering = False

        self.set_text(initial_text, immediate=True)

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def config(self) -> SyncConfig:
        return self._config

    @property
    def codec(self) -> Codec:
        return self._codec

    @property
    def scheduler(self) -> Scheduler:
        return self._scheduler

    @property
    def paths(self) -> PathCache:
        """Per-instance cache of parsed paths."""
        return self._paths

    @property
    def has_pending(self) -> bool:
        """True while a debounced conversion is waiting to run."""
        return self._slot.pending

    @property
    def current_origin(self) -> Origin | None:
        """Origin of the notification being delivered; None otherwise."""
        return self._origin

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    def get_tree(self) -> Any:
        """Return the canonical Document (a live reference)."""
        return self._tree

    def get_text(self) -> str:
        """Return the current serialized text."""
        return self._text

    def is_valid_state(self) -> bool:
        """True when tree and text describe the same Document."""
        return self._is_valid

    def get_error(self) -> str | None:
        """Return the last conversion or path error, or None."""
        return self._error

    # ------------------------------------------------------------------
    # Whole-document mutations
    # ------------------------------------------------------------------

    @_defer_reentrant
    def set_text(
        self, text: str, immediate: bool = False, origin: Origin | None = None
    ) -> None:
        """Store ``text`` verbatim and (re)derive the tree from it.

        The text is kept even if it does not parse, so an in-progress edit is
        never discarded; the tree then stays at its last valid value.
        """
        self._text = text
        self._convert(self._parse, immediate, origin)

    @_defer_reentrant
    def set_tree(
        self, tree: Any, immediate: bool = False, origin: Origin | None = None
    ) -> None:
        """Store ``tree`` verbatim and (re)derive the text from it."""
        self._tree = tree
        self._convert(self._serialize, immediate, origin)

    # ------------------------------------------------------------------
    # Path-based mutations
    # ------------------------------------------------------------------

    @_defer_reentrant
    def update_path(
        self,
        path: str | Path,
        value: Any,
        immediate: bool = False,
        origin: Origin | None = None,
    ) -> None:
        """Write ``value`` at ``path``, creating intermediate containers."""
        try:
            self._tree = assign(self._tree, self._paths.parse(path), value)
        except PathError as exc:
            self._report(exc, origin)
            return
        self._convert(self._serialize, immediate, origin)

    @_defer_reentrant
    def add_array_item(
        self,
        path: str | Path,
        seed: Any = "",
        immediate: bool = False,
        origin: Origin | None = None,
    ) -> None:
        """Append an element to the array at ``path``.

        A non-array value at ``path`` is first replaced by
        ``coerce_to_array(value)``.  When the array's first element is a map,
        the new element copies that map's key set with empty defaults
        (``False`` / ``0`` / ``""``) instead of using ``seed``, so every
        element keeps the same shape.  Otherwise a copy of ``seed`` is appended.
        """
        try:
            segments = self._paths.parse(path)
            current = resolve(self._tree, segments)
            if isinstance(current, list):
                array = current
            else:
                array = coerce_to_array(None if current is MISSING else current)
                self._tree = assign(self._tree, segments, array)
        except PathError as exc:
            self._report(exc, origin)
            return

        array.append(self._new_item(array, seed))
        self._convert(self._serialize, immediate, origin)

    @_defer_reentrant
    def remove_array_item(
        self,
        path: str | Path,
        index: int,
        immediate: bool = False,
        origin: Origin | None = None,
    ) -> None:
        """Remove element ``index`` of the array at ``path``.

        A no-op (no conversion, no notification) when ``path`` does not hold
        an array or ``index`` is out of bounds.
        """
        try:
            current = resolve(self._tree, self._paths.parse(path))
        except PathError as exc:
            self._report(exc, origin)
            return

        if not isinstance(current, list) or not 0 <= index < len(current):
            logger.debug("remove_array_item(%r, %d): nothing to remove", path, index)
            return
        del current[index]
        self._convert(self._serialize, immediate, origin)

    @_defer_reentrant
    def add_object_property(
        self,
        path: str | Path,
        key: str,
        value: Any = "",
        immediate: bool = False,
        origin: Origin | None = None,
    ) -> None:
        """Add ``key: value`` to the map at ``path``.

        If ``path`` holds an array, the property is added to every map
        element of the array (the array is treated as a record set sharing
        one schema).  A missing or scalar location becomes ``{key: value}``.
        """
        try:
            segments = self._paths.parse(path)
            current = resolve(self._tree, segments)
            if isinstance(current, list):
                for item in current:
                    if isinstance(item, dict):
                        item[key] = copy.deepcopy(value)
            elif isinstance(current, dict):
                current[key] = copy.deepcopy(value)
            else:
                self._tree = assign(self._tree, segments, {key: copy.deepcopy(value)})
        except PathError as exc:
            self._report(exc, origin)
            return
        self._convert(self._serialize, immediate, origin)

    @_defer_reentrant
    def remove_object_property(
        self,
        path: str | Path,
        key: str,
        immediate: bool = False,
        origin: Origin | None = None,
    ) -> None:
        """Remove ``key`` from the map at ``path``, or from every map element
        of the array at ``path``.  A no-op when nothing was removed.
        """
        try:
            current = resolve(self._tree, self._paths.parse(path))
        except PathError as exc:
            self._report(exc, origin)
            return

        targets = current if isinstance(current, list) else [current]
        removed = False
        for item in targets:
            if not isinstance(item, dict):
                continue
            actual = match_key(item, key)
            if actual is not MISSING:
                del item[actual]
                removed = True

        if not removed:
            logger.debug("remove_object_property(%r, %r): nothing to remove", path, key)
            return
        self._convert(self._serialize, immediate, origin)

    # ------------------------------------------------------------------
    # Subscriptions
    # ------------------------------------------------------------------

    def subscribe(self, observer: Observer) -> Subscription:
        """Deliver every future ChangeNotification to ``observer``."""
        subscription = Subscription(self, observer)
        self._subscriptions.append(subscription)
        return subscription

    def unsubscribe(self, observer: Observer | Subscription) -> bool:
        """Remove a subscription, by handle or by observer.

        Returns:
            True if something was removed.
        """
        if isinstance(observer, Subscription):
            found = self._has_subscription(observer)
            observer.unsubscribe()
            return found
        for subscription in list(self._subscriptions):
            if subscription.observer == observer:
                subscription.unsubscribe()
                return True
        return False

    def _has_subscription(self, subscription: Subscription) -> bool:
        return any(s is subscription for s in self._subscriptions)

    def _drop_subscription(self, subscription: Subscription) -> None:
        self._subscriptions = [s for s in self._subscriptions if s is not subscription]

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def flush(self) -> bool:
        """Run a pending debounced conversion now.

        Returns:
            True if a conversion was pending.
        """
        return self._slot.flush()

    def destroy(self) -> None:
        """Cancel any pending conversion and drop every subscriber."""
        self._slot.cancel()
        for subscription in list(self._subscriptions):
            subscription.unsubscribe()

    # ------------------------------------------------------------------
    # Conversions
    # ------------------------------------------------------------------

    def _convert(
        self,
        conversion: Callable[[Origin | None], None],
        immediate: bool,
        origin: Origin | None,
    ) -> None:
        if immediate:
            self._slot.cancel()
            conversion(origin)
        else:
            self._slot.schedule(
                self._config.debounce_delay, functools.partial(conversion, origin)
            )

    def _parse(self, origin: Origin | None) -> None:
        text = self._text
        if not text.strip():
            tree: Any = {}
        else:
            try:
                tree = self._codec.parse(text)
            except CodecError as exc:
                logger.warning("Text is not a valid document: %s", exc)
                self._is_valid = False
                self._error = str(exc)
                self._notify(origin)
                return
            if tree is None:
                tree = {}

        self._tree = tree
        self._is_valid = True
        self._error = None
        logger.debug("Parsed %d characters of text", len(text))
        self._notify(origin)

    def _serialize(self, origin: Origin | None) -> None:
        try:
            text = self._codec.dump(self._tree)
        except CodecError as exc:
            logger.warning("Document cannot be serialized: %s", exc)
            self._is_valid = False
            self._error = str(exc)
            self._notify(origin)
            return

        self._text = text
        self._is_valid = True
        self._error = None
        logger.debug("Serialized document into %d characters", len(text))
        self._notify(origin)

    def _report(self, exc: Exception, origin: Origin | None) -> None:
        logger.warning("Path operation failed: %s", exc)
        self._error = str(exc)
        self._notify(origin)

    def _new_item(self, array: list[Any], seed: Any) -> Any:
        if array and isinstance(array[0], dict):
            return {key: empty_default(value) for key, value in array[0].items()}
        return copy.deepcopy(seed)

    def _notify(self, origin: Origin | None) -> None:
        notification = ChangeNotification(
            tree=self._tree,
            text=self._text,
            is_valid=self._is_valid,
            error=self._error,
            origin=origin,
        )
        self._origin = origin
        self._delivering = True
        try:
            for subscription in list(self._subscriptions):
                try:
                    subscription.observer(notification)
                except Exception:
                    logger.exception(
                        "Observer %r failed while handling a change", subscription.observer
                    )
        finally:
            self._delivering = False
            self._origin = None
