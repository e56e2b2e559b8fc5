"""Named hook registry with priority ordering and async dispatch"""

import inspect
import logging
from collections import defaultdict
from typing import Any, Callable


logger = logging.getLogger(__name__)

DEFAULT_PRIORITY = 10


class HookRegistry:
    """Hooks run lowest priority first; equal priorities keep registration order.

    A hook receives the current payload plus any extra args. Returning a value
    other than None replaces the payload for the hooks after it.
    """

    def __init__(self) -> None:
        self._store: dict[str, list[tuple[int, Callable]]] = defaultdict(list)

    def register(self, name: str, fn: Callable, priority: int = DEFAULT_PRIORITY) -> None:
        if not callable(fn):
            raise TypeError("hook must be callable")
        hooks = self._store[name]
        hooks.append((priority, fn))
        hooks.sort(key=lambda item: item[0])

    def unregister(self, name: str, fn: Callable) -> None:
        self._store[name] = [(p, f) for p, f in self._store[name] if f is not fn]

    def list(self, name: str) -> list[Callable]:
        return [fn for _, fn in self._store.get(name, [])]

    async def run(self, name: str, payload: Any, *args: Any) -> Any:
        hooks = self.list(name)
        logger.debug("Running %d %s hook(s)", len(hooks), name)
        for fn in hooks:
            result = fn(payload, *args)
            if inspect.isawaitable(result):
                result = await result
            if result is not None:
                payload = result
        return payload
