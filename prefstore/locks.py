from __future__ import annotations

import threading
import weakref
from collections.abc import Hashable
from typing import Any

from .exceptions import IllegalUseError


def binding_key(store: Any) -> Hashable:
    """Identity of the medium behind ``store``: the resolved file for disk stores."""
    key = getattr(store, "binding_key", None)
    if key is None:
        return ("object", id(store))
    return key


class BindingRegistry:
    """
    Records which owner holds each store medium in this process.

    Owners are held weakly; an owner that was garbage collected no longer
    blocks a new claim.
    """

    def __init__(self) -> None:
        self._guard = threading.Lock()
        self._owners: dict[Hashable, weakref.ref[Any]] = {}

    def claim(self, key: Hashable, owner: Any) -> None:
        with self._guard:
            for stale in [k for k, ref in self._owners.items() if ref() is None]:
                del self._owners[stale]
            if key in self._owners:
                raise IllegalUseError(f"{key!r} is already bound to a Preferences instance; share that instance instead")
            self._owners[key] = weakref.ref(owner)

    def release(self, key: Hashable, owner: Any) -> None:
        with self._guard:
            ref = self._owners.get(key)
            if ref is not None and ref() in (owner, None):
                del self._owners[key]

    def is_claimed(self, key: Hashable) -> bool:
        with self._guard:
            ref = self._owners.get(key)
            return ref is not None and ref() is not None


STORE_BINDINGS = BindingRegistry()
