"""Named entropy sources that configuration can select.

``CSRNG_ENTROPY_SOURCE_TYPE`` and the CLI's ``--source`` flag name a
source; this module maps that name to a class. The built-in ``system``
and ``reader`` sources file themselves here when :mod:`csrng.entropy` is
imported. Other distributions can ship a hardware or network RNG by
advertising it in the ``csrng.entropy_sources`` entry-point group::

    [project.entry-points."csrng.entropy_sources"]
    hwrng = "my_package.hwrng:HardwareSource"

Plugins are imported only when a name is not already known. A plugin
never replaces a built-in of the same name, and anything that is not an
:class:`~csrng.entropy.base.EntropySource` subclass is refused.
"""

from __future__ import annotations

import importlib.metadata
import logging
from typing import TYPE_CHECKING, Any, ClassVar

from csrng.entropy.base import EntropySource

if TYPE_CHECKING:
    from collections.abc import Callable

logger = logging.getLogger("csrng")

_ENTRY_POINT_GROUP = "csrng.entropy_sources"


class EntropySourceRegistry:
    """Maps source names to :class:`EntropySource` subclasses."""

    _registry: ClassVar[dict[str, type[EntropySource]]] = {}
    _entry_points_loaded: ClassVar[bool] = False

    @classmethod
    def register(cls, name: str) -> Callable[[type[EntropySource]], type[EntropySource]]:
        """Class decorator filing the decorated source under *name*.

        Registering the same class twice is harmless. Claiming a name that
        already belongs to a different class raises ``ValueError``, so a
        second source can never silently take over a configured name.
        """

        def decorator(source_cls: type[EntropySource]) -> type[EntropySource]:
            current = cls._registry.get(name)
            if current is not None and current is not source_cls:
                raise ValueError(
                    f"Entropy source name {name!r} is already taken by {current.__qualname__}"
                )
            cls._registry[name] = source_cls
            return source_cls

        return decorator

    @classmethod
    def get(cls, name: str) -> type[EntropySource]:
        """Return the class registered under *name*.

        Raises:
            KeyError: If no built-in or plugin source has that name.
        """
        if name not in cls._registry and not cls._entry_points_loaded:
            cls._load_entry_points()
        try:
            return cls._registry[name]
        except KeyError:
            known = ", ".join(sorted(cls._registry)) or "(none)"
            raise KeyError(f"Unknown entropy source: {name!r}. Available: {known}") from None

    @classmethod
    def create(cls, name: str, **kwargs: Any) -> EntropySource:
        """Instantiate the source registered under *name* with *kwargs*."""
        return cls.get(name)(**kwargs)

    @classmethod
    def list_available(cls) -> list[str]:
        """Sorted names of every selectable source, plugins included."""
        if not cls._entry_points_loaded:
            cls._load_entry_points()
        return sorted(cls._registry)

    @classmethod
    def _load_entry_points(cls) -> None:
        # Runs at most once per process (until _reset).
        cls._entry_points_loaded = True
        try:
            eps = importlib.metadata.entry_points(group=_ENTRY_POINT_GROUP)
        except Exception:  # Intentional: broken metadata must not break lookups
            logger.warning("Cannot read the %s entry points", _ENTRY_POINT_GROUP, exc_info=True)
            return

        for ep in eps:
            if ep.name in cls._registry:
                logger.debug("Ignoring plugin %r: name is taken by a built-in source", ep.name)
                continue
            try:
                loaded = ep.load()
            except Exception:  # Intentional: one bad plugin must not block others
                logger.warning(
                    "Skipping entropy source plugin %r (%s): import failed",
                    ep.name,
                    ep.value,
                    exc_info=True,
                )
                continue
            if not (isinstance(loaded, type) and issubclass(loaded, EntropySource)):
                logger.warning(
                    "Skipping entropy source plugin %r (%s): not an EntropySource subclass",
                    ep.name,
                    ep.value,
                )
                continue
            cls._registry[ep.name] = loaded
            logger.debug("Registered entropy source plugin %r", ep.name)

    @classmethod
    def _reset(cls) -> None:
        """Forget every registration. Test-only."""
        cls._registry.clear()
        cls._entry_points_loaded = False


register_entropy_source = EntropySourceRegistry.register
