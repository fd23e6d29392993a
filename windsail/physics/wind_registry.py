"""
Ambient Wind Registry
=====================

Optional composition-root helper that names one wind provider as the
ambient source. Core components take their provider explicitly and
never consult the registry.
"""

from typing import Optional
import logging

from .wind_field import WindProvider

logger = logging.getLogger(__name__)


class AmbientWindRegistry:
    """First registration wins; later ones are reported and ignored."""

    def __init__(self):
        self._provider: Optional[WindProvider] = None

    @property
    def provider(self) -> Optional[WindProvider]:
        return self._provider

    def register(self, provider: WindProvider) -> bool:
        """
        Register a provider as the ambient wind.

        Returns:
            True if the provider is (now) the ambient one
        """
        if self._provider is None:
            self._provider = provider
            logger.debug(f"Ambient wind provider: {type(provider).__name__}")
            return True
        if self._provider is provider:
            return True
        logger.warning(
            f"Multiple ambient wind providers registered. "
            f"Using first one ({type(self._provider).__name__}), "
            f"ignoring {type(provider).__name__}."
        )
        return False

    def require(self) -> WindProvider:
        """Ambient provider, or LookupError if none is registered."""
        if self._provider is None:
            raise LookupError("No ambient wind provider registered")
        return self._provider

    def clear(self):
        self._provider = None
