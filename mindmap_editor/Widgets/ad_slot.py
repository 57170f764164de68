# ad_slot.py
# Description: Ad placement that registers with an ad-serving queue
#
"""
Ad Slot
-------

An ad placement registers exactly one display request with the ad-serving
queue the first time it is mounted, and never when it is disabled. The
queue is passed in, so tests can record requests instead of serving ads.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List, Optional

from loguru import logger
from textual.widgets import Static


@dataclass(frozen=True)
class AdRequest:
    unit: str
    width: int
    height: int


class AdQueue(ABC):
    """Capability for queueing ad display requests"""

    @abstractmethod
    def register_ad_slot(self, request: AdRequest) -> None:
        ...


class RecordingAdQueue(AdQueue):
    """Keeps requests in memory; the default when no ad service is wired in"""

    def __init__(self):
        self.requests: List[AdRequest] = []

    def register_ad_slot(self, request: AdRequest) -> None:
        self.requests.append(request)


class AdSlot:
    """One ad placement"""

    def __init__(self, unit: str, width: int, height: int,
                 queue: AdQueue, disabled: bool = False):
        self.request = AdRequest(unit=unit, width=width, height=height)
        self.queue = queue
        self.disabled = disabled
        self.registered = False

    def set_disabled(self, disabled: bool) -> None:
        self.disabled = disabled

    def mount(self) -> bool:
        """Register with the queue on first mount

        Returns:
            True if a request was registered by this call
        """
        if self.disabled or self.registered:
            return False
        self.queue.register_ad_slot(self.request)
        self.registered = True
        logger.debug(f"Registered ad slot {self.request.unit}")
        return True


class AdBanner(Static):
    """Textual host for an AdSlot"""

    DEFAULT_CSS = """
    AdBanner {
        height: auto;
        color: $text-muted;
    }
    """

    def __init__(self, slot: AdSlot, **kwargs):
        super().__init__("", **kwargs)
        self.slot = slot
        if slot.disabled:
            self.display = False

    def on_mount(self) -> None:
        if self.slot.mount():
            self.update(f"Ad: {self.slot.request.unit}")
