"""
Operation in progress feedback on an icon surface.

A FeedbackHandle owns one Decoration (dimmed icon and a spinning
progress ring) and the AnimationDriver ticking it. The toolkit side only
renders the Decoration and redraws when it reports a change.
"""
import time
import logging
from dataclasses import dataclass, fields

logger = logging.getLogger(__name__)


@dataclass
class FeedbackSettings:
    interval_ms: int = 16
    span_degrees: float = 90
    degrees_per_second: float = 360
    size_ratio: float = 0.5
    default_size: int = 48
    line_width: int = 4
    dim_opacity: float = 0.5

    @classmethod
    def from_config(cls, section=None):
        section = section or {}
        names = set(field.name for field in fields(cls))
        return cls(**{key: value for key, value in section.items() if key in names})


class ProgressRing(object):
    """Indeterminate ring: an arc of fixed span, turning at a constant rate."""

    def __init__(self, size, span_degrees=90, degrees_per_second=360, line_width=4):
        self.size = size
        self.span_degrees = span_degrees
        self.degrees_per_second = degrees_per_second
        self.line_width = line_width
        self.angle = 0.0

    def set_elapsed(self, seconds):
        self.angle = (seconds * self.degrees_per_second) % 360


class Decoration(object):

    def __init__(self, ring, dim_opacity=0.5):
        self.ring = ring
        self.dim_opacity = dim_opacity
        self.listeners = []

    def connect(self, callback):
        if not callback in self.listeners:
            self.listeners.append(callback)

    def disconnect(self, callback):
        if callback in self.listeners:
            self.listeners.remove(callback)

    def changed(self):
        for callback in list(self.listeners):
            callback()


class AnimationDriver(object):
    """
    Call on_tick with the elapsed seconds since start, every interval_ms.

    The timer belongs to the driver alone. stop() stops it at once.
    """

    def __init__(self, timer, interval_ms, on_tick, clock=time.monotonic):
        self.timer = timer
        self.interval_ms = interval_ms
        self.on_tick = on_tick
        self.clock = clock
        self.started = None

    @property
    def active(self):
        return self.timer.is_active()

    def start(self):
        if self.active:
            return
        self.started = self.clock()
        self.timer.start(self.interval_ms, self.tick)

    def tick(self):
        if self.started is None:
            return
        self.on_tick(self.clock() - self.started)

    def stop(self):
        self.timer.stop()
        self.started = None


def ring_size(surface, settings):
    geometry = surface.geometry()
    if not geometry:
        return settings.default_size
    width, height = geometry
    size = int(min(width, height) * settings.size_ratio)
    return size if size > 0 else settings.default_size


class FeedbackHandle(object):

    def __init__(self, surface, decoration, driver):
        self.surface = surface
        self.decoration = decoration
        self.driver = driver
        self.attached = False

    @classmethod
    def create(cls, surface, timer_factory, settings, clock=time.monotonic):
        ring = ProgressRing(ring_size(surface, settings), settings.span_degrees,
            settings.degrees_per_second, settings.line_width)
        decoration = Decoration(ring, settings.dim_opacity)

        def on_tick(elapsed):
            ring.set_elapsed(elapsed)
            decoration.changed()

        driver = AnimationDriver(timer_factory.create_timer(), settings.interval_ms, on_tick, clock)
        return cls(surface, decoration, driver)

    def attach(self):
        if self.attached:
            return
        self.surface.set_interactive(False)
        self.surface.attach_overlay(self.decoration)
        self.driver.start()
        self.attached = True

    def release(self):
        if not self.attached:
            return
        self.attached = False
        self.driver.stop()
        try:
            self.surface.detach_overlay(self.decoration)
            self.surface.set_interactive(True)
        finally:
            self.decoration.listeners.clear()
