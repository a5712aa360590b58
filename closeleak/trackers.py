"""Trackers of resources that must be closed explicitly.

Call new() when a resource is created and close the returned tracker
when the resource is released.  If a tracker is reclaimed while it is
still armed (i.e., it was never closed), a report with the stack where
the tracker was created is written to standard error.

Trackers are only armed while tracking is enabled; otherwise new()
returns NULL_TRACKER, which costs nothing.  Enabling or disabling only
affects trackers created afterwards.

Tracking is disabled at start.  The CLOSELEAK environment variable is
read by closeleak.startups, not by this module; it has no effect unless
closeleak.startups is imported.
"""

__all__ = [
    'D',
    'NULL_TRACKER',
    'Tracker',
    'close',
    'collect',
    'create_tracker',
    'disable',
    'enable',
    'is_enabled',
    'new',
    'set_max_depth',
]

import gc
import logging
import threading
import weakref

from closeleak import reports
from closeleak import stacks


LOG = logging.getLogger(__name__)
LOG.addHandler(logging.NullHandler())


D = {
    'MAX_DEPTH': stacks.MAX_DEPTH,
}


class Switch:

    def __init__(self, value=False):
        self._lock = threading.Lock()
        self._value = value

    def get(self):
        return self._value

    def get_and_set(self, value):
        with self._lock:
            old_value, self._value = self._value, value
            return old_value


_ENABLED = Switch()


def enable():
    if not _ENABLED.get_and_set(True):
        LOG.debug('enable close leak tracking')


def disable():
    if _ENABLED.get_and_set(False):
        LOG.debug('disable close leak tracking')


def is_enabled():
    return _ENABLED.get()


def set_max_depth(max_depth):
    """Set stack capture depth of trackers created afterwards."""
    if max_depth <= 0:
        raise ValueError('expect positive max_depth: %r' % max_depth)
    D['MAX_DEPTH'] = max_depth


class Tracker:

    __slots__ = ('stack', '_finalizer', '__weakref__')

    def __init__(self, stack):
        self.stack = stack
        # Do not pass self (or a bound method) to the finalizer, or the
        # tracker would never be reclaimed.
        self._finalizer = weakref.finalize(
            self, reports.report, id(self), stack)
        # Unclosed trackers that are alive at exit are not leaked.
        self._finalizer.atexit = False

    def __repr__(self):
        return '<%s at 0x%x: %s>' % (
            self.__class__.__name__,
            id(self),
            'armed' if self.armed else 'disarmed',
        )

    def __enter__(self):
        return self

    def __exit__(self, *_):
        self.close()

    @property
    def armed(self):
        return self._finalizer.alive

    def close(self):
        self._finalizer.detach()


class NullTracker:
    """Returned from new() when tracking is disabled."""

    __slots__ = ()

    stack = ()

    armed = False

    def __repr__(self):
        return 'NULL_TRACKER'

    def __bool__(self):
        return False

    def __enter__(self):
        return self

    def __exit__(self, *_):
        pass

    def close(self):
        pass


NULL_TRACKER = NullTracker()


def new():
    if not _ENABLED.get():
        return NULL_TRACKER
    return Tracker(stacks.capture(1, D['MAX_DEPTH']))


create_tracker = new


def close(tracker):
    """Close a tracker; tracker may be None."""
    if tracker is not None:
        tracker.close()


def collect():
    """Run a full collection so that leaked trackers get reported.

       In CPython a tracker is usually reported as soon as its last
       reference is dropped; this is only required for trackers caught
       in reference cycles, or on runtimes without reference counting.
    """
    return gc.collect()
