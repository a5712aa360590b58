"""Print reports of leaked trackers."""

__all__ = [
    'DELIMITER',
    'format_report',
    'report',
]

import logging
import sys
import threading

from closeleak import stacks


LOG = logging.getLogger(__name__)
LOG.addHandler(logging.NullHandler())


DELIMITER = '=================='


def format_report(tracker_id, stack):
    parts = [
        DELIMITER,
        '\nWARNING: CLOSE LEAKED (0x%x)\n' % tracker_id,
    ]
    parts.extend(map(stacks.format_frame, stacks.resolve(stack)))
    parts.append(DELIMITER)
    parts.append('\n')
    return ''.join(parts)


class Output:
    """Write reports one at a time.

       A tracker may be reclaimed while a report is being written, in
       the same thread (for example, when the stream's write triggers a
       collection).  Writing to the stream again from there would fail,
       and so the report is queued and written after the current one.
    """

    def __init__(self):
        self._lock = threading.RLock()
        # Guarded by self._lock; not None while a write is in progress.
        self._pending = None

    def write(self, tracker_id, text):
        with self._lock:
            if self._pending is not None:
                self._pending.append((tracker_id, text))
                return
            self._pending = [(tracker_id, text)]
            try:
                while self._pending:
                    _write(*self._pending.pop(0))
            finally:
                self._pending = None


def _write(tracker_id, text):
    try:
        sys.stderr.write(text)
        sys.stderr.flush()
    except (AttributeError, OSError, RuntimeError, ValueError):
        LOG.debug('cannot write report of 0x%x', tracker_id, exc_info=True)


_OUTPUT = Output()


def report(tracker_id, stack):
    """Write a report to standard error; called by the finalizer.

       This never raises; failures of writing the report are dropped.
    """
    _OUTPUT.write(tracker_id, format_report(tracker_id, stack))
