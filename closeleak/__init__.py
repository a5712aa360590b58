"""Report resources that are not closed explicitly.

Tracking is disabled until enable() is called.  To enable it from the
CLOSELEAK environment variable or the --close-leak argument, import
closeleak.startups (see its docstring).
"""

__all__ = [
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

from closeleak.trackers import (
    NULL_TRACKER,
    Tracker,
    close,
    collect,
    create_tracker,
    disable,
    enable,
    is_enabled,
    new,
    set_max_depth,
)
