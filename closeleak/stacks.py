"""Capture call stacks cheaply and resolve them later.

A captured stack is a tuple of raw entries, innermost first:

  (module_name, code, offset)

where offset is the bytecode offset of the frame's last instruction.
We hold on to code objects rather than frames so that a captured stack
never keeps local variables of the capturing frames alive.  Mapping an
entry to a source line is deferred to resolve(), which is only called
when a report has to be printed.
"""

__all__ = [
    'MAX_DEPTH',
    'Frame',
    'capture',
    'format_frame',
    'resolve',
]

import sys
from collections import namedtuple


MAX_DEPTH = 256


Frame = namedtuple('Frame', 'function filename lineno offset')


def capture(skip=0, limit=MAX_DEPTH):
    """Capture up to `limit` entries, starting from the caller.

       `skip` is the number of additional frames to skip; capture(1)
       called from within function f starts from the caller of f.
       Stacks deeper than `limit` are silently truncated.
    """
    try:
        frame = sys._getframe(skip + 1)
    except ValueError:
        return ()
    entries = []
    while frame is not None and len(entries) < limit:
        entries.append((
            frame.f_globals.get('__name__'),
            frame.f_code,
            frame.f_lasti,
        ))
        frame = frame.f_back
    return tuple(entries)


def resolve(stack):
    """Resolve raw entries into Frame objects, in the same order."""
    for module_name, code, offset in stack:
        function = getattr(code, 'co_qualname', code.co_name)
        if module_name:
            function = '%s.%s' % (module_name, function)
        yield Frame(
            function=function,
            filename=code.co_filename,
            lineno=_find_lineno(code, offset),
            offset=max(offset, 0),
        )


def _find_lineno(code, offset):
    for start, end, lineno in code.co_lines():
        if start <= offset < end:
            return lineno
    return None


def format_frame(frame):
    return '%s(...)\n\t%s:%s +0x%x\n' % (
        frame.function,
        frame.filename,
        '?' if frame.lineno is None else frame.lineno,
        frame.offset,
    )
