"""Configure close leak tracking from command-line arguments.

  PARSER ---> PARSE --+--> ARGS ---> CONFIGURED
                      |
              ARGV ---+

Tracking is also enabled at import time if the CLOSELEAK environment
variable is set to anything other than '' or '0'.
"""

__all__ = [
    'ARGS',
    'ARGV',
    'CONFIGURED',
    'PARSE',
    'PARSER',
    'add_arguments',
    'configure',
    'init',
    'parse_argv',
]

import logging
import os

from startup import startup as startup_

import closeleak
from closeleak import trackers


ARGS = 'args'
ARGV = 'argv'
CONFIGURED = 'configured'
PARSE = 'parse'
PARSER = 'parser'


ENV_VAR = 'CLOSELEAK'


def add_arguments(parser: PARSER) -> PARSE:
    group = parser.add_argument_group(closeleak.__name__)
    group.add_argument(
        '--close-leak', action='store_true',
        help='report resources that are not closed explicitly')
    group.add_argument(
        '--close-leak-max-depth',
        type=int, default=trackers.D['MAX_DEPTH'],
        help="""set max depth of captured stacks
                (default %(default)s)
             """)


def parse_argv(parser: PARSER, argv: ARGV, _: PARSE) -> ARGS:
    return parser.parse_args(argv[1:])


def configure(args: ARGS) -> CONFIGURED:
    trackers.set_max_depth(args.close_leak_max_depth)
    if args.close_leak:
        trackers.enable()


def init(startup=startup_):
    startup(add_arguments)
    startup(parse_argv)
    startup(configure)


if os.environ.get(ENV_VAR) not in (None, '', '0'):
    trackers.enable()
    logging.getLogger(__name__).debug('enable at import by %s', ENV_VAR)
