"""
# aiml2rs: constants.py

Licensed under "MIT No Attribution" (MIT-0), see LICENSE.

Constants.
"""

GENERIC_ERROR_EXIT_CODE = 1
COMMAND_LINE_ERROR_EXIT_CODE = 2
DEBUG_MODE_INDENT = '  '

AIML_FILE_EXTENSION = '.aiml'
RIVESCRIPT_FILE_EXTENSION = '.rive'
TOKENIZER_CHUNK_SIZE = 65536

DEFAULT_TOPIC = 'random'
RESERVED_TOPIC_VARIABLE_NAME = 'topic'
RENAMED_TOPIC_VARIABLE_NAME = 'alicetopic'
FORMAL_VARIABLE_NAME = 'name'

ASSIGNMENT_UNDEFINED_VALUE = '<undef>'
CONDITION_UNDEFINED_VALUE = 'undefined'
CONDITION_UNKNOWN_VALUES = ('unknown', 'om')
CONDITION_WILDCARD_VALUE = '*'
RANDOM_SEPARATOR = '|'

RIVESCRIPT_HEADER = '''\
// Converted using aiml2rs
! version = 2.0

'''

IGNORED_TAG_NAMES = frozenset([
    # common HTML
    'a',
    'b',
    'br',
    'em',
    'i',
    'img',
    'p',
    'ul',
    # AIML features without a RiveScript counterpart
    'eval',
    'learn',
    # Pandorabots extensions
    'dial',
    'dialcontact',
    'map',
    'message',
    'oob',
    'recipient',
    'search',
    'sms',
])
