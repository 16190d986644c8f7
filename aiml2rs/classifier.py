"""
# aiml2rs: classifier.py

Licensed under "MIT No Attribution" (MIT-0), see LICENSE.

Classification of AIML tags by the role they play in conversion.
"""

import enum
import re
import types
from typing import Optional

from aiml2rs.constants import IGNORED_TAG_NAMES


class TagRole(enum.Enum):
    """
    The role of an AIML tag.

    - STRUCTURAL: containers making up a category (`<category>`, `<pattern>`, `<that>`, `<template>`)
    - MODE_TOGGLE: changes parser state without echoing any text
    - SUBSTITUTION: replaced by fixed or attribute-derived RiveScript text
    - STATEFUL_SUBSTITUTION: replaced by RiveScript text built from accumulated content (`<set>`)
    - UNKNOWN: reproduced verbatim
    """
    STRUCTURAL = 'STRUCTURAL'
    MODE_TOGGLE = 'MODE_TOGGLE'
    SUBSTITUTION = 'SUBSTITUTION'
    STATEFUL_SUBSTITUTION = 'STATEFUL_SUBSTITUTION'
    UNKNOWN = 'UNKNOWN'


ROLE_FROM_TAG_NAME = types.MappingProxyType({
    'aiml': TagRole.STRUCTURAL,
    'category': TagRole.STRUCTURAL,
    'pattern': TagRole.STRUCTURAL,
    'that': TagRole.STRUCTURAL,
    'template': TagRole.STRUCTURAL,
    'think': TagRole.MODE_TOGGLE,
    'topic': TagRole.MODE_TOGGLE,
    'random': TagRole.MODE_TOGGLE,
    'condition': TagRole.MODE_TOGGLE,
    'li': TagRole.MODE_TOGGLE,
    'srai': TagRole.SUBSTITUTION,
    'sr': TagRole.SUBSTITUTION,
    'star': TagRole.SUBSTITUTION,
    'input': TagRole.SUBSTITUTION,
    'request': TagRole.SUBSTITUTION,
    'response': TagRole.SUBSTITUTION,
    'person': TagRole.SUBSTITUTION,
    'id': TagRole.SUBSTITUTION,
    'bot': TagRole.SUBSTITUTION,
    'get': TagRole.SUBSTITUTION,
    'uppercase': TagRole.SUBSTITUTION,
    'lowercase': TagRole.SUBSTITUTION,
    'formal': TagRole.SUBSTITUTION,
    'sentence': TagRole.SUBSTITUTION,
    'date': TagRole.SUBSTITUTION,
    'size': TagRole.SUBSTITUTION,
    'set': TagRole.STATEFUL_SUBSTITUTION,
})
CATEGORY_FIELD_TAG_NAMES = ('pattern', 'that', 'template')
CASE_TRANSFORM_TAG_NAMES = ('uppercase', 'lowercase', 'formal', 'sentence')
INDEXED_REFERENCE_FROM_TAG_NAME = types.MappingProxyType({
    'star': 'star',
    'input': 'input',
    'request': 'input',
    'response': 'reply',
})

_OLD_STYLE_GET_TAG_NAME_REGEX_COMPILED = re.compile(pattern=r'get_ (?P<variable_name> .+ )', flags=re.VERBOSE)


def extract_old_style_get_variable_name(tag_name: str) -> Optional[str]:
    """
    Extract the variable name from an old-style get tag, e.g. `name` from `<get_name/>`.
    """
    old_style_get_match = _OLD_STYLE_GET_TAG_NAME_REGEX_COMPILED.fullmatch(tag_name)
    if old_style_get_match is None:
        return None

    return old_style_get_match.group('variable_name')


def classify_tag(tag_name: str) -> TagRole:
    tag_name = tag_name.lower()

    try:
        return ROLE_FROM_TAG_NAME[tag_name]
    except KeyError:
        pass

    if extract_old_style_get_variable_name(tag_name) is not None:
        return TagRole.SUBSTITUTION

    return TagRole.UNKNOWN


def is_ignored_tag(tag_name: str) -> bool:
    """
    Whether an unhandled tag should be reproduced without an "unhandled tag" warning.
    """
    return tag_name.lower() in IGNORED_TAG_NAMES
