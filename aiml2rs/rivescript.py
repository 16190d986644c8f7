"""
# aiml2rs: rivescript.py

Licensed under "MIT No Attribution" (MIT-0), see LICENSE.

Assembly of RiveScript from converted categories.

Each topic is written as a block of categories, each category as
````
+ «trigger»
% «preceding_reply»
* «branch»
[...]
- «reply»
````
followed by a blank line, where the `%` line is omitted if there is no preceding reply.
Topics other than the default are enclosed in `> topic «name»` and `< topic`.
"""

import re
from typing import Optional

from aiml2rs.categories import Category, ResultSet
from aiml2rs.constants import DEFAULT_TOPIC, RIVESCRIPT_HEADER
from aiml2rs.diagnostics import DiagnosticLog

TRIGGER_INVALID_CHARACTER_REGEX = r'[^A-Za-z0-9<>{}=\ *_#()\[\]]'


def compute_trigger_syntax_error_match(trigger: str) -> Optional[re.Match]:
    return re.search(pattern=TRIGGER_INVALID_CHARACTER_REGEX, string=trigger, flags=re.ASCII)


def build_trigger(pattern: str) -> Optional[str]:
    """
    Build a RiveScript trigger from an AIML pattern, or None if the pattern cannot be used as a trigger.

    Only letters, digits, spaces, and the characters `<>{}=*_#()[]` are allowed in a trigger.
    """
    trigger = pattern.lower()

    if compute_trigger_syntax_error_match(trigger) is not None:
        return None

    return trigger


def build_preceding_reply(that: str) -> str:
    """
    Build a RiveScript `%` condition from an AIML `<that>`, stripping characters not allowed in a trigger.
    """
    return re.sub(pattern=TRIGGER_INVALID_CHARACTER_REGEX, repl='', string=that.lower(), flags=re.ASCII)


def format_reply_text(text: str) -> str:
    """
    Format reply (or condition) text for a single RiveScript line.

    Line breaks in the AIML text are escaped as `\\n`,
    and HTML line breaks (`<br>`, `<br/>`, `<br></br>`, etc.) become line breaks.
    """
    text = text.replace('\n', '\\n')
    text = re.sub(
        pattern=r'''
            [<] br (?: [\s/] [^>]* )? [>]
            (?: [<] [/] br [\s]* [>] )?
        ''',
        repl='\n',
        string=text,
        flags=re.IGNORECASE | re.VERBOSE,
    )
    text = text.strip()

    return text


def build_category_lines(category: 'Category', diagnostics: 'DiagnosticLog') -> list[str]:
    trigger = build_trigger(category.pattern)
    if trigger is None:
        diagnostics.warn(f"Trigger '{category.pattern.lower()}' has syntax errors. Skipping.")
        return []

    lines = [f'+ {trigger}']

    if category.preceding_reply != '':
        lines.append(f'% {build_preceding_reply(category.preceding_reply)}')

    for branch in category.branches:
        lines.append(f'* {format_reply_text(branch)}')

    lines.append(f'- {format_reply_text(category.template)}')

    return lines


def build_rivescript(result_set: 'ResultSet', diagnostics: 'DiagnosticLog') -> str:
    rivescript = RIVESCRIPT_HEADER

    for topic, categories in result_set.items():
        if topic != DEFAULT_TOPIC:
            rivescript += f'> topic {topic}\n\n'

        for category in categories:
            category_lines = build_category_lines(category, diagnostics)
            if len(category_lines) == 0:
                continue

            rivescript += '\n'.join(category_lines) + '\n\n'

        if topic != DEFAULT_TOPIC:
            rivescript += '< topic\n\n'

    return rivescript
