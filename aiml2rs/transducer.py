"""
# aiml2rs: transducer.py

Licensed under "MIT No Attribution" (MIT-0), see LICENSE.

The AIML transducer, converting a stream of AIML tokens into categories.

Tokens are consumed one at a time.
Text (with whitespace normalised, see `normalise_whitespace`) goes into the current sink (see `state.py`).
Each tag is looked up in a table of handlers, one for opening and one for closing:
- a handler that merely changes state returns None
- a handler that stands for some RiveScript returns that replacement text,
  which is then routed into the current sink just like text
Tags without a handler are reproduced verbatim (they may well be HTML),
with a warning unless the tag is on the ignore list.
"""

import re
from typing import Callable, Iterable, Optional, Union

from aiml2rs.categories import ResultSet
from aiml2rs.classifier import (
    CASE_TRANSFORM_TAG_NAMES,
    CATEGORY_FIELD_TAG_NAMES,
    INDEXED_REFERENCE_FROM_TAG_NAME,
    TagRole,
    classify_tag,
    extract_old_style_get_variable_name,
    is_ignored_tag,
)
from aiml2rs.constants import (
    ASSIGNMENT_UNDEFINED_VALUE,
    CONDITION_UNDEFINED_VALUE,
    CONDITION_UNKNOWN_VALUES,
    CONDITION_WILDCARD_VALUE,
    DEFAULT_TOPIC,
    FORMAL_VARIABLE_NAME,
    RANDOM_SEPARATOR,
    RENAMED_TOPIC_VARIABLE_NAME,
    RESERVED_TOPIC_VARIABLE_NAME,
)
from aiml2rs.diagnostics import DiagnosticLog
from aiml2rs.settings import ConversionSettings
from aiml2rs.state import AssignmentSink, ConditionSink, ParserState, RandomSink
from aiml2rs.tokens import TagClose, TagOpen, Text, Token, build_raw_markup

TagHandler = Callable[[Union[TagOpen, TagClose]], Optional[str]]

CHOICE_ITEM_ALTERNATIVE = 'ALTERNATIVE'
CHOICE_ITEM_BRANCH = 'BRANCH'
CHOICE_ITEM_SKIPPED = 'SKIPPED'


def collapse_whitespace(text: str) -> str:
    """
    Collapse each run of whitespace to a single space.
    """
    return re.sub(pattern=r'[\s]+', repl=' ', string=text)


def replace_whitespace_run(whitespace_match: re.Match) -> str:
    is_interior = 0 < whitespace_match.start() and whitespace_match.end() < len(whitespace_match.string)
    if is_interior and '\n' in whitespace_match.group():
        return '\n'

    return ' '


def normalise_whitespace(text: str) -> str:
    """
    Normalise the whitespace in a run of text between tags.

    An interior run of whitespace spanning lines becomes a single newline
    (dropping indentation and blank lines); any other run becomes a single space.
    """
    return re.sub(pattern=r'[\s]+', repl=replace_whitespace_run, string=text)


def normalise_wildcards(pattern: str) -> str:
    """
    Convert AIML `_` wildcards to `*`, RiveScript having no separate higher-priority wildcard.
    """
    return pattern.replace('_', '*')


def extract_first_index(index: Optional[str]) -> str:
    """
    Extract the first component of an AIML index attribute, defaulting to 1.

    For example, `2,1` (second-last input, first sentence) becomes `2`.
    """
    if index is None:
        return '1'

    first_index = index.split(',')[0].strip()
    if first_index == '':
        return '1'

    return first_index


def build_indexed_reference(rivescript_tag_name: str, index: Optional[str]) -> str:
    first_index = extract_first_index(index)
    if first_index == '1':
        return f'<{rivescript_tag_name}>'

    return f'<{rivescript_tag_name}{first_index}>'


def build_assignment(variable_name: str, value: str, thinking: bool) -> str:
    """
    Build RiveScript for an assignment `<set name="«variable_name»">«value»</set>`.

    The value is echoed back immediately (as AIML does) unless inside `<think>`.
    """
    if value == '':
        value = ASSIGNMENT_UNDEFINED_VALUE
    elif variable_name == FORMAL_VARIABLE_NAME:
        value = f'{{formal}}{value}{{/formal}}'

    assignment = f'<set {variable_name}={value}>'
    if not thinking:
        assignment += f'<get {variable_name}>'

    return assignment


def build_random(alternatives: Iterable[str]) -> str:
    kept_alternatives = [
        alternative.strip()
        for alternative in alternatives
        if alternative.strip() != ''
    ]

    return '{random}' + RANDOM_SEPARATOR.join(kept_alternatives) + '{/random}'


def build_condition_branch(variable_name: str, value: str) -> str:
    """
    Build a RiveScript condition line (up to and including `=>`) for `<li value="«value»">`.
    """
    if value.lower() in CONDITION_UNKNOWN_VALUES:
        value = CONDITION_UNDEFINED_VALUE

    if value == CONDITION_WILDCARD_VALUE:
        return f'<get {variable_name}> != {CONDITION_UNDEFINED_VALUE} => '

    return f'<get {variable_name}> == {value} => '


class AimlTransducer:
    """
    Object converting the AIML tokens of one file into a `ResultSet` of categories.
    """
    _aiml_file_name: str
    _settings: 'ConversionSettings'
    _diagnostics: 'DiagnosticLog'
    _state: 'ParserState'
    _result_set: 'ResultSet'
    _opening_handler_from_tag_name: dict[str, TagHandler]
    _closing_handler_from_tag_name: dict[str, TagHandler]

    def __init__(self, aiml_file_name: str, settings: 'ConversionSettings', diagnostics: 'DiagnosticLog'):
        self._aiml_file_name = aiml_file_name
        self._settings = settings
        self._diagnostics = diagnostics
        self._state = ParserState()
        self._result_set = ResultSet()
        self._opening_handler_from_tag_name = {
            'aiml': self._ignore_tag,
            'category': self._open_category,
            **{
                tag_name: self._open_category_field
                for tag_name in CATEGORY_FIELD_TAG_NAMES
            },
            'think': self._open_think,
            'topic': self._open_topic,
            'random': self._open_random,
            'condition': self._open_condition,
            'li': self._open_choice_item,
            'set': self._open_set,
            'srai': self._open_srai,
            'sr': self._open_sr,
            'person': self._open_person,
            'star': self._open_indexed_reference,
            'input': self._open_indexed_reference,
            'request': self._open_indexed_reference,
            'response': self._open_indexed_reference,
            'id': self._open_id,
            'bot': self._open_variable_read,
            'get': self._open_variable_read,
            'date': self._open_date,
            'size': self._open_size,
            **{
                tag_name: self._open_case_transform
                for tag_name in CASE_TRANSFORM_TAG_NAMES
            },
        }
        self._closing_handler_from_tag_name = {
            'aiml': self._ignore_tag,
            'category': self._close_category,
            **{
                tag_name: self._close_category_field
                for tag_name in CATEGORY_FIELD_TAG_NAMES
            },
            'think': self._close_think,
            'topic': self._close_topic,
            'random': self._close_random,
            'condition': self._close_condition,
            'li': self._close_choice_item,
            'set': self._close_set,
            'srai': self._close_srai,
            'sr': self._ignore_tag,
            'person': self._ignore_tag,
            'star': self._ignore_tag,
            'input': self._ignore_tag,
            'request': self._ignore_tag,
            'response': self._ignore_tag,
            'id': self._ignore_tag,
            'bot': self._ignore_tag,
            'get': self._ignore_tag,
            'date': self._ignore_tag,
            'size': self._ignore_tag,
            **{
                tag_name: self._close_case_transform
                for tag_name in CASE_TRANSFORM_TAG_NAMES
            },
        }

    @property
    def state(self) -> 'ParserState':
        return self._state

    @property
    def result_set(self) -> 'ResultSet':
        return self._result_set

    def transduce(self, tokens: Iterable[Token]) -> 'ResultSet':
        for token in tokens:
            self.process_token(token)

        return self.finish()

    def process_token(self, token: Token):
        if isinstance(token, Text):
            self.process_text(token.text)
        else:
            self.process_tag(token)

    def process_text(self, text: str):
        self._state.buffer_stack.route(normalise_whitespace(text))

    def process_tag(self, token: Union[TagOpen, TagClose]):
        tag_name = token.name.lower()
        tag_role = classify_tag(tag_name)
        is_opening = isinstance(token, TagOpen)

        if is_opening:
            event_indicator = 'S'
            handler_from_tag_name = self._opening_handler_from_tag_name
        else:
            event_indicator = 'E'
            handler_from_tag_name = self._closing_handler_from_tag_name

        self._diagnostics.debug(f'[{event_indicator}] {tag_name} ({tag_role.value})')

        if tag_role is TagRole.UNKNOWN:
            self._reproduce_verbatim(token, tag_name)
            return

        if extract_old_style_get_variable_name(tag_name) is not None:
            handler = handler_from_tag_name['get']
        else:
            handler = handler_from_tag_name[tag_name]

        replacement_text = handler(token)
        if replacement_text is not None:
            self._state.buffer_stack.route(replacement_text)

    def finish(self) -> 'ResultSet':
        """
        Conclude the token stream, abandoning any category left open.
        """
        if self._state.category is not None:
            self._diagnostics.warn(
                f'Unclosed category at {self._aiml_file_name} in pattern {self._state.pattern}; abandoned'
            )
            self._state.end_category()

        return self._result_set

    def _reproduce_verbatim(self, token: Union[TagOpen, TagClose], tag_name: str):
        raw_markup = build_raw_markup(token)
        self._state.buffer_stack.route(raw_markup)

        if not is_ignored_tag(tag_name):
            self._diagnostics.warn(f'Unhandled AIML tag: {raw_markup}')

    @staticmethod
    def _ignore_tag(_token: Union[TagOpen, TagClose]) -> Optional[str]:
        return None

    def _open_category(self, _token: 'TagOpen') -> Optional[str]:
        if self._state.category is not None:
            self._diagnostics.debug('Nested category; abandoning the outer one', depth=1)

        self._state.begin_category()

        return None

    def _close_category(self, _token: 'TagClose') -> Optional[str]:
        state = self._state
        category = state.category

        if category is None:
            return None

        if state.tainted:
            self._diagnostics.debug('Category was tainted! Skipping!', depth=1)
            state.end_category()
            return None

        category.branches = state.condition_branches
        self._result_set.add(state.current_topic, category)
        self._diagnostics.debug(f'Committed {category!r} to topic {state.current_topic}', depth=1)
        state.end_category()

        return None

    def _open_category_field(self, token: 'TagOpen') -> Optional[str]:
        state = self._state
        tag_name = token.name.lower()

        if tag_name == 'that' and state.active_container == 'template':
            return build_indexed_reference('reply', token.get_attribute('index'))

        state.active_container = tag_name
        state.buffer_stack.text_sink.clear()

        return None

    def _close_category_field(self, token: 'TagClose') -> Optional[str]:
        state = self._state
        tag_name = token.name.lower()

        if tag_name == 'that' and state.active_container == 'template':
            return None

        text = state.text_buffer.strip()
        if tag_name == 'pattern':
            text = normalise_wildcards(collapse_whitespace(text))
        elif tag_name == 'that':
            text = collapse_whitespace(text)

        if state.category is None:
            self._diagnostics.debug(f'<{tag_name}> outside of a category; ignored', depth=1)
        else:
            state.category.set_field(tag_name, text)

        state.active_container = None

        return None

    def _open_think(self, _token: 'TagOpen') -> Optional[str]:
        self._state.thinking = True
        return None

    def _close_think(self, _token: 'TagClose') -> Optional[str]:
        self._state.thinking = False
        return None

    def _open_topic(self, token: 'TagOpen') -> Optional[str]:
        if self._settings.real_topics_enabled:
            topic = token.get_attribute('name')
            if not topic:
                topic = DEFAULT_TOPIC

            self._state.current_topic = topic
            self._diagnostics.debug(f'Set RiveScript topic to {topic}', depth=1)

        return None

    def _close_topic(self, _token: 'TagClose') -> Optional[str]:
        if self._settings.real_topics_enabled:
            self._state.current_topic = DEFAULT_TOPIC

        return None

    def _open_random(self, _token: 'TagOpen') -> Optional[str]:
        state = self._state

        if state.in_random:
            self._diagnostics.warn(f'Embedded randoms at {self._aiml_file_name} in pattern {state.pattern}')
            state.tainted = True

        state.buffer_stack.push(RandomSink())

        return None

    def _close_random(self, _token: 'TagClose') -> Optional[str]:
        random_sink = self._state.buffer_stack.find_innermost(RandomSink)
        if random_sink is None:
            return None

        self._state.buffer_stack.remove(random_sink)
        random = build_random(random_sink.alternatives)
        random_sink.alternatives = []

        return random

    def _open_condition(self, token: 'TagOpen') -> Optional[str]:
        # Only simple conditions are supported:
        #   <condition name="x">
        #     <li value="y">...</li>
        #   </condition>
        condition_sink = ConditionSink(token.get_attribute('name'))
        self._state.buffer_stack.push(condition_sink)
        self._state.open_conditions.append(condition_sink)

        return None

    def _close_condition(self, _token: 'TagClose') -> Optional[str]:
        state = self._state
        if len(state.open_conditions) == 0:
            return None

        condition_sink = state.open_conditions.pop()
        state.finish_condition(condition_sink)

        return None

    def _open_choice_item(self, token: 'TagOpen') -> Optional[str]:
        state = self._state
        sink = state.buffer_stack.find_innermost(RandomSink, ConditionSink)

        if isinstance(sink, RandomSink):
            sink.open_alternative()
            state.open_choice_items.append(CHOICE_ITEM_ALTERNATIVE)
        elif isinstance(sink, ConditionSink):
            state.open_choice_items.append(self._open_condition_branch(token, sink))
        else:
            self._diagnostics.debug('<li> outside of <random> or <condition>; ignored', depth=1)
            state.open_choice_items.append(CHOICE_ITEM_SKIPPED)

        return None

    def _open_condition_branch(self, token: 'TagOpen', condition_sink: 'ConditionSink') -> str:
        variable_name = token.get_attribute('name')
        if not variable_name:
            variable_name = condition_sink.variable_name

        if not variable_name:
            self._diagnostics.warn(
                f'Condition too complicated to handle at {self._aiml_file_name} in pattern {self._state.pattern}'
            )
            return CHOICE_ITEM_SKIPPED

        value = token.get_attribute('value')
        if not value:
            self._diagnostics.debug('Condition item without a value; ending the condition', depth=1)
            self._state.finish_condition(condition_sink)
            return CHOICE_ITEM_SKIPPED

        condition_sink.open_branch(build_condition_branch(variable_name, value))

        return CHOICE_ITEM_BRANCH

    def _close_choice_item(self, _token: 'TagClose') -> Optional[str]:
        state = self._state

        if len(state.open_choice_items) > 0:
            choice_item_kind = state.open_choice_items.pop()
            self._diagnostics.debug(f'Closed <li> ({choice_item_kind})', depth=1)

        return None

    def _open_set(self, token: 'TagOpen') -> Optional[str]:
        state = self._state
        variable_name = token.get_attribute('name')

        if not variable_name:
            self._diagnostics.debug('Found opening <set> tag without a name; content kept in place', depth=1)
            state.open_assignments.append(None)
            return None

        assignment_sink = AssignmentSink(variable_name)
        state.buffer_stack.push(assignment_sink)
        state.open_assignments.append(assignment_sink)
        self._diagnostics.debug(f'Found opening <set> tag for name={variable_name}', depth=1)

        return None

    def _close_set(self, _token: 'TagClose') -> Optional[str]:
        state = self._state
        if len(state.open_assignments) == 0:
            return None

        assignment_sink = state.open_assignments.pop()
        if assignment_sink is None:
            return None

        state.buffer_stack.remove(assignment_sink)

        variable_name = assignment_sink.name
        if variable_name == RESERVED_TOPIC_VARIABLE_NAME and not self._settings.real_topics_enabled:
            variable_name = RENAMED_TOPIC_VARIABLE_NAME

        assignment = build_assignment(variable_name, assignment_sink.value.strip(), state.thinking)
        self._diagnostics.debug(f'End <set> tag with buffer: {assignment}', depth=1)

        return assignment

    @staticmethod
    def _open_srai(_token: 'TagOpen') -> Optional[str]:
        return '{@'

    @staticmethod
    def _close_srai(_token: 'TagClose') -> Optional[str]:
        return '}'

    @staticmethod
    def _open_sr(_token: 'TagOpen') -> Optional[str]:
        return '<@>'

    @staticmethod
    def _open_person(_token: 'TagOpen') -> Optional[str]:
        return '<person>'

    @staticmethod
    def _open_id(_token: 'TagOpen') -> Optional[str]:
        return '<id>'

    @staticmethod
    def _open_indexed_reference(token: 'TagOpen') -> Optional[str]:
        rivescript_tag_name = INDEXED_REFERENCE_FROM_TAG_NAME[token.name.lower()]
        return build_indexed_reference(rivescript_tag_name, token.get_attribute('index'))

    def _open_variable_read(self, token: 'TagOpen') -> Optional[str]:
        tag_name = token.name.lower()
        variable_name = token.get_attribute('name')

        old_style_variable_name = extract_old_style_get_variable_name(tag_name)
        if old_style_variable_name is not None:
            tag_name = 'get'
            variable_name = old_style_variable_name

        if not variable_name:
            self._reproduce_verbatim(token, tag_name)
            return None

        return f'<{tag_name} {variable_name}>'

    @staticmethod
    def _open_case_transform(token: 'TagOpen') -> Optional[str]:
        return f'{{{token.name.lower()}}}'

    @staticmethod
    def _close_case_transform(token: 'TagClose') -> Optional[str]:
        return f'{{/{token.name.lower()}}}'

    @staticmethod
    def _open_date(token: 'TagOpen') -> Optional[str]:
        date_format = token.get_attribute('format')
        if date_format:
            return f'<call>date {date_format}</call>'

        return '<call>date</call>'

    @staticmethod
    def _open_size(_token: 'TagOpen') -> Optional[str]:
        return '<call>size</call>'


def transduce_aiml(tokens: Iterable[Token], aiml_file_name: str, settings: 'ConversionSettings',
                   diagnostics: 'DiagnosticLog') -> 'ResultSet':
    transducer = AimlTransducer(aiml_file_name, settings, diagnostics)
    return transducer.transduce(tokens)
