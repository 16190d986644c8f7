"""
# aiml2rs: state.py

Licensed under "MIT No Attribution" (MIT-0), see LICENSE.

Parser state for the AIML transducer.

Text (and replacement text for tags) is routed into exactly one sink at a time.
Sinks are kept on a stack:
- `TextSink` at the bottom, never popped, accumulating the current category field
- `AssignmentSink` while inside `<set>`
- `RandomSink` while inside `<random>`
- `ConditionSink` while inside `<condition>`
The innermost open construct (the top of the stack) receives the text.
"""

from typing import Optional

from aiml2rs.categories import Category
from aiml2rs.constants import DEFAULT_TOPIC


class Sink:
    def append(self, text: str):
        raise NotImplementedError


class TextSink(Sink):
    text: str

    def __init__(self):
        self.text = ''

    def append(self, text: str):
        self.text += text

    def clear(self):
        self.text = ''


class AssignmentSink(Sink):
    name: str
    value: str

    def __init__(self, name: str):
        self.name = name
        self.value = ''

    def append(self, text: str):
        self.value += text


class RandomSink(Sink):
    """
    Accumulates the alternatives of a `<random>`; text goes to the most recently opened alternative.
    """
    alternatives: list[str]

    def __init__(self):
        self.alternatives = []

    def open_alternative(self):
        self.alternatives.append('')

    def append(self, text: str):
        if len(self.alternatives) == 0:
            self.open_alternative()

        self.alternatives[-1] += text


class ConditionSink(Sink):
    """
    Accumulates the branches of a `<condition>`; text goes to the most recently opened branch.

    Text arriving before any branch has been opened has nowhere to go and is dropped.
    """
    variable_name: Optional[str]
    branches: list[str]
    is_finished: bool

    def __init__(self, variable_name: Optional[str]):
        self.variable_name = variable_name
        self.branches = []
        self.is_finished = False

    def open_branch(self, branch: str):
        self.branches.append(branch)

    def append(self, text: str):
        if len(self.branches) == 0:
            return

        if self.branches[-1].endswith(' '):
            text = text.lstrip()

        self.branches[-1] += text


class BufferStack:
    _text_sink: 'TextSink'
    _sinks: list['Sink']

    def __init__(self):
        self._text_sink = TextSink()
        self._sinks = [self._text_sink]

    @property
    def text_sink(self) -> 'TextSink':
        return self._text_sink

    @property
    def current_sink(self) -> 'Sink':
        return self._sinks[-1]

    def push(self, sink: 'Sink'):
        self._sinks.append(sink)

    def remove(self, sink: 'Sink'):
        """
        Remove a sink (normally the top of the stack) when its construct closes.
        """
        if sink is self._text_sink:
            raise ValueError('error: cannot remove the text sink')

        for index in range(len(self._sinks) - 1, 0, -1):
            if self._sinks[index] is sink:
                del self._sinks[index]
                return

    def find_innermost(self, *sink_types: type) -> Optional['Sink']:
        for sink in reversed(self._sinks):
            if isinstance(sink, sink_types):
                return sink

        return None

    def route(self, text: str):
        self.current_sink.append(text)

    def reset(self):
        self._text_sink.clear()
        self._sinks = [self._text_sink]


class ParserState:
    """
    Mutable state for converting one AIML file.

    `condition_branches` collects the rendered branches of every finished `<condition>`
    in the current category, to be moved into the category when it closes.
    `open_conditions`, `open_choice_items`, and `open_assignments`
    track `<condition>`, `<li>`, and `<set>` nesting,
    so that each closing tag is matched with what its opening tag did.
    """
    current_topic: str
    active_container: Optional[str]
    category: Optional['Category']
    buffer_stack: 'BufferStack'
    condition_branches: list[str]
    open_conditions: list['ConditionSink']
    open_choice_items: list[str]
    open_assignments: list[Optional['AssignmentSink']]
    thinking: bool
    tainted: bool

    def __init__(self):
        self.current_topic = DEFAULT_TOPIC
        self.active_container = None
        self.category = None
        self.buffer_stack = BufferStack()
        self.condition_branches = []
        self.open_conditions = []
        self.open_choice_items = []
        self.open_assignments = []
        self.thinking = False
        self.tainted = False

    @property
    def text_buffer(self) -> str:
        return self.buffer_stack.text_sink.text

    @property
    def assignment_name(self) -> Optional[str]:
        assignment_sink = self.buffer_stack.find_innermost(AssignmentSink)
        if assignment_sink is None:
            return None

        return assignment_sink.name

    @property
    def assignment_value(self) -> str:
        assignment_sink = self.buffer_stack.find_innermost(AssignmentSink)
        if assignment_sink is None:
            return ''

        return assignment_sink.value

    @property
    def in_random(self) -> bool:
        return self.buffer_stack.find_innermost(RandomSink) is not None

    @property
    def random_alternatives(self) -> list[str]:
        random_sink = self.buffer_stack.find_innermost(RandomSink)
        if random_sink is None:
            return []

        return list(random_sink.alternatives)

    @property
    def in_condition(self) -> bool:
        return self.buffer_stack.find_innermost(ConditionSink) is not None

    @property
    def condition_variable(self) -> Optional[str]:
        condition_sink = self.buffer_stack.find_innermost(ConditionSink)
        if condition_sink is None:
            return None

        return condition_sink.variable_name

    @property
    def pattern(self) -> str:
        if self.category is None:
            return ''

        return self.category.pattern

    def finish_condition(self, condition_sink: 'ConditionSink'):
        """
        End a condition context, keeping its branches for the current category.
        """
        if condition_sink.is_finished:
            return

        self.condition_branches.extend(condition_sink.branches)
        condition_sink.branches = []
        condition_sink.is_finished = True
        self.buffer_stack.remove(condition_sink)

    def begin_category(self):
        self._reset_category_state()
        self.category = Category()

    def end_category(self):
        self._reset_category_state()

    def _reset_category_state(self):
        self.category = None
        self.active_container = None
        self.tainted = False
        self.condition_branches = []
        self.open_conditions = []
        self.open_choice_items = []
        self.open_assignments = []
        self.buffer_stack.reset()
