"""
# aiml2rs: categories.py

Licensed under "MIT No Attribution" (MIT-0), see LICENSE.

Categories (stimulus/response records) and the topic-keyed set they are committed to.
"""

import copy
from typing import Iterator

from aiml2rs.exceptions import CommittedMutateException


class Category:
    """
    One AIML category, as it will be written in RiveScript:
    ````
    + «pattern»
    % «preceding_reply»
    * «branch»
    [...]
    - «template»
    ````
    An empty `preceding_reply` means unset.
    Once committed, a category cannot be mutated.
    """
    _is_committed: bool
    _pattern: str
    _preceding_reply: str
    _template: str
    _branches: list[str]

    def __init__(self):
        self._is_committed = False
        self._pattern = ''
        self._preceding_reply = ''
        self._template = ''
        self._branches = []

    @property
    def is_committed(self) -> bool:
        return self._is_committed

    @property
    def pattern(self) -> str:
        return self._pattern

    @pattern.setter
    def pattern(self, value: str):
        if self._is_committed:
            raise CommittedMutateException('error: cannot set `pattern` after `commit()`')

        self._pattern = value

    @property
    def preceding_reply(self) -> str:
        return self._preceding_reply

    @preceding_reply.setter
    def preceding_reply(self, value: str):
        if self._is_committed:
            raise CommittedMutateException('error: cannot set `preceding_reply` after `commit()`')

        self._preceding_reply = value

    @property
    def template(self) -> str:
        return self._template

    @template.setter
    def template(self, value: str):
        if self._is_committed:
            raise CommittedMutateException('error: cannot set `template` after `commit()`')

        self._template = value

    @property
    def branches(self) -> tuple[str, ...]:
        return tuple(self._branches)

    @branches.setter
    def branches(self, value: list[str]):
        if self._is_committed:
            raise CommittedMutateException('error: cannot set `branches` after `commit()`')

        self._branches = copy.copy(value)

    def set_field(self, tag_name: str, value: str):
        """
        Set the field corresponding to a category field tag (`pattern`, `that`, or `template`).
        """
        if tag_name == 'pattern':
            self.pattern = value
        elif tag_name == 'that':
            self.preceding_reply = value
        elif tag_name == 'template':
            self.template = value
        else:
            raise ValueError(f'error: `{tag_name}` is not a category field tag')

    def commit(self):
        self._is_committed = True

    def __repr__(self):
        return (
            f'Category(pattern={self._pattern!r}, preceding_reply={self._preceding_reply!r}, '
            f'template={self._template!r}, branches={self._branches!r})'
        )


class ResultSet:
    """
    Committed categories keyed by topic.

    Topics, and categories within a topic, are kept in the order first encountered,
    since RiveScript tooling may rely upon the order of triggers.
    """
    _categories_from_topic: dict[str, list['Category']]

    def __init__(self):
        self._categories_from_topic = {}

    def add(self, topic: str, category: 'Category'):
        category.commit()
        self._categories_from_topic.setdefault(topic, []).append(category)

    @property
    def topics(self) -> list[str]:
        return list(self._categories_from_topic)

    def get_categories(self, topic: str) -> list['Category']:
        return list(self._categories_from_topic.get(topic, []))

    def items(self) -> Iterator[tuple[str, list['Category']]]:
        for topic, categories in self._categories_from_topic.items():
            yield topic, list(categories)

    def __len__(self) -> int:
        return sum(len(categories) for categories in self._categories_from_topic.values())
