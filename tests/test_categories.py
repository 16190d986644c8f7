"""
# aiml2rs: test_categories.py

Licensed under "MIT No Attribution" (MIT-0), see LICENSE.

Perform unit testing for `categories.py`.
"""

import unittest

from aiml2rs.categories import Category, ResultSet
from aiml2rs.exceptions import CommittedMutateException


def build_category(pattern: str, template: str) -> Category:
    category = Category()
    category.pattern = pattern
    category.template = template

    return category


class TestCategories(unittest.TestCase):
    def test_category_set_field(self):
        category = Category()
        category.set_field('pattern', 'HELLO')
        category.set_field('that', 'HI')
        category.set_field('template', 'How are you?')
        self.assertEqual(category.pattern, 'HELLO')
        self.assertEqual(category.preceding_reply, 'HI')
        self.assertEqual(category.template, 'How are you?')

        with self.assertRaises(ValueError):
            category.set_field('topic', 'X')

    def test_category_branches_are_copied(self):
        branches = ['<get x> == 1 => one']
        category = Category()
        category.branches = branches
        branches.append('<get x> == 2 => two')
        self.assertEqual(category.branches, ('<get x> == 1 => one',))

    def test_category_commit(self):
        category = build_category('HELLO', 'Hi')
        category.commit()
        self.assertTrue(category.is_committed)

        with self.assertRaises(CommittedMutateException):
            category.pattern = 'BYE'
        with self.assertRaises(CommittedMutateException):
            category.preceding_reply = 'BYE'
        with self.assertRaises(CommittedMutateException):
            category.template = 'Bye'
        with self.assertRaises(CommittedMutateException):
            category.branches = []

    def test_result_set_preserves_order(self):
        result_set = ResultSet()
        hello = build_category('HELLO', 'Hi')
        games = build_category('GAMES', 'Chess')
        bye = build_category('BYE', 'Bye')
        result_set.add('random', hello)
        result_set.add('games', games)
        result_set.add('random', bye)

        self.assertEqual(result_set.topics, ['random', 'games'])
        self.assertEqual(result_set.get_categories('random'), [hello, bye])
        self.assertEqual(result_set.get_categories('unknown'), [])
        self.assertEqual(list(result_set.items()), [('random', [hello, bye]), ('games', [games])])
        self.assertEqual(len(result_set), 3)
        self.assertTrue(hello.is_committed)


if __name__ == '__main__':
    unittest.main()
