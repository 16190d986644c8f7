"""
# aiml2rs: test_tokens.py

Licensed under "MIT No Attribution" (MIT-0), see LICENSE.

Perform unit testing for `tokens.py`.
"""

import io
import unittest

from aiml2rs.exceptions import MalformedAimlException
from aiml2rs.tokens import TagClose, TagOpen, Text, build_raw_markup, read_chunks, tokenize_aiml


class TestTokens(unittest.TestCase):
    def test_tag_open_get_attribute(self):
        tag_open = TagOpen('li', (('NAME', 'mood'), ('value', 'happy')))
        self.assertEqual(tag_open.get_attribute('name'), 'mood')
        self.assertEqual(tag_open.get_attribute('VALUE'), 'happy')
        self.assertIsNone(tag_open.get_attribute('index'))
        self.assertIsNone(TagOpen('li').get_attribute('value'))

    def test_read_chunks(self):
        self.assertEqual(list(read_chunks('<aiml/>')), ['<aiml/>'])
        self.assertEqual(list(read_chunks(b'<aiml/>')), [b'<aiml/>'])
        self.assertEqual(list(read_chunks(io.StringIO('<aiml/>'))), ['<aiml/>'])
        self.assertEqual(list(read_chunks(io.StringIO(''))), [])

    def test_tokenize_aiml(self):
        self.assertEqual(
            list(tokenize_aiml('<aiml><b x="1">hi &amp; bye</b><br/></aiml>')),
            [
                TagOpen('aiml', ()),
                TagOpen('b', (('x', '1'),)),
                Text('hi & bye'),
                TagClose('b'),
                TagOpen('br', ()),
                TagClose('br'),
                TagClose('aiml'),
            ],
        )
        self.assertEqual(
            list(tokenize_aiml('<aiml>\n  <pattern>HI</pattern>\n</aiml>')),
            [
                TagOpen('aiml', ()),
                Text('\n  '),
                TagOpen('pattern', ()),
                Text('HI'),
                TagClose('pattern'),
                Text('\n'),
                TagClose('aiml'),
            ],
        )

    def test_tokenize_aiml_coalesces_text(self):
        self.assertEqual(
            list(tokenize_aiml('<a>one <!-- comment --> two<?pi data?> three</a>')),
            [TagOpen('a', ()), Text('one  two three'), TagClose('a')],
        )

    def test_tokenize_aiml_uses_local_names(self):
        self.assertEqual(
            list(tokenize_aiml('<aiml xmlns="http://alicebot.org/2001/AIML-1.0.1"><a:b xmlns:a="urn:x"/></aiml>')),
            [TagOpen('aiml', ()), TagOpen('b', ()), TagClose('b'), TagClose('aiml')],
        )

    def test_tokenize_aiml_binary_source(self):
        self.assertEqual(
            list(tokenize_aiml(io.BytesIO(b'<?xml version="1.0" encoding="ISO-8859-1"?><t>caf\xe9</t>'))),
            [TagOpen('t', ()), Text('café'), TagClose('t')],
        )

    def test_tokenize_aiml_malformed(self):
        with self.assertRaises(MalformedAimlException) as context:
            list(tokenize_aiml('<aiml>\n<category></aiml>'))
        self.assertEqual(context.exception.line_number, 2)

        tokens = tokenize_aiml(io.BytesIO(b'<aiml><b>'))
        self.assertEqual(next(tokens), TagOpen('aiml', ()))
        with self.assertRaises(MalformedAimlException):
            list(tokens)

    def test_build_raw_markup(self):
        self.assertEqual(build_raw_markup(TagOpen('foo')), '<foo>')
        self.assertEqual(build_raw_markup(TagOpen('foo', (('a', '1'), ('B', 'two')))), '<foo a="1" B="two">')
        self.assertEqual(build_raw_markup(TagClose('foo')), '</foo>')


if __name__ == '__main__':
    unittest.main()
