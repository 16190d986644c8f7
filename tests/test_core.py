"""
# aiml2rs: test_core.py

Licensed under "MIT No Attribution" (MIT-0), see LICENSE.

Perform unit testing for `core.py`.
"""

import io
import unittest

from aiml2rs.core import aiml_to_rivescript, compute_rive_file_name, is_aiml_file, parse_aiml
from aiml2rs.diagnostics import DiagnosticLog
from aiml2rs.exceptions import MalformedAimlException
from aiml2rs.settings import ConversionSettings


class TestCore(unittest.TestCase):
    maxDiff = None

    def test_is_aiml_file(self):
        self.assertTrue(is_aiml_file('std-hello.aiml'))
        self.assertTrue(is_aiml_file('STD-HELLO.AIML'))
        self.assertFalse(is_aiml_file('std-hello.aiml.bak'))
        self.assertFalse(is_aiml_file('std-hello.rive'))
        self.assertFalse(is_aiml_file('aiml'))

    def test_compute_rive_file_name(self):
        self.assertEqual(compute_rive_file_name('std-hello.aiml'), 'std-hello.rive')
        self.assertEqual(compute_rive_file_name('path/to/std-hello.aiml'), 'std-hello.rive')
        self.assertEqual(compute_rive_file_name('LOUD.AIML'), 'LOUD.rive')
        self.assertEqual(compute_rive_file_name('notes'), 'notes.rive')

    def test_parse_aiml(self):
        diagnostics = DiagnosticLog()
        result_set = parse_aiml(
            '<aiml><category><pattern>HI</pattern><template>Hello</template></category></aiml>',
            'test.aiml',
            ConversionSettings(),
            diagnostics,
        )
        self.assertEqual(result_set.topics, ['random'])
        self.assertEqual(result_set.get_categories('random')[0].template, 'Hello')

    def test_aiml_to_rivescript(self):
        rivescript, warnings = aiml_to_rivescript(
            '''<?xml version="1.0" encoding="UTF-8"?>
<aiml version="1.0.1">
<topic name="CHEESE">
<category>
  <pattern>DO YOU LIKE CHEESE</pattern>
  <template>
    <think><set name="likes">cheese</set></think>
    <random>
      <li>Yes!</li>
      <li>Of course, <get name="name"/>.</li>
    </random>
  </template>
</category>
</topic>
<category>
  <pattern>MY NAME IS *</pattern>
  <template>Nice to meet you, <set name="name"><star/></set>.</template>
</category>
<category>
  <pattern>WHAT IS MY NAME</pattern>
  <template>
    <condition name="name">
      <li value="*">Your name is <get name="name"/>.</li>
      <li value="unknown">I do not know.</li>
    </condition>
  </template>
</category>
<category>
  <pattern>HELLO, THERE</pattern>
  <template>Dropped.</template>
</category>
</aiml>
''',
            'test.aiml',
            ConversionSettings(real_topics_enabled=True),
        )
        self.assertEqual(
            rivescript,
            '''\
// Converted using aiml2rs
! version = 2.0

> topic CHEESE

+ do you like cheese
- <set likes=cheese> {random}Yes!|Of course, <get name>.{/random}

< topic

+ my name is *
- Nice to meet you, <set name={formal}<star>{/formal}><get name>.

+ what is my name
* <get name> != undefined => Your name is <get name>.
* <get name> == undefined => I do not know.
- 

''',
        )
        self.assertEqual(warnings, ["Trigger 'hello, there' has syntax errors. Skipping."])

    def test_aiml_to_rivescript_line_breaks(self):
        rivescript, warnings = aiml_to_rivescript(
            '''<aiml>
<category>
  <pattern>POEM</pattern>
  <template>
    Roses are red,
    violets are blue.<br/>Sugar is sweet.
  </template>
</category>
</aiml>
'''
        )
        self.assertEqual(
            rivescript,
            '// Converted using aiml2rs\n! version = 2.0\n\n'
            '+ poem\n'
            '- Roses are red,\\nviolets are blue.\nSugar is sweet.\n\n',
        )
        self.assertEqual(warnings, [])

    def test_aiml_to_rivescript_stream(self):
        rivescript, warnings = aiml_to_rivescript(
            io.BytesIO(
                b'<?xml version="1.0" encoding="ISO-8859-1"?>'
                b'<aiml><category><pattern>CAFE</pattern><template>Caf\xe9</template></category></aiml>'
            ),
            'test.aiml',
        )
        self.assertEqual(rivescript, '// Converted using aiml2rs\n! version = 2.0\n\n+ cafe\n- Café\n\n')
        self.assertEqual(warnings, [])

    def test_aiml_to_rivescript_malformed(self):
        with self.assertRaises(MalformedAimlException):
            aiml_to_rivescript('<aiml><category></aiml>')


if __name__ == '__main__':
    unittest.main()
