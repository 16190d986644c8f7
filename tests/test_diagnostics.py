"""
# aiml2rs: test_diagnostics.py

Licensed under "MIT No Attribution" (MIT-0), see LICENSE.

Perform unit testing for `diagnostics.py`.
"""

import io
import unittest
from contextlib import redirect_stdout

from aiml2rs.core import aiml_to_rivescript
from aiml2rs.diagnostics import DiagnosticLog
from aiml2rs.settings import ConversionSettings


class TestDiagnostics(unittest.TestCase):
    def test_diagnostic_log(self):
        diagnostics = DiagnosticLog()
        with redirect_stdout(io.StringIO()) as stdout:
            diagnostics.debug('quiet')
            diagnostics.warn('first')
            diagnostics.warn('second')
        self.assertEqual(stdout.getvalue(), '')
        self.assertEqual(diagnostics.warnings, ['first', 'second'])

        diagnostics.warnings.append('not kept')
        self.assertEqual(diagnostics.warnings, ['first', 'second'])

    def test_diagnostic_log_debug_mode(self):
        diagnostics = DiagnosticLog(debug_mode_enabled=True)
        with redirect_stdout(io.StringIO()) as stdout:
            diagnostics.debug('top')
            diagnostics.debug('nested', depth=2)
            diagnostics.warn('careful')
        self.assertTrue(diagnostics.debug_mode_enabled)
        self.assertEqual(stdout.getvalue(), 'top\n    nested\nwarning: careful\n')

    def test_conversion_debug_output(self):
        with redirect_stdout(io.StringIO()) as stdout:
            aiml_to_rivescript(
                '<aiml><category><pattern>HI</pattern><template>Hey</template></category></aiml>',
                settings=ConversionSettings(debug_mode_enabled=True),
            )
        debug_lines = stdout.getvalue().splitlines()
        self.assertEqual(debug_lines[0], '[S] aiml (STRUCTURAL)')
        self.assertIn('[E] template (STRUCTURAL)', debug_lines)
        self.assertEqual(debug_lines[-1], '[E] aiml (STRUCTURAL)')


if __name__ == '__main__':
    unittest.main()
