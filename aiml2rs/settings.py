"""
# aiml2rs: settings.py

Licensed under "MIT No Attribution" (MIT-0), see LICENSE.

Conversion settings.
"""

from typing import NamedTuple


class ConversionSettings(NamedTuple):
    """
    Settings for converting one AIML file.

    - `real_topics_enabled`: convert `<topic name="x">` into a RiveScript `> topic x` block;
      otherwise every category goes into the default topic
    - `debug_mode_enabled`: print every tag event and state change
    """
    real_topics_enabled: bool = False
    debug_mode_enabled: bool = False
