"""
# aiml2rs: core.py

Licensed under "MIT No Attribution" (MIT-0), see LICENSE.

Core conversion logic.

An AIML document is
(1) tokenized (see `tokens.py`),
(2) transduced into categories keyed by topic (see `transducer.py`), and
(3) assembled into RiveScript (see `rivescript.py`).
Warnings from every stage are collected in a single `DiagnosticLog`.
"""

import os
import re
from typing import IO, NamedTuple, Optional, Union

from aiml2rs.categories import ResultSet
from aiml2rs.constants import AIML_FILE_EXTENSION, RIVESCRIPT_FILE_EXTENSION
from aiml2rs.diagnostics import DiagnosticLog
from aiml2rs.rivescript import build_rivescript
from aiml2rs.settings import ConversionSettings
from aiml2rs.tokens import tokenize_aiml
from aiml2rs.transducer import transduce_aiml


class ConversionResult(NamedTuple):
    rivescript: str
    warnings: list[str]


def is_aiml_file(file_name: str) -> bool:
    return file_name.lower().endswith(AIML_FILE_EXTENSION)


def compute_rive_file_name(aiml_file_name: str) -> str:
    """
    Compute the RiveScript file name (without directory) for an AIML file name.
    """
    base_name = os.path.basename(aiml_file_name)
    rive_file_name = re.sub(
        pattern=f'{re.escape(AIML_FILE_EXTENSION)} \\Z',
        repl=RIVESCRIPT_FILE_EXTENSION,
        string=base_name,
        flags=re.IGNORECASE | re.VERBOSE,
    )

    if rive_file_name == base_name:
        rive_file_name = base_name + RIVESCRIPT_FILE_EXTENSION

    return rive_file_name


def parse_aiml(source: Union[str, bytes, IO], aiml_file_name: str, settings: 'ConversionSettings',
               diagnostics: 'DiagnosticLog') -> 'ResultSet':
    """
    Parse AIML into categories keyed by topic.

    Raises `MalformedAimlException` if the AIML is not well-formed.
    """
    tokens = tokenize_aiml(source)
    return transduce_aiml(tokens, aiml_file_name, settings, diagnostics)


def aiml_to_rivescript(source: Union[str, bytes, IO], aiml_file_name: str = '<string>',
                       settings: Optional['ConversionSettings'] = None) -> 'ConversionResult':
    """
    Convert AIML to RiveScript.
    """
    if settings is None:
        settings = ConversionSettings()

    diagnostics = DiagnosticLog(settings.debug_mode_enabled)
    result_set = parse_aiml(source, aiml_file_name, settings, diagnostics)
    rivescript = build_rivescript(result_set, diagnostics)

    return ConversionResult(rivescript, diagnostics.warnings)
