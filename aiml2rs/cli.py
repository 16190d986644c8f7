"""
# aiml2rs: cli.py

Licensed under "MIT No Attribution" (MIT-0), see LICENSE.

Command-line interface.
"""

import argparse
import os
import sys

from aiml2rs._version import __version__
from aiml2rs.constants import COMMAND_LINE_ERROR_EXIT_CODE, GENERIC_ERROR_EXIT_CODE
from aiml2rs.core import aiml_to_rivescript, compute_rive_file_name, is_aiml_file
from aiml2rs.exceptions import MalformedAimlException
from aiml2rs.settings import ConversionSettings

DESCRIPTION = '''
    Convert AIML to RiveScript.
'''
INPUT_DIRECTORY_HELP = '''
    directory of AIML files to be converted
'''
OUTPUT_DIRECTORY_HELP = '''
    directory for RiveScript files (created if it does not exist)
'''
REAL_TOPICS_MODE_HELP = '''
    convert AIML <topic> tags into real RiveScript topics
'''
DEBUG_MODE_HELP = '''
    run in debug mode (prints every tag and state change)
'''


def parse_command_line_arguments() -> argparse.Namespace:
    argument_parser = argparse.ArgumentParser(description=DESCRIPTION)
    argument_parser.add_argument(
        '-v', '--version',
        action='version',
        version=f'{argument_parser.prog} version {__version__}',
    )
    argument_parser.add_argument(
        '-i', '--in',
        dest='input_directory',
        help=INPUT_DIRECTORY_HELP,
        metavar='DIRECTORY',
        required=True,
    )
    argument_parser.add_argument(
        '-o', '--out',
        dest='output_directory',
        help=OUTPUT_DIRECTORY_HELP,
        metavar='DIRECTORY',
        required=True,
    )
    argument_parser.add_argument(
        '-t', '--real-topics',
        dest='real_topics_enabled',
        action='store_true',
        help=REAL_TOPICS_MODE_HELP,
    )
    argument_parser.add_argument(
        '-x', '--debug',
        dest='debug_mode_enabled',
        action='store_true',
        help=DEBUG_MODE_HELP,
    )

    return argument_parser.parse_args()


def list_aiml_file_names(input_directory: str) -> list[str]:
    return sorted(
        os.path.join(input_directory, file_name)
        for file_name in os.listdir(input_directory)
        if is_aiml_file(file_name) and os.path.isfile(os.path.join(input_directory, file_name))
    )


def prepare_output_directory(output_directory: str):
    if os.path.exists(output_directory):
        if not os.path.isdir(output_directory):
            print(f'error: `{output_directory}` exists but is not a directory', file=sys.stderr)
            sys.exit(COMMAND_LINE_ERROR_EXIT_CODE)
        return

    print(f'creating output directory: `{output_directory}`')
    try:
        os.makedirs(output_directory)
    except OSError as os_error:
        print(f'error: cannot create output directory `{output_directory}`: {os_error}', file=sys.stderr)
        sys.exit(GENERIC_ERROR_EXIT_CODE)


def generate_rive_file(aiml_file_name: str, output_directory: str, settings: 'ConversionSettings'):
    print(f'processing: `{aiml_file_name}`')

    try:
        with open(aiml_file_name, 'rb') as aiml_file:
            rivescript, warnings = aiml_to_rivescript(aiml_file, aiml_file_name, settings)
    except MalformedAimlException as malformed_aiml_exception:
        print(
            f'error: `{aiml_file_name}`, '
            f'line {malformed_aiml_exception.line_number}, column {malformed_aiml_exception.column_number}: '
            f'{malformed_aiml_exception}',
            file=sys.stderr,
        )
        sys.exit(GENERIC_ERROR_EXIT_CODE)

    for warning in warnings:
        print(f'warning: {warning}', file=sys.stderr)

    rive_file_name = os.path.join(output_directory, compute_rive_file_name(aiml_file_name))
    try:
        with open(rive_file_name, 'w', encoding='utf-8') as rive_file:
            rive_file.write(rivescript)
        print(f'success: wrote to `{rive_file_name}`')
    except IOError:
        print(f'error: cannot write to `{rive_file_name}`', file=sys.stderr)
        sys.exit(GENERIC_ERROR_EXIT_CODE)


def main():
    parsed_arguments = parse_command_line_arguments()
    input_directory = parsed_arguments.input_directory
    output_directory = parsed_arguments.output_directory
    settings = ConversionSettings(
        real_topics_enabled=parsed_arguments.real_topics_enabled,
        debug_mode_enabled=parsed_arguments.debug_mode_enabled,
    )

    if not os.path.isdir(input_directory):
        print(f'error: argument `--in`: `{input_directory}` is not a directory', file=sys.stderr)
        sys.exit(COMMAND_LINE_ERROR_EXIT_CODE)

    prepare_output_directory(output_directory)

    for aiml_file_name in list_aiml_file_names(input_directory):
        generate_rive_file(aiml_file_name, output_directory, settings)


if __name__ == '__main__':
    main()
