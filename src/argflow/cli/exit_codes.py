# topmark:header:start
#
#   project      : ArgFlow
#   file         : exit_codes.py
#   file_relpath : src/argflow/cli/exit_codes.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Exit codes for the ArgFlow CLI.

ArgFlow aligns with the BSD `sysexits` convention where practical, so that other
tooling can interpret failures consistently. The one deliberate divergence is
`WOULD_CHANGE=2`, which signals a dry run that would have modified a file. Click
also uses 2 for its own usage errors; tell them apart by the output.
"""

from enum import IntEnum


class ExitCode(IntEnum):
    """Standardized exit codes for the ArgFlow CLI.

    Attributes:
        SUCCESS: Successful execution (including "nothing to do").
        FAILURE: Generic failure. Prefer a more specific code if available.
        WOULD_CHANGE: Dry run: the file would change if ``--apply`` were set.
        USAGE_ERROR: Invalid flags or arguments. Mirrors BSD ``EX_USAGE (64)``.
        MALFORMED_INPUT: Unbalanced brackets, unsafe collapse or undecodable
            text. Mirrors BSD ``EX_DATAERR (65)``.
        FILE_NOT_FOUND: Input path does not exist. Mirrors BSD ``EX_NOINPUT (66)``.
        IO_ERROR: Error reading or writing a file. Mirrors BSD ``EX_IOERR (74)``.
        CONFIG_ERROR: Missing, invalid or malformed configuration. Mirrors BSD
            ``EX_CONFIG (78)``.
        UNEXPECTED_ERROR: Unhandled error (last resort).
    """

    SUCCESS = 0
    FAILURE = 1
    WOULD_CHANGE = 2  # deliberate divergence from sysexits; see class docstring

    # sysexits-aligned values for better interoperability
    USAGE_ERROR = 64  # EX_USAGE
    MALFORMED_INPUT = 65  # EX_DATAERR
    FILE_NOT_FOUND = 66  # EX_NOINPUT
    IO_ERROR = 74  # EX_IOERR
    CONFIG_ERROR = 78  # EX_CONFIG

    UNEXPECTED_ERROR = 255
