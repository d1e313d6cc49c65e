# topmark:header:start
#
#   project      : ArgFlow
#   file         : __main__.py
#   file_relpath : src/argflow/__main__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Allow ``python -m argflow``."""

from argflow.cli.main import cli

if __name__ == "__main__":
    cli()
