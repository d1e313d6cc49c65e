# topmark:header:start
#
#   project      : ArgFlow
#   file         : __init__.py
#   file_relpath : src/argflow/cli/commands/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""ArgFlow CLI subcommands."""
