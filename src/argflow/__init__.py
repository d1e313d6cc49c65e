# topmark:header:start
#
#   project      : ArgFlow
#   file         : __init__.py
#   file_relpath : src/argflow/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""ArgFlow package.

ArgFlow toggles bracketed, separator-delimited lists (call arguments, array and
object literals, tag attributes) between a single-line and a one-item-per-line
layout. It exposes both a CLI and a small typed API.
"""

from __future__ import annotations
