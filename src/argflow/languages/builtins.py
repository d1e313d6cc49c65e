# topmark:header:start
#
#   project      : ArgFlow
#   file         : builtins.py
#   file_relpath : src/argflow/languages/builtins.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Built-in language definitions.

Exports:
    LANGUAGES: Concrete definitions grouped by comment/string family. Each entry
        is paired with a scanner in ``argflow.lexers``.
"""

from __future__ import annotations

from argflow.languages.base import IndentStyle, Language

LANGUAGES: list[Language] = [
    # `#` line comments
    Language(
        name="python",
        extensions=[".py", ".pyi", ".pyw"],
        filenames=[],
        patterns=[],
        description="Python source files (*.py, *.pyi)",
    ),
    Language(
        name="ruby",
        extensions=[".rb"],
        filenames=["Gemfile", "Rakefile"],
        patterns=[],
        description="Ruby scripts (*.rb)",
    ),
    Language(
        name="shell",
        extensions=[".sh", ".bash", ".zsh"],
        filenames=[],
        patterns=[],
        description="POSIX/Bash/Zsh shell scripts",
    ),
    Language(
        name="toml",
        extensions=[".toml"],
        filenames=[],
        patterns=[],
        description="TOML documents (*.toml)",
    ),
    Language(
        name="yaml",
        extensions=[".yaml", ".yml"],
        filenames=[],
        patterns=[],
        description="YAML documents (*.yaml, *.yml)",
    ),
    # `//` and `/* */` comments
    Language(
        name="c",
        extensions=[".c", ".h"],
        filenames=[],
        patterns=[],
        description="C sources and headers (*.c, *.h)",
    ),
    Language(
        name="cpp",
        extensions=[".cc", ".cpp", ".cxx", ".hpp", ".hh"],
        filenames=[],
        patterns=[],
        description="C++ sources and headers",
    ),
    Language(
        name="java",
        extensions=[".java", ".kt", ".kts", ".scala"],
        filenames=[],
        patterns=[],
        description="Java/Kotlin/Scala sources",
    ),
    Language(
        name="javascript",
        extensions=[".js", ".mjs", ".cjs", ".jsx"],
        filenames=[],
        patterns=[],
        description="JavaScript sources",
    ),
    Language(
        name="typescript",
        extensions=[".ts", ".tsx", ".mts", ".cts"],
        filenames=[],
        patterns=[],
        description="TypeScript sources",
    ),
    Language(
        name="go",
        extensions=[".go"],
        filenames=[],
        patterns=[],
        description="Go sources (*.go)",
    ),
    Language(
        name="rust",
        extensions=[".rs"],
        filenames=[],
        patterns=[],
        description="Rust sources (*.rs)",
    ),
    Language(
        name="jsonc",
        extensions=[".jsonc", ".json5"],
        filenames=["tsconfig.json", ".eslintrc.json"],
        patterns=[],
        description="JSON with comments",
    ),
    Language(
        name="css",
        extensions=[".css", ".scss", ".less"],
        filenames=[],
        patterns=[],
        description="Stylesheets (*.css, *.scss, *.less)",
    ),
    # Lisp family
    Language(
        name="lisp",
        extensions=[".el", ".lisp", ".cl", ".scm", ".ss", ".rkt", ".clj", ".cljs", ".edn"],
        filenames=[],
        patterns=[],
        description="Lisp dialects (Emacs Lisp, Common Lisp, Scheme, Clojure)",
        indent_style=IndentStyle.LISP,
    ),
    # Markup
    Language(
        name="html",
        extensions=[".html", ".htm", ".xhtml", ".vue", ".svelte"],
        filenames=[],
        patterns=[],
        description="HTML documents",
        markup=True,
    ),
    Language(
        name="xml",
        extensions=[".xml", ".xsd", ".xsl", ".svg", ".plist"],
        filenames=[],
        patterns=[],
        description="XML documents",
        markup=True,
    ),
    # No comments or strings
    Language(
        name="json",
        extensions=[".json"],
        filenames=[],
        patterns=[],
        description="JSON documents (*.json)",
    ),
    Language(
        name="plain",
        extensions=[".txt"],
        filenames=[],
        patterns=[],
        description="Plain text (brackets only)",
    ),
]
