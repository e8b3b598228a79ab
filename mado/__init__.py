"""mado: a fast Markdown linter.

Parses Markdown with markdown-it-py, checks every document against a
catalogue of markdownlint-compatible rules and reports the findings in
several output formats.
"""

# Version is defined in pyproject.toml and read dynamically
try:
    from importlib.metadata import version

    __version__ = version("mado")
except Exception:
    __version__ = "0.0.0.dev0"  # Fallback for development installs

__all__ = ["__version__"]
