"""Markdown-to-HTML pre-processor for the fizzy CLI.

fizzy-md rewrites Markdown values of fizzy's --description, --body,
--description_file and --body_file flags to HTML, then runs fizzy with the
rewritten command line.
"""

__version__ = "0.1.0"
