"""Command-line layer for fizzy-md.

This package holds the program entry point, configuration loading, error
reporting, the stdin pipe mode and the fizzy delegate runner.
"""
