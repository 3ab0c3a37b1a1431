"""
monox-installer — installation resolution for the monox CLI.

Finds (or obtains) the native monox binary for the current host.
"""

__version__ = "0.1.0"
