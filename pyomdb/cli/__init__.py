"""Command line interface."""

from .cli_main import OmdbCLI, main

__all__ = ['OmdbCLI', 'main']
