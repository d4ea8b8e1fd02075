"""
Parser for the jcb command line tokens.
"""
from typing import Iterable
from ..MODELS.build_config import Command, InvocationOptions

COMMAND_TOKENS = {
    "build": Command.BUILD,
    "clean": Command.CLEAN,
    "dangling": Command.DANGLING,
    "zip": Command.ZIP,
}

HELP_TOKENS = ("--help", "help")


def parse(tokens: Iterable[str]) -> InvocationOptions:
    """
    Resolves a flat list of tokens into a command and its switches.

    Tokens are scanned left to right. A help token ends the scan, the last
    command token wins, and anything unrecognized is ignored.

    Args:
        tokens (Iterable[str]): Raw command line tokens.

    Returns:
        InvocationOptions: The resolved command and switches.
    """
    options = InvocationOptions()
    command = None

    for token in tokens:
        if token in HELP_TOKENS:
            command = Command.HELP
            break
        elif token == "-v":
            options.verbose = True
        elif token == "--no-push":
            options.push_image = False
        elif token == "--no-java":
            options.build_java = False
        elif token == "--no-cache":
            options.no_cache = True
        elif token in COMMAND_TOKENS:
            command = COMMAND_TOKENS[token]

    options.command = command or Command.HELP
    return options
