"""
Console output for progress, debug traces and errors.
"""
from typing import List
import click


class Console:
    """
    Writes tagged progress lines to stdout and errors to stderr.

    Debug lines are only shown once verbose output has been switched on.
    """
    def __init__(self, verbose: bool = False):
        self.verbose = verbose

    def info(self, message: str, tag: str = ""):
        if tag:
            message = f"[{tag}] {message}"
        click.echo(message)

    def success(self, message: str):
        click.secho(message, fg="green")

    def error(self, message: str):
        click.secho(f"[error]: {message}", fg="red", err=True)

    def debug(self, message: str):
        if self.verbose:
            click.echo(f"+ {message}", err=True)

    def command(self, command: List[str], working_dir=None):
        """
        Traces an external command line, like the shell does with `set -x`.
        """
        line = " ".join(command)
        if working_dir:
            line = f"(cd {working_dir}) {line}"
        self.debug(line)
