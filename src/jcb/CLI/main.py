"""
Command Line Interface for JCB.
"""
import os
import click
from typing import Iterable, Optional
from ..errors import JcbError
from ..MODELS.build_config import Command, InvocationOptions
from ..MODELS.step_result import WorkflowResult
from ..PARSERS.argument_parser import parse
from ..PARSERS.config_parser import ConfigParser
from ..MANAGERS.workflow_manager import WorkflowManager
from ..RUNNERS.process_runner import ProcessRunner, SubprocessRunner
from ..UTILS.console import Console

USAGE = """\
Usage: jcb [build|clean|dangling|zip|help] [--no-push] [--no-cache] [--no-java] [-v]

Commands:
  build      build the java project, then build and push the container image
  clean      empty the entitlements directory and clean the java project
  dangling   remove dangling (untagged) container images
  zip        clean, then archive this directory into ../<directory>.zip
  help       show this message

Options:
  --no-push  do not push the image to IMAGE_REGISTRY
  --no-cache build the image without using the layer cache
  --no-java  skip the java build
  -v         print every external command before running it

Configuration is read from conf/build.conf (not needed for help and dangling).
"""


def dispatch(options: InvocationOptions,
             base_dir: str = ".",
             runner: Optional[ProcessRunner] = None,
             console: Optional[Console] = None) -> int:
    """
    Runs the workflow selected by the options and returns the exit status.

    :param options: Resolved command line.
    :param base_dir: Project directory.
    :param runner: Runner for external tools; a SubprocessRunner by default.
    :param console: Console for output.
    :return: 0 on success, 1 on any failure.
    """
    console = console or Console(verbose=options.verbose)
    runner = runner or SubprocessRunner(console)

    if options.command == Command.HELP:
        click.echo(USAGE)
        return 0

    parser = ConfigParser(base_dir)
    try:
        if options.command == Command.DANGLING:
            manager = WorkflowManager(None, runner, console, base_dir)
            result = manager.dangling(parser.container_engine())
        else:
            config = parser.parse()
            console.debug(f"loaded {parser.config_path}")
            manager = WorkflowManager(config, runner, console, base_dir)
            result = run_workflow(manager, options)
    except JcbError as e:
        console.error(str(e))
        return 1

    return result.exit_code


def run_workflow(manager: WorkflowManager, options: InvocationOptions) -> WorkflowResult:
    if options.command == Command.BUILD:
        return manager.build(options)
    elif options.command == Command.CLEAN:
        return manager.clean()
    elif options.command == Command.ZIP:
        return manager.zip()
    raise JcbError(f"unknown command {options.command.value}")


@click.command(
    add_help_option=False,
    context_settings={"ignore_unknown_options": True, "allow_extra_args": True},
)
@click.argument('tokens', nargs=-1, type=click.UNPROCESSED)
@click.pass_context
def cli(ctx, tokens: Iterable[str]):
    """
    JCB - build a Java project into a container image and publish it.
    """
    options = parse(tokens)
    ctx.exit(dispatch(options, base_dir=os.getcwd()))


def main():
    """
    Main entry point for the CLI.
    """
    cli(obj={})


if __name__ == '__main__':
    main()
