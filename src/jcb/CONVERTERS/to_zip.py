"""
Converters for packing the project directory into a zip archive next to it.
"""
import os
from ..MODELS.build_config import IDE_METADATA_PATTERN
from ..MODELS.step_result import StepResult
from ..RUNNERS.process_runner import ProcessRunner


class ZipConverter:
    """
    Archives a directory into `../<directory name>.zip` with the zip tool.
    """
    def __init__(self, runner: ProcessRunner, source_dir: str = "."):
        """
        Initializes the zip converter.

        :param runner: Runner used to invoke the archiver.
        :param source_dir: The directory to archive.
        """
        self.runner = runner
        self.source_dir = os.path.abspath(source_dir)

    @property
    def archive_name(self) -> str:
        return f"{os.path.basename(self.source_dir)}.zip"

    @property
    def archive_path(self) -> str:
        return os.path.join(os.path.dirname(self.source_dir), self.archive_name)

    def convert(self) -> StepResult:
        """
        Creates the archive, leaving out IDE metadata files.

        :return: StepResult naming the archive path.
        """
        command = ["zip", "-r", f"../{self.archive_name}", ".", "-x", IDE_METADATA_PATTERN]
        result = self.runner.run(command, working_dir=self.source_dir)
        if not result.ok:
            details = result.stderr.strip() or f"zip exited with {result.exit_code}"
            return StepResult.failure("zip", f"failed to create {self.archive_path}: {details}")
        return StepResult.success("zip", self.archive_path)
