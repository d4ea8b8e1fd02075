"""
Builders driving the Java build tool.
"""
import os
from typing import Optional
from ..MODELS.build_config import BuildConfig
from ..MODELS.step_result import StepResult
from ..RUNNERS.process_runner import ProcessRunner, ProcessResult


class JavaBuilder:
    """
    Runs the Java build tool (Maven by default) in the configured project directory.
    """
    def __init__(self, config: BuildConfig, runner: ProcessRunner, base_dir: str = "."):
        """
        Initializes the JavaBuilder.

        :param config: The build configuration.
        :param runner: Runner used to invoke the build tool.
        :param base_dir: Directory a relative JAVA_PROJECT_DIR is resolved against.
        """
        self.config = config
        self.runner = runner
        self.base_dir = base_dir

    @property
    def project_dir(self) -> Optional[str]:
        if not self.config.java_project_dir:
            return None
        # an absolute JAVA_PROJECT_DIR makes join return it unchanged
        return os.path.join(self.base_dir, self.config.java_project_dir)

    def package(self) -> StepResult:
        """
        Runs `clean package` in the project directory.

        :return: Failure when the build tool exits non-zero.
        """
        if not self.project_dir:
            return StepResult.success("java", "JAVA_PROJECT_DIR not set, skipping java build")

        result = self._run("clean", "package")
        if not result.ok:
            return StepResult.failure("java", f"java build failed in {self.project_dir}")
        return StepResult.success("java", f"java build finished in {self.project_dir}")

    def clean(self) -> ProcessResult:
        """
        Runs `clean` in the project directory. The exit status is returned, not judged.
        """
        return self._run("clean")

    def _run(self, *goals: str) -> ProcessResult:
        return self.runner.run(
            [self.config.java_build_tool, *goals],
            working_dir=self.project_dir,
            stream=True,
        )
