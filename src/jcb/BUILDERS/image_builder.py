"""
Builders for turning the current directory into a container image and publishing it.
"""
import os
from ..MODELS.build_config import BuildConfig, BUILD_DESCRIPTOR
from ..MODELS.step_result import StepResult
from ..REGISTRY.image_reference import ImageReference
from ..RUNNERS.process_runner import ProcessRunner


class ImageBuilder:
    """
    Builds and pushes the image described by the build configuration,
    using the current directory as build context.
    """
    def __init__(self, config: BuildConfig, runner: ProcessRunner, base_dir: str = "."):
        """
        Initializes the ImageBuilder.

        :param config: The build configuration.
        :param runner: Runner used to invoke the container engine.
        :param base_dir: The build context directory.
        """
        self.config = config
        self.runner = runner
        self.base_dir = base_dir
        self.reference = ImageReference.from_config(config)

    @property
    def engine(self) -> str:
        return self.config.container_engine

    def check_descriptor(self) -> StepResult:
        """
        Checks that the build context holds a build descriptor.

        :return: Failure naming the directory when it is missing.
        """
        if not os.path.isfile(os.path.join(self.base_dir, BUILD_DESCRIPTOR)):
            return StepResult.failure("image", f"{BUILD_DESCRIPTOR} not found in {os.path.abspath(self.base_dir)}")
        return StepResult.success("image")

    def build(self, no_cache: bool = False) -> StepResult:
        """
        Builds the image and tags it with the fully-qualified reference.

        :param no_cache: Pass --no-cache to the engine.
        :return: Failure when the engine fails.
        """
        command = [self.engine, "build"]
        if no_cache:
            command.append("--no-cache")
        command.extend(["-t", self.reference.full_name, "."])

        result = self.runner.run(command, working_dir=self.base_dir, stream=True)
        if not result.ok:
            return StepResult.failure("image", f"failed to build image {self.reference}")
        return StepResult.success("image", f"built image {self.reference}")

    def push(self) -> StepResult:
        """
        Pushes the image to its registry.

        :return: Failure when the engine push fails.
        """
        result = self.runner.run([self.engine, "push", self.reference.full_name], stream=True)
        if not result.ok:
            return StepResult.failure("push", f"failed to push image {self.reference}")
        return StepResult.success("push", f"pushed image {self.reference}")
