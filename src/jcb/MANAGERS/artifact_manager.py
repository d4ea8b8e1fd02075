"""
Artifact management: copies external dependency files from the local Maven
repository into the image build context.
"""
import os
import shutil
from typing import Optional
from ..MODELS.build_config import BuildConfig, ARTIFACTS_DIR
from ..MODELS.step_result import StepResult
from ..UTILS.console import Console


class ArtifactManager:
    """
    Populates the artifacts directory with the files named in EXTERNAL_ARTIFACTS.
    """
    def __init__(self, config: BuildConfig, base_dir: str = ".", console: Optional[Console] = None):
        """
        Initializes the artifact manager.

        :param config: The build configuration.
        :param base_dir: The build context directory holding the artifacts directory.
        :param console: Console for progress output.
        """
        self.config = config
        self.artifacts_dir = os.path.join(base_dir, ARTIFACTS_DIR)
        self.console = console or Console()

    def fetch(self) -> StepResult:
        """
        Copies every configured artifact that is not already present.

        :return: Failure when the repository is unset, an artifact is missing, or a copy fails.
        """
        artifacts = self.config.external_artifacts
        if not artifacts:
            return StepResult.success("artifacts", "no external artifacts configured")

        repository = self.config.maven_repository
        if not repository:
            return StepResult.failure("artifacts", "neither M2 nor LOCAL_MAVEN_REPOSITORY is set")
        if not os.path.isdir(repository):
            return StepResult.failure("artifacts", f"maven repository {repository} does not exist")

        os.makedirs(self.artifacts_dir, exist_ok=True)

        for name in artifacts:
            target = os.path.join(self.artifacts_dir, name)
            if os.path.exists(target):
                self.console.debug(f"{name} already in {self.artifacts_dir}")
                continue

            source = self.find(repository, name)
            if source is None:
                return StepResult.failure("artifacts", f"artifact {name} not found in {repository}")

            self.console.info(f"Copying {source} -> {target}", tag="artifacts")
            try:
                shutil.copy2(source, target)
            except OSError as e:
                return StepResult.failure("artifacts", f"failed to copy {name}: {e}")

        return StepResult.success("artifacts", f"{len(artifacts)} artifact(s) ready")

    @staticmethod
    def find(root: str, name: str) -> Optional[str]:
        """
        Searches a directory tree for a file with the given name.

        :param root: Directory to search.
        :param name: Exact file name.
        :return: Path of the first match in sorted walk order, or None.
        """
        for dirpath, dirnames, filenames in os.walk(root):
            dirnames.sort()
            if name in filenames:
                return os.path.join(dirpath, name)
        return None
