"""
Entitlement management: copies licensing files into the build context and removes them again.
"""
import os
import shutil
from typing import Optional
from ..MODELS.build_config import BuildConfig, ENTITLEMENTS_DIR, ENTITLEMENTS_SOURCE
from ..MODELS.step_result import StepResult
from ..UTILS.console import Console


class EntitlementManager:
    """
    Manages the local entitlements directory.
    """
    def __init__(self,
                 base_dir: str = ".",
                 source_dir: str = ENTITLEMENTS_SOURCE,
                 console: Optional[Console] = None):
        """
        Initializes the entitlement manager.

        :param base_dir: The build context directory.
        :param source_dir: Where the host keeps its entitlement files.
        :param console: Console for progress output.
        """
        self.entitlements_dir = os.path.join(base_dir, ENTITLEMENTS_DIR)
        self.source_dir = source_dir
        self.console = console or Console()

    def fetch(self, config: BuildConfig) -> StepResult:
        """
        Copies the host entitlement files when ENTITLEMENTS_DIR is configured.
        """
        if not config.entitlements_dir:
            return StepResult.success("entitlements", "no entitlements configured")

        if not os.path.isdir(self.source_dir):
            return StepResult.failure("entitlements", f"entitlement source {self.source_dir} not found")

        os.makedirs(self.entitlements_dir, exist_ok=True)
        copied = 0
        try:
            for item in sorted(os.listdir(self.source_dir)):
                source = os.path.join(self.source_dir, item)
                if not os.path.isfile(source):
                    continue
                shutil.copy2(source, os.path.join(self.entitlements_dir, item))
                copied += 1
        except OSError as e:
            return StepResult.failure("entitlements", f"failed to copy entitlements: {e}")

        self.console.info(f"Copied {copied} file(s) into {self.entitlements_dir}", tag="entitlements")
        return StepResult.success("entitlements", f"{copied} entitlement file(s) copied")

    def clear(self) -> int:
        """
        Removes everything inside the entitlements directory, keeping the directory.

        :return: Number of entries removed.
        """
        if not os.path.isdir(self.entitlements_dir):
            return 0

        removed = 0
        for item in os.listdir(self.entitlements_dir):
            path = os.path.join(self.entitlements_dir, item)
            if os.path.isdir(path) and not os.path.islink(path):
                shutil.rmtree(path)
            else:
                os.remove(path)
            removed += 1
        return removed
