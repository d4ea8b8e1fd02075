# Copyright 2024 Michael Maillet, Damien Davison, Sacha Davison
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""
Local image store housekeeping through the container engine.
"""

from typing import List

from ..MODELS.step_result import StepResult
from ..RUNNERS.process_runner import ProcessRunner


class ImageStore:
    """
    Queries and prunes images held by the local container engine.
    """

    def __init__(self, runner: ProcessRunner, engine: str = "docker"):
        """
        Initialize the image store.

        Args:
            runner: Runner used to call the container engine.
            engine: Container engine executable (docker, podman).
        """
        self.runner = runner
        self.engine = engine

    def list_dangling(self) -> List[str]:
        """
        List the IDs of untagged images.

        Returns:
            Image IDs, duplicates removed, in engine order.

        Raises:
            RuntimeError: If the engine query fails.
        """
        result = self.runner.run([self.engine, "images", "-f", "dangling=true", "-q"])
        if not result.ok:
            raise RuntimeError(result.stderr.strip() or f"{self.engine} images failed")

        image_ids = []
        for line in result.stdout.splitlines():
            image_id = line.strip()
            if image_id and image_id not in image_ids:
                image_ids.append(image_id)
        return image_ids

    def remove_images(self, image_ids: List[str]) -> StepResult:
        """
        Remove images by ID.

        Args:
            image_ids: IDs to remove.

        Returns:
            StepResult of the removal.
        """
        result = self.runner.run([self.engine, "rmi", *image_ids])
        if not result.ok:
            return StepResult.failure(
                "dangling", result.stderr.strip() or f"{self.engine} rmi failed"
            )
        return StepResult.success("dangling", f"removed {len(image_ids)} dangling image(s)")
