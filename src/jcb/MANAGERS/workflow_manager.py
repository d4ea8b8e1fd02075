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
Sequencing of the build, clean, zip and dangling workflows.
"""
from typing import Optional
from ..MODELS.build_config import BuildConfig, InvocationOptions, ENTITLEMENTS_SOURCE
from ..MODELS.step_result import StepResult, WorkflowResult
from ..RUNNERS.process_runner import ProcessRunner
from ..BUILDERS.java_builder import JavaBuilder
from ..BUILDERS.image_builder import ImageBuilder
from ..REGISTRY.image_store import ImageStore
from ..CONVERTERS.to_zip import ZipConverter
from ..UTILS.console import Console
from .artifact_manager import ArtifactManager
from .entitlement_manager import EntitlementManager


class WorkflowManager:
    """
    Runs one workflow step after the other, stopping at the first failure.
    """
    def __init__(self,
                 config: Optional[BuildConfig],
                 runner: ProcessRunner,
                 console: Optional[Console] = None,
                 base_dir: str = ".",
                 entitlements_source: str = ENTITLEMENTS_SOURCE):
        """
        Initializes the workflow manager.

        :param config: The build configuration; only `dangling` works without one.
        :param runner: Runner for every external tool.
        :param console: Console for progress output.
        :param base_dir: Project directory, also the image build context.
        :param entitlements_source: Host directory holding entitlement files.
        """
        self.config = config
        self.runner = runner
        self.console = console or Console()
        self.base_dir = base_dir
        self.entitlements = EntitlementManager(base_dir, entitlements_source, self.console)

    def _report(self, workflow: WorkflowResult, result: StepResult) -> bool:
        workflow.add(result)
        if result.ok:
            if result.message:
                self.console.info(result.message, tag=result.step)
        else:
            self.console.error(result.message)
        return result.ok

    def build(self, options: InvocationOptions) -> WorkflowResult:
        """
        Java build, image build, then push.

        A successful Java build is kept even when a later step fails.
        """
        workflow = WorkflowResult(command="build")

        if options.build_java:
            if not self._report(workflow, JavaBuilder(self.config, self.runner, self.base_dir).package()):
                return workflow

        builder = ImageBuilder(self.config, self.runner, self.base_dir)
        descriptor = builder.check_descriptor()
        if not descriptor.ok:
            self._report(workflow, descriptor)
            return workflow

        artifacts = ArtifactManager(self.config, self.base_dir, self.console)
        if not self._report(workflow, artifacts.fetch()):
            return workflow
        if not self._report(workflow, self.entitlements.fetch(self.config)):
            return workflow

        self.console.info(f"Building image {builder.reference}", tag="image")
        if not self._report(workflow, builder.build(options.no_cache)):
            return workflow

        if options.push_image and builder.reference.pushable:
            if not self._report(workflow, builder.push()):
                return workflow
        else:
            self.console.debug("push skipped")

        self.console.success("all ok")
        return workflow

    def clean(self) -> WorkflowResult:
        """
        Empties the entitlements directory and runs the Java clean goal.

        The build tool's exit status is not checked; a failure to empty the
        entitlements directory ends the workflow.
        """
        workflow = WorkflowResult(command="clean")

        try:
            removed = self.entitlements.clear()
        except OSError as e:
            self._report(workflow, StepResult.failure("entitlements", f"failed to remove entitlements: {e}"))
            return workflow
        workflow.add(StepResult.success("entitlements", f"removed {removed} entitlement file(s)"))

        if self.config is not None and self.config.java_project_dir:
            result = JavaBuilder(self.config, self.runner, self.base_dir).clean()
            if not result.ok:
                self.console.debug(f"java clean exited with {result.exit_code}, ignored")
            workflow.add(StepResult.success("java", "java clean finished"))

        return workflow

    def zip(self) -> WorkflowResult:
        """
        Cleans the project, then archives it next to itself.
        """
        workflow = self.clean()
        workflow.command = "zip"
        if not workflow.ok:
            return workflow

        result = ZipConverter(self.runner, self.base_dir).convert()
        if self._report(workflow, result):
            self.console.success(f"created {result.message}")
        return workflow

    def dangling(self, engine: Optional[str] = None) -> WorkflowResult:
        """
        Removes untagged images from the local container engine.
        """
        workflow = WorkflowResult(command="dangling")
        if engine is None:
            engine = self.config.container_engine if self.config is not None else "docker"

        store = ImageStore(self.runner, engine)
        try:
            image_ids = store.list_dangling()
        except RuntimeError as e:
            self._report(workflow, StepResult.failure("dangling", f"failed to list dangling images: {e}"))
            return workflow

        if not image_ids:
            self.console.info("no dangling images found")
            workflow.add(StepResult.success("dangling", "no dangling images found"))
            return workflow

        self._report(workflow, store.remove_images(image_ids))
        return workflow
