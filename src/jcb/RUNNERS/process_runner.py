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
Execution of external tools (Java build tool, container engine, archiver).
"""
import subprocess
import os
from dataclasses import dataclass
from typing import List, Optional
from ..UTILS.console import Console


@dataclass
class ProcessResult:
    """Exit status and captured output of one finished process."""

    exit_code: int
    stdout: str = ""
    stderr: str = ""

    @property
    def ok(self) -> bool:
        return self.exit_code == 0


class ProcessRunner:
    """
    Runs one external command and waits for it to exit.

    Workflows only depend on this interface so tests can swap in a fake.
    """
    def run(self,
            command: List[str],
            working_dir: Optional[str] = None,
            stream: bool = False) -> ProcessResult:
        """
        Runs a command to completion.

        Args:
            command (List[str]): Command and arguments to execute.
            working_dir (Optional[str]): Directory to run the command in.
            stream (bool): Let output go straight to the terminal instead of capturing it.

        Returns:
            ProcessResult: Exit code and captured output.
        """
        raise NotImplementedError


class SubprocessRunner(ProcessRunner):
    """
    ProcessRunner backed by subprocess.
    """
    def __init__(self, console: Optional[Console] = None):
        """
        Initializes the runner.

        Args:
            console (Optional[Console]): Console used to trace commands when verbose.
        """
        self.console = console or Console()

    def run(self,
            command: List[str],
            working_dir: Optional[str] = None,
            stream: bool = False) -> ProcessResult:
        self.console.command(command, working_dir)

        if working_dir and not os.path.isdir(working_dir):
            return ProcessResult(exit_code=1, stderr=f"No such directory: {working_dir}")

        try:
            completed = subprocess.run(
                command,
                cwd=working_dir,
                capture_output=not stream,
                text=True,
                # Avoid shell=True for security reasons (CWE-78)
                shell=False
            )
        except FileNotFoundError as e:
            # Same status a shell reports for an unknown command
            return ProcessResult(exit_code=127, stderr=str(e))

        return ProcessResult(
            exit_code=completed.returncode,
            stdout=completed.stdout or "",
            stderr=completed.stderr or "",
        )
