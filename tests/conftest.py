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
Shared fixtures: a recording stand-in for the external tools.
"""
import pytest
from jcb.RUNNERS.process_runner import ProcessRunner, ProcessResult


class FakeRunner(ProcessRunner):
    """
    Records every command and answers with canned results.

    Results are looked up by the command's leading words, longest match first,
    e.g. {("docker", "build"): ProcessResult(1)}. Unmatched commands succeed.
    """
    def __init__(self, results=None):
        self.results = dict(results or {})
        self.calls = []

    def run(self, command, working_dir=None, stream=False):
        self.calls.append((list(command), working_dir))
        for size in range(len(command), 0, -1):
            key = tuple(command[:size])
            if key in self.results:
                return self.results[key]
        return ProcessResult(exit_code=0)

    @property
    def commands(self):
        return [command for command, _ in self.calls]

    def ran(self, *prefix):
        return any(tuple(command[:len(prefix)]) == prefix for command in self.commands)


@pytest.fixture
def fake_runner():
    return FakeRunner()


@pytest.fixture
def make_runner():
    return FakeRunner


@pytest.fixture
def project(tmp_path):
    """A project directory named `proj` holding a Dockerfile."""
    root = tmp_path / "proj"
    root.mkdir()
    (root / "Dockerfile").write_text("FROM scratch\n")
    return root


@pytest.fixture
def write_config(project):
    """Writes conf/build.conf into the project directory."""
    def write(**values):
        conf = project / "conf"
        conf.mkdir(exist_ok=True)
        lines = [f'{key}="{value}"' for key, value in values.items()]
        (conf / "build.conf").write_text("\n".join(lines) + "\n")
        return project
    return write
