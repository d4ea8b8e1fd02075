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
Loader for the key=value build configuration file.
"""
import os
from typing import Dict, Mapping, Optional
from dotenv import dotenv_values
from pydantic import ValidationError
from ..MODELS.build_config import BuildConfig, CONFIG_FILE
from ..errors import ConfigurationError

# File key -> BuildConfig field
KEY_MAP = {
    "IMAGE_REGISTRY": "image_registry",
    "IMAGE_NAMESPACE": "image_namespace",
    "IMAGE_REPOSITORY": "image_repository",
    "IMAGE_TAG": "image_tag",
    "EXTERNAL_ARTIFACTS": "external_artifacts",
    "ENTITLEMENTS_DIR": "entitlements_dir",
    "JAVA_PROJECT_DIR": "java_project_dir",
    "CONTAINER_ENGINE": "container_engine",
    "JAVA_BUILD_TOOL": "java_build_tool",
}

MAVEN_REPOSITORY_KEYS = ("M2", "LOCAL_MAVEN_REPOSITORY")


class ConfigParser:
    """
    Reads the shell-style configuration file into a frozen BuildConfig.
    """
    def __init__(self, base_dir: str = ".", environ: Optional[Mapping[str, str]] = None):
        """
        Initializes the parser.

        :param base_dir: Directory the configuration path is relative to.
        :param environ: Environment consulted for the Maven repository keys
                        when the file does not set them. Defaults to os.environ.
        """
        self.base_dir = base_dir
        self.environ = os.environ if environ is None else environ

    @property
    def config_path(self) -> str:
        return os.path.join(self.base_dir, CONFIG_FILE)

    def exists(self) -> bool:
        return os.path.isfile(self.config_path)

    def parse(self) -> BuildConfig:
        """
        Loads the configuration file.

        :return: The validated configuration.
        :raises ConfigurationError: If the file is absent or IMAGE_REPOSITORY is missing or empty.
        """
        if not self.exists():
            raise ConfigurationError(f"configuration file {self.config_path} not found")
        values = dotenv_values(self.config_path, interpolate=True)
        return self.parse_values(values)

    def parse_values(self, values: Mapping[str, Optional[str]]) -> BuildConfig:
        """
        Builds a BuildConfig from already parsed key/value pairs.
        """
        if not (values.get("IMAGE_REPOSITORY") or "").strip():
            raise ConfigurationError("IMAGE_REPOSITORY is not set in the configuration")

        fields: Dict[str, object] = {}
        for key, field in KEY_MAP.items():
            value = values.get(key)
            # `KEY` with no `=` comes back as None
            if value is not None and value != "":
                fields[field] = value

        fields["maven_repository"] = self._maven_repository(values)

        try:
            return BuildConfig(**fields)
        except ValidationError as e:
            raise ConfigurationError(f"invalid configuration: {e}") from e

    def _maven_repository(self, values: Mapping[str, Optional[str]]) -> str:
        # M2 wins over LOCAL_MAVEN_REPOSITORY; the file wins over the environment
        for source in (values, self.environ):
            for key in MAVEN_REPOSITORY_KEYS:
                value = source.get(key)
                if value:
                    return value
        return ""

    def container_engine(self, default: str = "docker") -> str:
        """
        Reads only CONTAINER_ENGINE, for commands that run without a full configuration.
        """
        if not self.exists():
            return default
        return dotenv_values(self.config_path).get("CONTAINER_ENGINE") or default
