"""
Models for the build configuration and the options of one invocation.
"""
from enum import Enum
from typing import List
from pydantic import BaseModel, ConfigDict, field_validator

CONFIG_FILE = "conf/build.conf"
BUILD_DESCRIPTOR = "Dockerfile"
ARTIFACTS_DIR = "artifacts"
ENTITLEMENTS_DIR = "entitlements"
ENTITLEMENTS_SOURCE = "/etc/pki/entitlement"
IDE_METADATA_PATTERN = "*.iml"


class Command(str, Enum):
    """
    Commands understood by the dispatcher.
    """
    HELP = "help"
    BUILD = "build"
    CLEAN = "clean"
    DANGLING = "dangling"
    ZIP = "zip"


class BuildConfig(BaseModel):
    """
    Settings read from the configuration file.

    Loaded once per invocation and frozen afterwards; workflows receive it
    as an argument instead of looking at the process environment.
    """
    model_config = ConfigDict(frozen=True)

    image_repository: str
    image_registry: str = ""
    image_namespace: str = ""
    image_tag: str = ""

    external_artifacts: List[str] = []
    entitlements_dir: str = ""
    java_project_dir: str = ""
    maven_repository: str = ""

    container_engine: str = "docker"
    java_build_tool: str = "mvn"

    @field_validator("image_repository")
    @classmethod
    def repository_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("IMAGE_REPOSITORY must not be empty")
        return value.strip()

    @field_validator("external_artifacts", mode="before")
    @classmethod
    def split_artifacts(cls, value):
        # EXTERNAL_ARTIFACTS is a space separated list in the file
        if isinstance(value, str):
            return value.split()
        return value


class InvocationOptions(BaseModel):
    """
    Command and switches resolved from the command line.
    """
    command: Command = Command.HELP
    push_image: bool = True
    build_java: bool = True
    no_cache: bool = False
    verbose: bool = False
