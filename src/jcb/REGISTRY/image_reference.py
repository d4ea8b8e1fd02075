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
Image reference assembly.
Composes fully-qualified references like 'quay.io/team/app:1.0' from configuration fields.
"""

from typing import Optional
from dataclasses import dataclass


@dataclass(frozen=True)
class ImageReference:
    """
    Fully-qualified container image reference.

    Examples:
        - ("", "", "app", "latest") -> app:latest
        - ("quay.io", "team", "app", "") -> quay.io/team/app
        - ("localhost:5000", "", "app", "1.0") -> localhost:5000/app:1.0
    """

    repository: str
    registry: str = ""
    namespace: str = ""
    tag: str = ""

    @classmethod
    def build(cls,
              registry: Optional[str],
              namespace: Optional[str],
              repository: str,
              tag: Optional[str] = None) -> "ImageReference":
        """
        Build a reference from its parts.

        Args:
            registry: Registry host, omitted from the name when empty.
            namespace: Namespace or organisation, omitted when empty.
            repository: Repository name, always present.
            tag: Tag, appended as ':tag' only when non-empty.

        Returns:
            The assembled ImageReference.
        """
        repository = (repository or "").strip().strip("/")
        if not repository:
            raise ValueError("Empty image repository")

        return cls(
            repository=repository,
            registry=(registry or "").strip().rstrip("/"),
            namespace=(namespace or "").strip().strip("/"),
            tag=(tag or "").strip(),
        )

    @classmethod
    def from_config(cls, config) -> "ImageReference":
        """Build the reference described by a BuildConfig."""
        return cls.build(
            config.image_registry,
            config.image_namespace,
            config.image_repository,
            config.image_tag,
        )

    @property
    def name(self) -> str:
        """Get the image name without the tag."""
        parts = [part for part in (self.registry, self.namespace, self.repository) if part]
        return "/".join(parts)

    @property
    def full_name(self) -> str:
        """Get the full reference including the tag, if any."""
        if self.tag:
            return f"{self.name}:{self.tag}"
        return self.name

    @property
    def pushable(self) -> bool:
        """A reference can only be pushed when it names a registry."""
        return bool(self.registry)

    def __str__(self) -> str:
        return self.full_name

    def __repr__(self) -> str:
        return f"ImageReference({self.full_name})"
