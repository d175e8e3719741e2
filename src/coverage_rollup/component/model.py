# Copyright 2026 Pennyworth Technologies, Inc.
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

"""Component tree model - dataclasses for the source-code hierarchy."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

REPORT_TYPES = ("project", "module", "directory", "file")
VIEW_TYPES = ("view", "subview", "project_view")


class ComponentType(str, Enum):
    """Kind of node in the component tree.

    Report types come from an analysis report (project down to file).
    View types are synthetic aggregates built on top of projects.
    """

    PROJECT = "project"
    MODULE = "module"
    DIRECTORY = "directory"
    FILE = "file"
    VIEW = "view"
    SUBVIEW = "subview"
    PROJECT_VIEW = "project_view"

    @property
    def is_report_type(self) -> bool:
        return self.value in REPORT_TYPES

    @property
    def is_view_type(self) -> bool:
        return self.value in VIEW_TYPES

    @property
    def is_leaf_type(self) -> bool:
        """FILE and PROJECT_VIEW are the deepest nodes of their trees."""
        return self in (ComponentType.FILE, ComponentType.PROJECT_VIEW)


@dataclass(frozen=True)
class FileAttributes:
    unit_test: bool = False
    language_key: str | None = None

    def to_dict(self) -> dict:
        result: dict[str, Any] = {"unit_test": self.unit_test}
        if self.language_key is not None:
            result["language"] = self.language_key
        return result


NO_FILE_ATTRIBUTES = FileAttributes()


@dataclass
class Component:
    """A node in the component tree.

    Only FILE components carry file attributes; for every other node
    `get_file_attributes()` answers with the neutral defaults.
    """

    key: str
    name: str
    type: ComponentType = ComponentType.FILE
    file_attributes: FileAttributes | None = None

    children: list[Component] = field(default_factory=list)
    parent: Component | None = field(default=None, repr=False, compare=False)

    @property
    def is_leaf(self) -> bool:
        return len(self.children) == 0

    @property
    def depth(self) -> int:
        if self.parent is None:
            return 0
        return self.parent.depth + 1

    def get_file_attributes(self) -> FileAttributes:
        return self.file_attributes or NO_FILE_ATTRIBUTES

    def add_child(self, child: Component) -> None:
        """Add a child node and set parent reference."""
        child.parent = self
        self.children.append(child)

    def iter_nodes(self) -> list[Component]:
        """Collect this node and all descendants (depth-first, pre-order)."""
        nodes: list[Component] = []

        def _collect(node: Component) -> None:
            nodes.append(node)
            for child in node.children:
                _collect(child)

        _collect(self)
        return nodes

    def to_dict(self, include_children: bool = True) -> dict[str, Any]:
        result: dict[str, Any] = {
            "key": self.key,
            "name": self.name,
            "type": self.type.value,
        }
        if self.file_attributes is not None:
            result.update(self.file_attributes.to_dict())
        if include_children and self.children:
            result["children"] = [child.to_dict() for child in self.children]
        return result
