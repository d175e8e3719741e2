"""Component tree: projects, modules, directories and files."""

from coverage_rollup.component.model import (
    Component,
    ComponentType,
    FileAttributes,
)

__all__ = [
    "Component",
    "ComponentType",
    "FileAttributes",
]
