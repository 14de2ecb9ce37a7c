"""Registry of meshes by name."""

from __future__ import annotations

from typing import Dict

from .mesh import Mesh


class MeshNotFoundError(LookupError):
    """Raised when no mesh is registered under a name."""


class MeshManager:
    """Named meshes; the first registration of a name is kept."""

    def __init__(self) -> None:
        self._meshes: Dict[str, Mesh] = {}

    def get(self, name: str) -> Mesh:
        try:
            return self._meshes[name]
        except KeyError:
            raise MeshNotFoundError(f"Mesh Named {name} Don't Exist") from None

    def register(self, name: str, mesh: Mesh) -> None:
        self._meshes.setdefault(name, mesh)

    def __contains__(self, name: object) -> bool:
        return name in self._meshes