import pytest

from brdfscene.mesh import Mesh, Shape
from brdfscene.mesh_manager import MeshManager, MeshNotFoundError


def test_register_and_get():
    manager = MeshManager()
    cube = Mesh()
    cube.as_base_shape(Shape.CUBE)
    manager.register("cube", cube)
    assert manager.get("cube") is cube
    assert "cube" in manager


def test_missing_mesh_raises():
    manager = MeshManager()
    with pytest.raises(MeshNotFoundError, match="Mesh Named quad Don't Exist"):
        manager.get("quad")


def test_first_registration_wins():
    manager = MeshManager()
    first, second = Mesh(), Mesh()
    manager.register("shape", first)
    manager.register("shape", second)
    assert manager.get("shape") is first