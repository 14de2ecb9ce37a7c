"""Scene graph nodes, scripts and the entity/component scene manager."""

from __future__ import annotations

import abc
import itertools
from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterator, List, Optional, Sequence, Tuple, Type, TypeVar, Union

import numpy as np

from .objects import GameObject
from .utils import model_matrix

T = TypeVar("T")
EntityRef = Union[GameObject, int]


def _entity_id(entity: EntityRef) -> int:
    return entity.id if isinstance(entity, GameObject) else int(entity)


class SceneNode:
    """A transform in a hierarchy; world transforms compose with the parent's."""

    def __init__(
        self,
        position: Sequence[float] = (0.0, 0.0, 0.0),
        scale: Sequence[float] = (1.0, 1.0, 1.0),
        rotation: Sequence[float] = (0.0, 0.0, 0.0),
    ) -> None:
        self._position = np.array(position, dtype=float)
        self._scale = np.array(scale, dtype=float)
        self._rotation = np.array(rotation, dtype=float)
        self._model = np.identity(4)
        self._changed = True
        self._father: Optional[SceneNode] = None
        self._children: List[SceneNode] = []

    @property
    def position(self) -> np.ndarray:
        return self._position.copy()

    @position.setter
    def position(self, value: Sequence[float]) -> None:
        self._position = np.array(value, dtype=float)
        self._changed = True

    @property
    def scale(self) -> np.ndarray:
        return self._scale.copy()

    @scale.setter
    def scale(self, value: Sequence[float]) -> None:
        self._scale = np.array(value, dtype=float)
        self._changed = True

    @property
    def rotation(self) -> np.ndarray:
        """Local rotation in degrees (pitch, yaw, roll)."""
        return self._rotation.copy()

    @rotation.setter
    def rotation(self, value: Sequence[float]) -> None:
        self._rotation = np.array(value, dtype=float)
        self._changed = True

    @property
    def father(self) -> Optional["SceneNode"]:
        return self._father

    @property
    def children(self) -> Tuple["SceneNode", ...]:
        return tuple(self._children)

    def local_model(self) -> np.ndarray:
        """Model matrix of the local transform, rebuilt only after a change."""
        if self._changed:
            self._model = model_matrix(self._position, self._scale, self._rotation)
            self._changed = False
        return self._model.copy()

    def world_model(self) -> np.ndarray:
        if self._father is not None:
            return self._father.world_model() @ self.local_model()
        return self.local_model()

    def world_position(self) -> np.ndarray:
        if self._father is None:
            return self._position.copy()
        point = self._father.world_model() @ np.append(self._position, 1.0)
        return point[:3] / point[3]

    def attach(self, father: "SceneNode") -> None:
        """Make ``father`` the parent of this node."""
        self._father = father
        father._children.append(self)

    def detach(self) -> None:
        """Leave the parent, if any."""
        if self._father is None:
            return
        self._father._children.remove(self)
        self._father = None

    def dispose(self) -> None:
        """Remove this node from the hierarchy, handing its children to its parent."""
        if self._father is not None:
            father = self._father
            for child in list(self._children):
                child._father = None
                child.attach(father)
            self._children.clear()
            self.detach()
        else:
            for child in list(self._children):
                child.detach()


class ScriptBase(abc.ABC):
    """Behaviour attached to an entity, started once and updated every frame."""

    _entity: Optional[int] = None
    _scene: Optional["SceneManager"] = None

    @abc.abstractmethod
    def start(self) -> None:
        """Called once before the first update."""

    @abc.abstractmethod
    def update(self, delta: float) -> None:
        """Called every frame with the elapsed time."""

    @property
    def entity(self) -> Optional[int]:
        return self._entity

    def get_component(self, component_type: Type[T]) -> T:
        """Component of the entity this script belongs to."""
        if self._scene is None or self._entity is None:
            raise RuntimeError("script is not attached to a scene")
        return self._scene.get_component(self._entity, component_type)


@dataclass
class ScriptComponent:
    script: Optional[ScriptBase] = None


ScriptFactory = Callable[[], ScriptBase]


class ScriptRegistry:
    """Script factories by name; the first registration of a name is kept."""

    def __init__(self) -> None:
        self._factories: Dict[str, ScriptFactory] = {}

    def register(self, name: str, factory: ScriptFactory) -> None:
        self._factories.setdefault(name, factory)

    def create(self, name: str, entity: EntityRef, scene: "SceneManager") -> Optional[ScriptBase]:
        """Build the named script bound to ``entity``; unknown names give None."""
        factory = self._factories.get(name)
        if factory is None:
            return None
        script = factory()
        script._entity = _entity_id(entity)
        script._scene = scene
        return script

    def __contains__(self, name: object) -> bool:
        return name in self._factories


default_registry = ScriptRegistry()


def register_script(cls: Type[ScriptBase]) -> Type[ScriptBase]:
    """Class decorator adding a script to the default registry under its class name."""
    default_registry.register(cls.__name__, cls)
    return cls


class SceneManager:
    """Entities with at most one component of each type, and their scripts."""

    def __init__(self, scripts: Optional[ScriptRegistry] = None) -> None:
        self.scripts = default_registry if scripts is None else scripts
        self._ids = itertools.count()
        self._components: Dict[int, Dict[type, Any]] = {}
        self.objects: List[GameObject] = []

    def create_object(self) -> GameObject:
        obj = GameObject(next(self._ids))
        self._components[obj.id] = {}
        self.objects.append(obj)
        return obj

    def _store(self, entity: EntityRef, component_type: type, component: Any) -> Any:
        entity_id = _entity_id(entity)
        try:
            components = self._components[entity_id]
        except KeyError:
            raise LookupError(f"entity {entity_id} does not exist") from None
        if component_type in components:
            raise ValueError(f"entity {entity_id} already has a {component_type.__name__}")
        components[component_type] = component
        return component

    def add_component(self, obj: EntityRef, component_type: Type[T], *args: Any) -> T:
        """Construct ``component_type(*args)`` on ``obj``; a script name builds a script."""
        if component_type is ScriptComponent and len(args) == 1 and isinstance(args[0], str):
            return self.add_script(obj, args[0])
        return self._store(obj, component_type, component_type(*args))

    def add_script(self, obj: EntityRef, name: str) -> ScriptComponent:
        """Attach the named script; an unknown name leaves the component empty."""
        component = ScriptComponent()
        self._store(obj, ScriptComponent, component)
        component.script = self.scripts.create(name, obj, self)
        return component

    def get_component(self, entity: EntityRef, component_type: Type[T]) -> T:
        entity_id = _entity_id(entity)
        try:
            return self._components[entity_id][component_type]
        except KeyError:
            raise LookupError(
                f"entity {entity_id} has no {component_type.__name__}"
            ) from None

    def _scripts(self) -> Iterator[ScriptBase]:
        for components in list(self._components.values()):
            component = components.get(ScriptComponent)
            if component is not None and component.script is not None:
                yield component.script

    def start(self) -> None:
        for script in self._scripts():
            script.start()

    def update(self, delta: float) -> None:
        for script in self._scripts():
            script.update(delta)