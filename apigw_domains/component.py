from abc import ABC, abstractmethod
from typing import Any, ClassVar, Generic, TypeVar

ResourcesT = TypeVar("ResourcesT")


class Component(ABC, Generic[ResourcesT]):
    _name: str
    _resources: ResourcesT | None

    def __init__(self, name: str):
        self._name = name
        self._resources = None
        ComponentRegistry.add_instance(self)

    @property
    def name(self) -> str:
        return self._name

    @property
    def resources(self) -> ResourcesT:
        if not self._resources:
            self._resources = self._create_resources()
        return self._resources

    @abstractmethod
    def _create_resources(self) -> ResourcesT:
        """Implement actual resource creation logic"""
        raise NotImplementedError


class ComponentRegistry:
    _registered_names: ClassVar[set[str]] = set()

    @classmethod
    def add_instance(cls, instance: Component[Any]) -> None:
        if instance.name in cls._registered_names:
            raise ValueError(
                f"Duplicate component name detected: '{instance.name}'. "
                "Custom domain component names must be unique."
            )
        cls._registered_names.add(instance.name)

    @classmethod
    def clear(cls) -> None:
        """Forget all registered components. Only used for testing."""
        cls._registered_names.clear()
