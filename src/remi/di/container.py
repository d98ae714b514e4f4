from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Type

from .lifetime import Lifetime
from ..errors import CircularDependencyError, ResolutionError

Provider = Callable[["Container"], Any]


@dataclass(frozen=True)
class Registration:
    interface: Type
    provider: Provider
    lifetime: Lifetime = Lifetime.TRANSIENT


class Container:
    """Maps interfaces to providers.

    Every registration boils down to a provider, a callable that receives the
    container so it can resolve its own collaborators. Singletons are built
    on first resolution and cached.
    """

    def __init__(self):
        self._registrations: Dict[Type, Registration] = {}
        self._instances: Dict[Type, Any] = {}
        self._chain: List[Type] = []

    # --- Registration ---

    def register_singleton(self, interface: Type, implementation: Optional[Type] = None, **kwargs):
        self._add(interface, self._constructor(implementation or interface, kwargs), Lifetime.SINGLETON)

    def register_transient(self, interface: Type, implementation: Optional[Type] = None, **kwargs):
        self._add(interface, self._constructor(implementation or interface, kwargs), Lifetime.TRANSIENT)

    def register_factory(
        self,
        interface: Type,
        factory: Provider,
        lifetime: Lifetime = Lifetime.SINGLETON,
    ):
        self._add(interface, factory, lifetime)

    def register_instance(self, interface: Type, instance: Any):
        self._add(interface, lambda _: instance, Lifetime.SINGLETON)
        self._instances[interface] = instance

    def is_registered(self, interface: Type) -> bool:
        return interface in self._registrations

    # --- Resolution ---

    def resolve(self, interface: Type) -> Any:
        if interface in self._instances:
            return self._instances[interface]
        try:
            reg = self._registrations[interface]
        except KeyError:
            raise ResolutionError(f"No registration found for {_name(interface)}") from None

        if interface in self._chain:
            cycle = " -> ".join(_name(t) for t in [*self._chain, interface])
            raise CircularDependencyError(f"Circular dependency: {cycle}")

        self._chain.append(interface)
        try:
            instance = reg.provider(self)
        finally:
            self._chain.pop()

        if reg.lifetime is Lifetime.SINGLETON:
            self._instances[interface] = instance
        return instance

    # --- Helpers ---

    def _add(self, interface: Type, provider: Provider, lifetime: Lifetime) -> None:
        self._instances.pop(interface, None)
        self._registrations[interface] = Registration(interface, provider, lifetime)

    @staticmethod
    def _constructor(implementation: Type, kwargs: Dict[str, Any]) -> Provider:
        return lambda _: implementation(**kwargs)


def _name(interface: Type) -> str:
    return getattr(interface, "__qualname__", repr(interface))
