from __future__ import annotations

from typing import TYPE_CHECKING, Iterable

if TYPE_CHECKING:
    from psychics.concept.container import AbilityContainer


class AbilityRegistry:
    """In-memory collection of ability containers, in registration order."""

    def __init__(self) -> None:
        self._containers: dict[str, AbilityContainer] = {}

    def register(self, container: AbilityContainer) -> None:
        if container.name in self._containers:
            raise ValueError(f"Ability '{container.name}' already registered")
        self._containers[container.name] = container

    def get(self, name: str) -> AbilityContainer:
        try:
            return self._containers[name]
        except KeyError as exc:
            raise KeyError(f"Ability '{name}' is not registered") from exc

    def has(self, name: str) -> bool:
        return name in self._containers

    def names(self) -> list[str]:
        return list(self._containers)

    def all(self) -> Iterable[AbilityContainer]:
        return tuple(self._containers.values())

    def __len__(self) -> int:
        return len(self._containers)
