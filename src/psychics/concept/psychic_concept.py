from __future__ import annotations

from typing import Any, Iterable, Mapping, Optional

from psychics.concept.ability_concept import AbilityConcept
from psychics.concept.container import AbilityContainer
from psychics.concept.registry import AbilityRegistry
from psychics.config.loader import section
from psychics.errors import PsychicsError
from psychics.events.bus import EVENT_ABILITY_LOAD_FAILED, EVENT_ABILITY_LOADED, EventBus
from psychics.logger import get_logger

log = get_logger(__name__)


class PsychicConcept:
    """A skill set: the abilities one esper can be granted together."""

    def __init__(
        self,
        name: str,
        display_name: Optional[str] = None,
        description: Iterable[str] = (),
    ) -> None:
        self.name = name
        self.display_name = display_name or name
        self.description = tuple(description)
        self.registry = AbilityRegistry()
        self.failures: dict[str, PsychicsError] = {}

    def add_container(self, container: AbilityContainer) -> AbilityContainer:
        self.registry.register(container)
        return container

    def container(self, name: str) -> AbilityContainer:
        return self.registry.get(name)

    def load_abilities(
        self,
        config: Mapping[str, Any],
        *,
        event_bus: Optional[EventBus] = None,
        strict_templates: bool = False,
    ) -> list[AbilityConcept]:
        """Load every registered ability from ``config["abilities"][name]``.

        A failing ability is recorded in ``failures`` and skipped; the others
        still load.
        """
        abilities = section(config, "abilities")
        loaded: list[AbilityConcept] = []
        for container in self.registry.all():
            try:
                concept = container.load(
                    self, section(abilities, container.name), strict_templates=strict_templates
                )
            except PsychicsError as exc:
                self.failures[container.name] = exc
                log.warning("Ability '%s' of '%s' failed to load: %s", container.name, self.name, exc)
                if event_bus is not None:
                    event_bus.emit(
                        EVENT_ABILITY_LOAD_FAILED, psychic=self.name, ability=container.name, error=exc
                    )
                continue
            loaded.append(concept)
            if event_bus is not None:
                event_bus.emit(EVENT_ABILITY_LOADED, psychic=self.name, ability=container.name)
        return loaded

    def ready_containers(self) -> list[AbilityContainer]:
        return [container for container in self.registry.all() if container.ready]

    def concepts(self) -> list[AbilityConcept]:
        return [container.concept for container in self.ready_containers()]
