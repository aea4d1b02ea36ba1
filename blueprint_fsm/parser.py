"""
Parser for declarative blueprint definitions (YAML or plain dictionaries).

Example:

    name: cat
    states: [SLEEPING, AWAKE, EATING]
    transitions:
      - {name: wake_up, from: SLEEPING, to: AWAKE}
      - {name: sleep, from: [AWAKE, EATING], to: SLEEPING}
    guards:
      sleep: [record_sleep]
"""

import enum
import logging
from pathlib import Path
from typing import Any, Callable, Dict, Mapping, Optional, Type, Union

import yaml

from .core import Blueprint
from .exceptions import ConfigurationError, UnknownStateError

logger = logging.getLogger(__name__)


class BlueprintParser:
    """Builds Blueprint objects from YAML files, strings or dictionaries"""

    @staticmethod
    def from_file(filepath: Union[str, Path],
                  guards: Optional[Mapping[str, Callable]] = None,
                  states: Optional[Type[enum.Enum]] = None) -> Blueprint:
        """Load blueprint definition from YAML file"""
        filepath = Path(filepath)

        with open(filepath, 'r') as f:
            data = yaml.safe_load(f)

        logger.debug(f"Loaded blueprint definition from {filepath}")
        return BlueprintParser.from_dict(data, guards=guards, states=states)

    @staticmethod
    def from_string(text: str,
                    guards: Optional[Mapping[str, Callable]] = None,
                    states: Optional[Type[enum.Enum]] = None) -> Blueprint:
        """Load blueprint definition from a YAML document"""
        return BlueprintParser.from_dict(yaml.safe_load(text), guards=guards, states=states)

    @staticmethod
    def from_dict(data: Dict[str, Any],
                  guards: Optional[Mapping[str, Callable]] = None,
                  states: Optional[Type[enum.Enum]] = None) -> Blueprint:
        """
        Parse blueprint definition from dictionary.

        Args:
            data: Parsed definition
            guards: Guard callables by the names used under `guards:`
            states: Enum class to resolve state names into members

        Raises:
            ConfigurationError: malformed definition or unresolvable guard
            UnknownStateError: a state name the Enum does not define
        """
        if not isinstance(data, dict):
            raise ConfigurationError("Blueprint definition must be a mapping")
        if 'states' not in data:
            raise ConfigurationError("Blueprint definition has no 'states'")

        guards = guards or {}
        state_names = data['states']
        if not isinstance(state_names, list):
            raise ConfigurationError("'states' must be a list")

        name = data.get('name') or 'blueprint'
        if not isinstance(name, str):
            raise ConfigurationError(f"Blueprint 'name' must be a string, got {name!r}")

        blueprint = Blueprint(
            [BlueprintParser._resolve_state(s, states) for s in state_names],
            name=name
        )

        # Parse transitions
        for trans_data in data.get('transitions') or []:
            BlueprintParser._parse_transition(blueprint, trans_data, states)

        # Parse guards
        guard_section = data.get('guards') or {}
        if not isinstance(guard_section, dict):
            raise ConfigurationError("'guards' must map transition names to guard names")

        for transition, guard_names in guard_section.items():
            if isinstance(guard_names, str):
                guard_names = [guard_names]
            if not isinstance(guard_names, list):
                raise ConfigurationError(
                    f"Guards for '{transition}' must be a name or a list of names"
                )
            for guard_name in guard_names:
                if not isinstance(guard_name, str):
                    raise ConfigurationError(
                        f"Guard name for '{transition}' must be a string, got {guard_name!r}"
                    )
                if guard_name not in guards:
                    raise ConfigurationError(
                        f"Guard '{guard_name}' for transition '{transition}' is not registered"
                    )
                blueprint.add_guard(transition, guards[guard_name])

        if data.get('freeze', False):
            blueprint.freeze()

        return blueprint

    @staticmethod
    def _parse_transition(blueprint: Blueprint,
                          data: Dict[str, Any],
                          states: Optional[Type[enum.Enum]]):
        """Parse one transition entry; `from` may list several sources"""
        try:
            name = data['name']
            sources = data['from']
            target = data['to']
        except (KeyError, TypeError):
            raise ConfigurationError(f"Transition needs 'name', 'from' and 'to': {data!r}")

        if not isinstance(sources, list):
            sources = [sources]

        to_state = BlueprintParser._resolve_state(target, states)
        for source in sources:
            blueprint.add_transition(
                name,
                BlueprintParser._resolve_state(source, states),
                to_state
            )

    @staticmethod
    def _resolve_state(value: Any, states: Optional[Type[enum.Enum]]) -> Any:
        """Map a state name onto an Enum member when an Enum class is given"""
        if states is None:
            return value
        try:
            return states[value]
        except (KeyError, TypeError):
            raise UnknownStateError(value)


def load_blueprint(filepath: Union[str, Path], **kwargs) -> Blueprint:
    """Shortcut for BlueprintParser.from_file()"""
    return BlueprintParser.from_file(filepath, **kwargs)


