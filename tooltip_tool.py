"""Command line viewer for psychic definitions.

Loads a psychic JSON file, reports every ability that failed validation, and
prints the tooltip of each ready ability for the given caster attributes.

Run with: ``python tooltip_tool.py data/psychics/pyromancer.json --attr attack=12 --attr heal=8``
"""
from __future__ import annotations

import argparse
import logging
from pathlib import Path
import sys
from typing import Dict, Mapping

# Ensure src/ is on the import path when run from a checkout.
SRC_PATH = Path(__file__).parent / "src"
if SRC_PATH.exists() and str(SRC_PATH) not in sys.path:
    sys.path.append(str(SRC_PATH))

from psychics.abilities.base import Ability, ActiveAbility  # type: ignore
from psychics.components.esper_statistic import stats_from_attributes  # type: ignore
from psychics.config.loader import load_config_file, section  # type: ignore
from psychics.errors import PsychicsError  # type: ignore
from psychics.factories.psychic import build_psychic  # type: ignore
from psychics.logger import configure_logging  # type: ignore


def _attribute(pair: str) -> tuple[str, float]:
    name, _, raw = pair.partition("=")
    if not name.strip() or not raw:
        raise argparse.ArgumentTypeError(f"expected NAME=VALUE, got '{pair}'")
    try:
        return name.strip(), float(raw)
    except ValueError:
        raise argparse.ArgumentTypeError(f"'{raw}' is not a number in '{pair}'") from None


def _implementations(config: Mapping[str, object]) -> Dict[str, type[Ability]]:
    implementations: Dict[str, type[Ability]] = {}
    for name, ability_config in section(config, "abilities").items():
        kind = ability_config.get("type") if isinstance(ability_config, Mapping) else None
        active = isinstance(kind, str) and kind.strip().upper() == "ACTIVE"
        implementations[name] = ActiveAbility if active else Ability
    return implementations


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("path", type=Path, help="psychic definition (JSON)")
    parser.add_argument(
        "--attr", action="append", default=[], type=_attribute, help="caster attribute NAME=VALUE"
    )
    parser.add_argument("--strict", action="store_true", help="fail on unresolved $variables")
    parser.add_argument("--verbose", "-v", action="store_true")
    args = parser.parse_args(argv)
    configure_logging(logging.DEBUG if args.verbose else logging.WARNING)

    try:
        config = load_config_file(args.path)
        psychic = build_psychic(config, _implementations(config), strict_templates=args.strict)
    except PsychicsError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1

    stats = stats_from_attributes(dict(args.attr))
    print(f"== {psychic.display_name} ==")
    for concept in psychic.concepts():
        print()
        print(concept.render_tooltip(stats))
    for name, error in psychic.failures.items():
        print(f"\n[{name}] failed to load: {error}", file=sys.stderr)
    return 0 if not psychic.failures else 2


if __name__ == "__main__":
    sys.exit(main())
