"""Command-line entry point for inspecting and editing ZoneCtrl preferences.

Every command works against a saved system snapshot (see
:mod:`zonectrl.core.snapshot`) standing in for a live controller
connection, and persists changes through the regular QSettings store.
"""

import argparse
import logging
import sys
from pathlib import Path

from zonectrl.core.config import ConfigManager
from zonectrl.core.controller import ClientController
from zonectrl.core.snapshot import load_system_state
from zonectrl.errors import ZoneCtrlError
from zonectrl.models.entity import EntityKind, EntityRef
from zonectrl.sort.criteria import SortCriteria

logger = logging.getLogger(__name__)

_KINDS = {"group": EntityKind.GROUP, "zone": EntityKind.ZONE}


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="zonectrl",
        description="ZoneCtrl - group and zone preferences and sorting",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="enable debug logging")
    parser.add_argument(
        "--organization", default="ZoneCtrl", help="settings organization (default: ZoneCtrl)",
    )
    parser.add_argument(
        "--application", default="ZoneCtrl", help="settings application (default: ZoneCtrl)",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    show = sub.add_parser("show", help="print groups or zones in sorted order")
    show.add_argument("snapshot", type=Path, help="system snapshot JSON file")
    show.add_argument("kind", choices=sorted(_KINDS), help="list to show")

    touch = sub.add_parser("touch", help="record an activation of a group or zone")
    touch.add_argument("snapshot", type=Path)
    touch.add_argument("kind", choices=sorted(_KINDS))
    touch.add_argument("id", type=int)

    favorite = sub.add_parser("favorite", help="set or toggle a favorite")
    favorite.add_argument("snapshot", type=Path)
    favorite.add_argument("kind", choices=sorted(_KINDS))
    favorite.add_argument("id", type=int)
    favorite.add_argument("value", choices=["on", "off", "toggle"])

    reset = sub.add_parser("reset", help="forget preferences for one entity or all")
    reset.add_argument("snapshot", type=Path)
    reset.add_argument("kind", nargs="?", choices=sorted(_KINDS))
    reset.add_argument("id", nargs="?", type=int)

    criteria = sub.add_parser("criteria", help="print or replace sort criteria")
    criteria.add_argument("snapshot", type=Path)
    criteria.add_argument("kind", choices=sorted(_KINDS))
    criteria.add_argument(
        "--set",
        dest="pairs",
        nargs="+",
        metavar="KEY:ORDER",
        help="new criteria, highest priority first (e.g. favorite:descending name:ascending)",
    )
    return parser


def _show(controller: ClientController, kind: EntityKind) -> None:
    prefs = controller.preferences
    state = controller.state
    for row, identifier in enumerate(controller.sorted(kind)):
        if kind is EntityKind.GROUP:
            group = state.get_group(identifier)
            name = group.name if group else ""
        else:
            zone = state.get_zone(identifier)
            name = zone.display_name if zone else ""
        ref = EntityRef(kind, identifier)
        favorite, last_used = prefs.snapshot(ref)
        use_count = 0
        if prefs.has_preferences(ref):
            use_count = prefs.table_for(kind).get_record(identifier).use_count.get_or(0)
        star = "*" if favorite else " "
        used = last_used.isoformat(timespec="seconds") if last_used else "never"
        print(f"{row:3d} {star} {identifier:3d}  {name:<24} used {use_count:4d}x  last {used}")


def _criteria(controller: ClientController, kind: EntityKind, pairs: list[str] | None) -> None:
    sorter = controller.sort_controller(kind)
    if pairs:
        replacement = SortCriteria.from_list([pair.split(":", 1) for pair in pairs])
        sorter.criteria.clear()
        for parameter in replacement:
            sorter.add(parameter.key, parameter.order)
        sorter.store()
        controller.config.sync()
    for index, parameter in enumerate(sorter.criteria):
        print(f"{index}: {parameter.description}")


def run(args: argparse.Namespace) -> int:
    """Execute a parsed command.

    Returns:
        Exit code (0 for success).
    """
    config = ConfigManager(args.organization, args.application)
    controller = ClientController(config)
    controller.state.update_from_system_state(load_system_state(args.snapshot))
    controller.bind()

    kind = _KINDS.get(args.kind) if getattr(args, "kind", None) else None

    if args.command == "show":
        assert kind is not None
        _show(controller, kind)
        return 0

    if args.command == "criteria":
        assert kind is not None
        _criteria(controller, kind, args.pairs)
        return 0

    if args.command == "touch":
        assert kind is not None
        count = controller.activate(EntityRef(kind, args.id))
        print(f"{kind.label} {args.id} used {count} times")
    elif args.command == "favorite":
        assert kind is not None
        ref = EntityRef(kind, args.id)
        if args.value == "toggle":
            value = controller.toggle_favorite(ref)
        else:
            value = args.value == "on"
            controller.preferences.set_favorite(ref, value)
        print(f"{ref} favorite: {'on' if value else 'off'}")
    elif args.command == "reset":
        if kind is None:
            controller.preferences.reset()
        elif args.id is None:
            logger.error("reset %s requires an id", args.kind)
            return 2
        else:
            controller.preferences.reset_entity(EntityRef(kind, args.id))

    controller.save()
    return 0


def main(argv: list[str] | None = None) -> int:
    """Run the ZoneCtrl command-line tool.

    Returns:
        Exit code (0 for success).
    """
    args = _build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    try:
        return run(args)
    except (ZoneCtrlError, OSError, ValueError) as e:
        logger.error("%s", e)
        return 1


if __name__ == "__main__":
    sys.exit(main())
