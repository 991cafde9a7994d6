#!/usr/bin/env python3
"""Game Catalog - command-line entry point."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from collections.abc import Callable, Sequence
from pathlib import Path

from gamecatalog.config import config
from gamecatalog.core.db import DBManager, GameRepository
from gamecatalog.core.errors import CatalogError
from gamecatalog.core.game import Game
from gamecatalog.core.logging import setup_logging
from gamecatalog.utils.date_utils import format_release_date
from gamecatalog.utils.i18n import init_i18n, t
from gamecatalog.version import __app_name__, __version__

__all__ = ["build_parser", "main"]

logger = logging.getLogger("gamecatalog.main")

Handler = Callable[[GameRepository, argparse.Namespace], int]

_LABELLED_FIELDS = ("description", "release_date", "developer", "publisher", "rating", "created_at")


def _format_game(game: Game) -> str:
    """Render a game as aligned "Label: value" lines."""
    lines = [f"[{game.id}] {game.title}"]
    for name in _LABELLED_FIELDS:
        value = getattr(game, name)
        if value is None:
            continue
        if name == "release_date":
            value = format_release_date(value)
        lines.append(f"  {t(f'cli.labels.{name}')}: {value}")
    for name in ("genres", "platforms"):
        names = getattr(game, name)
        if names:
            lines.append(f"  {t(f'cli.labels.{name}')}: {', '.join(names)}")
    return "\n".join(lines)


def _cmd_init(repository: GameRepository, args: argparse.Namespace) -> int:
    print(t("cli.initialized", path=repository.db.db_path))
    return 0


def _cmd_add(repository: GameRepository, args: argparse.Namespace) -> int:
    game = Game(
        title=args.title,
        description=args.description,
        release_date=args.release_date,
        developer=args.developer,
        publisher=args.publisher,
        rating=args.rating,
    )
    game_id = repository.add_game(game, args.genre or [], args.platform or [])
    print(t("cli.added", id=game_id))
    return 0


def _cmd_show(repository: GameRepository, args: argparse.Namespace) -> int:
    game = repository.get_game_by_id(args.id)
    if game is None:
        print(t("cli.not_found", id=args.id), file=sys.stderr)
        return 1
    print(json.dumps(game.to_dict(), indent=2) if args.json else _format_game(game))
    return 0


def _cmd_list(repository: GameRepository, args: argparse.Namespace) -> int:
    games = repository.get_all_games()
    if args.json:
        print(json.dumps([game.to_dict() for game in games], indent=2))
    elif not games:
        print(t("cli.empty"))
    else:
        print("\n".join(_format_game(game) for game in games))
    return 0


def _cmd_update(repository: GameRepository, args: argparse.Namespace) -> int:
    game = repository.get_game_by_id(args.id)
    if game is None:
        print(t("cli.not_found", id=args.id), file=sys.stderr)
        return 1

    for name in ("title", "description", "release_date", "developer", "publisher", "rating"):
        value = getattr(args, name)
        if value is not None:
            setattr(game, name, value)

    repository.update_game(args.id, game, genres=args.genre, platforms=args.platform)
    print(t("cli.updated", id=args.id))
    return 0


def _cmd_delete(repository: GameRepository, args: argparse.Namespace) -> int:
    if not repository.delete_game(args.id):
        print(t("cli.not_found", id=args.id), file=sys.stderr)
        return 1
    print(t("cli.deleted", id=args.id))
    return 0


def _cmd_prune(repository: GameRepository, args: argparse.Namespace) -> int:
    removed = repository.prune_orphans()
    print(t("cli.pruned", genres=removed["genres"], platforms=removed["platforms"]))
    return 0


def _add_game_options(parser: argparse.ArgumentParser, *, title_required: bool) -> None:
    if title_required:
        parser.add_argument("title")
    else:
        parser.add_argument("--title")
    parser.add_argument("--description")
    parser.add_argument("--release-date", dest="release_date", help="YYYY-MM-DD or DD.MM.YYYY")
    parser.add_argument("--developer")
    parser.add_argument("--publisher")
    parser.add_argument("--rating", type=float)
    parser.add_argument("--genre", action="append", help="repeatable")
    parser.add_argument("--platform", action="append", help="repeatable")


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser with one sub-command per operation."""
    parser = argparse.ArgumentParser(prog="gamecatalog", description=t("cli.description"))
    parser.add_argument("--version", action="version", version=f"{__app_name__} {__version__}")
    parser.add_argument("--db", type=Path, help="database file (default from configuration)")
    parser.add_argument("--log-level", dest="log_level")

    commands = parser.add_subparsers(dest="command", required=True)

    commands.add_parser("init").set_defaults(handler=_cmd_init)

    add = commands.add_parser("add")
    _add_game_options(add, title_required=True)
    add.set_defaults(handler=_cmd_add)

    show = commands.add_parser("show")
    show.add_argument("id", type=int)
    show.add_argument("--json", action="store_true")
    show.set_defaults(handler=_cmd_show)

    list_ = commands.add_parser("list")
    list_.add_argument("--json", action="store_true")
    list_.set_defaults(handler=_cmd_list)

    update = commands.add_parser("update", help="given --genre/--platform lists replace the existing ones")
    update.add_argument("id", type=int)
    _add_game_options(update, title_required=False)
    update.set_defaults(handler=_cmd_update)

    delete = commands.add_parser("delete")
    delete.add_argument("id", type=int)
    delete.set_defaults(handler=_cmd_delete)

    commands.add_parser("prune").set_defaults(handler=_cmd_prune)

    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Main application execution flow.

    Returns:
        Exit code (0 = success, 1 = not found or catalog error).
    """
    # 1. Initialize messages (parser help text uses them)
    init_i18n(config.LOCALE)

    args = build_parser().parse_args(argv)

    # 2. Setup logging
    setup_logging(args.log_level or config.LOG_LEVEL, config.LOG_FILE)

    db_path = args.db or config.DATABASE_PATH
    logger.debug(t("logs.main.starting", app=__app_name__, version=__version__, path=db_path))

    handler: Handler = args.handler
    try:
        with DBManager(db_path, timeout=config.DB_TIMEOUT) as db:
            repository = GameRepository(db)
            repository.init()
            return handler(repository, args)
    except CatalogError as e:
        print(t("cli.error", error=e), file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
