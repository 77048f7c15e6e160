#!/usr/bin/env python3
"""
Avalon Tracker - command line entry point

Imports finished Avalon games from YAML game sheets into the database, shows
stored games and prints win/loss standings over every recorded game.
"""
import asyncio

import click

from avalon_tracker.config import Config
from avalon_tracker.core.errors import AvalonTrackerError
from avalon_tracker.core.presenter import render, render_by_alignment, render_game
from avalon_tracker.logging_config import configure_logging
from avalon_tracker.service import AvalonTrackerService


def _run(ctx: click.Context, operation):
    """Run ``operation(service)`` against a started service.

    Tracker errors are reported as click errors so the command exits with
    status 1 and the message on stderr.
    """
    config = ctx.obj["config"]

    async def runner():
        async with AvalonTrackerService(config) as service:
            return await operation(service)

    try:
        return asyncio.run(runner())
    except AvalonTrackerError as e:
        raise click.ClickException(str(e)) from e


@click.group()
@click.pass_context
def cli(ctx):
    """Tracks Avalon games through a SQL database."""
    ctx.ensure_object(dict)
    if "config" not in ctx.obj:
        ctx.obj["config"] = Config.from_env()
    configure_logging(ctx.obj["config"])


@cli.command("init-db")
@click.pass_context
def init_db(ctx):
    """Create the database tables."""
    _run(ctx, lambda service: service.init_db())
    click.echo("Database tables created")


@cli.command("import")
@click.argument("file", type=click.Path(exists=True, dir_okay=False))
@click.pass_context
def import_games(ctx, file):
    """Import every game of a YAML game sheet."""
    game_ids = _run(ctx, lambda service: service.import_games(file))
    for game_id in game_ids:
        click.echo(game_id)


@cli.command()
@click.argument("game_id")
@click.pass_context
def load(ctx, game_id):
    """Show one stored game."""
    game = _run(ctx, lambda service: service.load_game(game_id))
    click.echo(render_game(game_id, game), nl=False)


@cli.command()
@click.argument("game_id")
@click.pass_context
def delete(ctx, game_id):
    """Delete one stored game."""
    _run(ctx, lambda service: service.delete_game(game_id))
    click.echo(f"Deleted game {game_id}")


@cli.command()
@click.option("--by-alignment", is_flag=True, help="Split standings by the side each player was on")
@click.pass_context
def standings(ctx, by_alignment):
    """Print standings over every stored game."""
    if by_alignment:
        result = _run(ctx, lambda service: service.standings_by_alignment())
        click.echo(render_by_alignment(result), nl=False)
    else:
        result = _run(ctx, lambda service: service.standings())
        click.echo(render(result), nl=False)


def main():
    cli(obj={})


if __name__ == "__main__":
    main()
