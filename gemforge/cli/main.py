"""GemForge CLI entry point - assembles all command groups."""
import logging

import click

from .. import __version__
from ..config import GemConfig
from .airdrop_cmd import airdrop
from .gem_cmd import GEM_COMMANDS


@click.group()
@click.version_option(version=__version__)
@click.option('--state', 'state_path', default=None, help='State file (default: $GEMFORGE_STATE_PATH)')
@click.option('--events', 'event_log', default=None, help='Event log JSONL (default: $GEMFORGE_EVENT_LOG)')
@click.option('--verbose', '-v', is_flag=True, help='Debug logging')
@click.pass_context
def cli(ctx, state_path: str | None, event_log: str | None, verbose: bool):
    """GemForge: mint, mine and forge gems."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )
    config = GemConfig.from_env()
    ctx.ensure_object(dict)
    ctx.obj["state_path"] = state_path or config.state_path
    ctx.obj["event_log"] = event_log or config.event_log_path


for command in GEM_COMMANDS:
    cli.add_command(command)
cli.add_command(airdrop)


if __name__ == "__main__":
    cli()
