"""Click-based CLI for running and inspecting a synthetic mind."""

import asyncio
import json
import logging
from pathlib import Path
from typing import Optional

import click

from config.settings import Settings
from synthmind.cognitive.engine import MindEngine
from synthmind.inference.hf_client import HuggingFaceGenerator
from synthmind.psyche.persistence import load_state
from synthmind.psyche.schema import MindSnapshot, build_snapshot
from synthmind.psyche.store import InMemoryStore, JsonFileStore, KeyValueStore

logger = logging.getLogger(__name__)


def format_cycle_line(snapshot: MindSnapshot) -> str:
    """One terminal line per cycle."""
    agent = snapshot.dominant_sub_agent or "-"
    line = (
        f"[{snapshot.mode}] {snapshot.dominant_emotion:<10} tension={snapshot.mental_tension:.2f} "
        f"agent={agent} topic={snapshot.topic} :: {snapshot.thought}"
    )
    if snapshot.last_generation_error:
        line += f"\n  ! {snapshot.last_generation_error}"
    return line


def _open_store(state_file: Optional[Path]) -> KeyValueStore:
    return JsonFileStore(state_file) if state_file else InMemoryStore()


async def _run_engine(settings: Settings, cycles: Optional[int]) -> int:
    generator = HuggingFaceGenerator(settings)
    engine = MindEngine(
        generator,
        settings=settings,
        store=_open_store(settings.state_file),
        on_cycle=lambda snap: click.echo(format_cycle_line(snap)),
    )
    try:
        await engine.run(max_cycles=cycles)
    finally:
        await generator.close()
    return engine.cycles_run


@click.group()
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Enable verbose logging",
)
def cli(verbose: bool) -> None:
    """Synthetic mind: a periodic cognitive-state simulation."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    logger.debug("CLI initialized")


@cli.command()
@click.option("--interval", "-i", type=float, default=None, help="Seconds between cycles")
@click.option("--cycles", "-n", type=int, default=None, help="Stop after this many cycles")
@click.option(
    "--state-file",
    "-s",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="JSON file to load state from and save it to",
)
@click.option("--real-internet", is_flag=True, help="Use live web lookups for external stimuli")
def run(
    interval: Optional[float],
    cycles: Optional[int],
    state_file: Optional[Path],
    real_internet: bool,
) -> None:
    """Run the mind, printing one line per cycle."""
    overrides = {}
    if interval is not None:
        overrides["cycle_interval"] = interval
    if state_file is not None:
        overrides["state_file"] = state_file
    if real_internet:
        overrides["use_real_internet"] = True
    settings = Settings(**overrides)

    try:
        completed = asyncio.run(_run_engine(settings, cycles))
    except KeyboardInterrupt:
        click.echo("Interrupted.")
        return
    click.echo(f"Completed {completed} cycles.")


@cli.command()
@click.option(
    "--state-file",
    "-s",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    required=True,
    help="JSON state file written by 'run'",
)
def show(state_file: Path) -> None:
    """Print the persisted mind as a JSON snapshot."""
    state = load_state(JsonFileStore(state_file))
    click.echo(json.dumps(build_snapshot(state).model_dump(), indent=2))


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
