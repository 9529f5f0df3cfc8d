"""CLI for Merkle Path."""

import sys
from pathlib import Path

import click
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from . import MERKLE_DIR, __version__
from .config import (
    HashAlgorithm,
    MerkleConfig,
    create_default_config,
    get_merkle_dir,
    load_config,
    save_config,
)
from .content import StringContent
from .errors import MerkleError
from .hashing import SUPPORTED_ALGORITHMS, HashlibStrategy, get_hash_strategy
from .tree import MerkleTree

console = Console()
error_console = Console(stderr=True)

hash_option = click.option(
    "--hash",
    "hash_algorithm",
    type=click.Choice(SUPPORTED_ALGORITHMS),
    default=None,
    help="Digest for internal nodes (default: from config)",
)
file_option = click.option(
    "--file",
    "items_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="Read items from a file, one per line",
)


def get_project_root() -> Path:
    """Get the project root directory (current working directory)."""
    return Path.cwd()


def fail(message: str) -> None:
    """Print an error and exit with status 1."""
    error_console.print(f"[red]Error:[/red] {message}")
    sys.exit(1)


def collect_items(items: tuple[str, ...], items_file: Path | None) -> list[str]:
    """Combine positional items with lines read from a file."""
    collected = list(items)
    if items_file is not None:
        text = items_file.read_text(encoding="utf-8")
        collected.extend(line for line in text.splitlines() if line)
    return collected


def build_tree(
    items: list[str], config: MerkleConfig, hash_algorithm: str | None
) -> MerkleTree:
    """Build a tree over text items, exiting with an error on failure."""
    contents = [StringContent(item, algorithm=config.content_algorithm) for item in items]
    if hash_algorithm:
        strategy = HashlibStrategy(hash_algorithm)
    else:
        strategy = get_hash_strategy(config)

    try:
        return MerkleTree.build(contents, strategy)
    except MerkleError as exc:
        fail(str(exc))


@click.group()
@click.version_option(version=__version__, prog_name="mkp")
def main() -> None:
    """Merkle Path - Merkle roots and inclusion paths for text items."""
    pass


@main.command()
@click.option(
    "--hash",
    "hash_algorithm",
    type=click.Choice(SUPPORTED_ALGORITHMS),
    default="md5",
    help="Digest for leaves and internal nodes",
)
@click.option("--force", is_flag=True, help="Overwrite existing configuration")
def init(hash_algorithm: HashAlgorithm, force: bool) -> None:
    """Write a Merkle Path config in the current project."""
    project_root = get_project_root()
    merkle_dir = get_merkle_dir(project_root)

    if merkle_dir.exists() and not force:
        error_console.print(
            f"[yellow]Warning:[/yellow] {MERKLE_DIR}/ already exists. Use --force to reinitialize."
        )
        sys.exit(1)

    config = create_default_config(hash_algorithm)
    save_config(config, project_root)

    console.print(
        Panel(
            f"[green]Initialized Merkle Path[/green]\n\n"
            f"Hash algorithm: [bold]{hash_algorithm}[/bold]\n"
            f"Config directory: [dim]{merkle_dir}[/dim]",
            title="mkp init",
        )
    )


@main.command()
@click.argument("items", nargs=-1)
@file_option
@hash_option
@click.option("--verbose", "-v", is_flag=True, help="Show build statistics")
def root(
    items: tuple[str, ...], items_file: Path | None, hash_algorithm: str | None, verbose: bool
) -> None:
    """Print the Merkle root of ITEMS."""
    config = load_config(get_project_root())
    tree = build_tree(collect_items(items, items_file), config, hash_algorithm)

    console.print(tree.root_digest.hex(), highlight=False)

    if verbose:
        stats = tree.build_stats
        table = Table(title="Tree Built")
        table.add_column("Metric", style="cyan")
        table.add_column("Count", justify="right")

        table.add_row("Hash strategy", tree.hash_strategy.name)
        table.add_row("Items", str(stats.contents))
        table.add_row("Leaves", str(stats.leaves))
        table.add_row("Duplicate leaves", str(stats.duplicates))
        table.add_row("Internal nodes", str(stats.internal_nodes))
        table.add_row("Levels", str(stats.levels))

        console.print(table)


@main.command()
@click.argument("items", nargs=-1)
@file_option
@hash_option
def dump(items: tuple[str, ...], items_file: Path | None, hash_algorithm: str | None) -> None:
    """Show the leaf nodes built from ITEMS."""
    config = load_config(get_project_root())
    tree = build_tree(collect_items(items, items_file), config, hash_algorithm)

    table = Table(title=f"Leaves (root {tree.root_digest.hex()})")
    table.add_column("#", justify="right")
    table.add_column("Hash", style="cyan")
    table.add_column("Duplicate")
    table.add_column("Content")

    for index, leaf in enumerate(tree.leaves):
        table.add_row(
            str(index),
            leaf.hash.hex(),
            "[yellow]yes[/yellow]" if leaf.is_duplicate else "no",
            str(leaf.content),
        )

    console.print(table)


@main.command()
@click.argument("target")
@click.argument("items", nargs=-1)
@file_option
@hash_option
def path(
    target: str, items: tuple[str, ...], items_file: Path | None, hash_algorithm: str | None
) -> None:
    """Print the inclusion path of TARGET among ITEMS."""
    config = load_config(get_project_root())
    tree = build_tree(collect_items(items, items_file), config, hash_algorithm)

    hashes, directions = tree.get_merkle_path(
        StringContent(target, algorithm=config.content_algorithm)
    )
    if not hashes:
        fail(f"{target!r} is not in the tree")

    table = Table(title=f"Path for {target!r}")
    table.add_column("Level", justify="right")
    table.add_column("Sibling", style="cyan")
    table.add_column("Side")

    for level, (sibling, direction) in enumerate(zip(hashes, directions)):
        table.add_row(str(level), sibling.hex(), str(direction))

    console.print(table)
    console.print(f"Root: {tree.root_digest.hex()}")


if __name__ == "__main__":
    main()
