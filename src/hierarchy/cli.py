import json
import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Annotated, Any, NoReturn

import typer

from domain_models.config import HierarchyConfig
from hierarchy.engines.hierarchy import Hierarchy, try_build_hierarchy
from hierarchy.utils.io import load_flat_store

# Configure logging to stderr so it doesn't interfere with stdout output if needed
logging.basicConfig(
    level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)

app = typer.Typer(
    name="hierarchy",
    help="Hierarchy: build and query trees from flat parent-referencing JSON records.",
    add_completion=False,
)

InputFile = Annotated[
    Path,
    typer.Argument(
        exists=True,
        file_okay=True,
        dir_okay=False,
        readable=True,
        help="JSON object mapping node IDs to records.",
    ),
]
RootOption = Annotated[
    str | None,
    typer.Option("--root", "-r", help="Build from this node instead of the self-referencing root."),
]


def _fail_with_error(message: str) -> NoReturn:
    """Centralized error handling: Log error and exit with code 1."""
    typer.echo(message, err=True)
    logger.error(message)
    raise typer.Exit(code=1)


def _json_default(value: Any) -> Any:
    """Serialize read-only record views."""
    if isinstance(value, Mapping):
        return dict(value)
    msg = f"Object of type {type(value).__name__} is not JSON serializable"
    raise TypeError(msg)


def _echo_json(data: Any) -> None:
    typer.echo(json.dumps(data, indent=2, ensure_ascii=False, default=_json_default))


def _load(input_file: Path, root: str | None) -> Hierarchy:
    """Read the input file and build the hierarchy, exiting on any failure."""
    config = HierarchyConfig.default()
    try:
        data = load_flat_store(input_file, config.parent_field)
    except (OSError, ValueError) as e:
        _fail_with_error(f"Error reading input: {e}")

    result = try_build_hierarchy(data, forced_root_id=root, config=config)
    if result.error is not None:
        _fail_with_error(f"Invalid hierarchy ({result.error.kind}): {result.error.message}")
    return result.unwrap()


def _require_node(hierarchy: Hierarchy, node_id: str) -> None:
    """Exit with an error unless node_id is a key of the input."""
    if node_id not in hierarchy:
        _fail_with_error(f"Node {node_id} not found.")


def _parse_value(raw: str) -> Any:
    """Interpret a command-line value as JSON (true, 3, "x"), else keep the raw string."""
    try:
        return json.loads(raw)
    except json.JSONDecodeError:
        return raw


@app.command()
def validate(input_file: InputFile, root: RootOption = None) -> None:
    """
    Check that the records form a single rooted tree.
    """
    hierarchy = _load(input_file, root)
    typer.echo(
        f"Valid hierarchy: {len(hierarchy)} records, root {hierarchy.root_id}, "
        f"{len(hierarchy.tree)} reachable."
    )
    unreachable = hierarchy.unreachable_ids
    if unreachable:
        typer.echo(f"Unreachable from root: {', '.join(str(key) for key in unreachable)}")


@app.command()
def tree(input_file: InputFile, root: RootOption = None) -> None:
    """
    Print the tree as nested JSON.
    """
    hierarchy = _load(input_file, root)
    _echo_json(hierarchy.tree.as_nested_dict(hierarchy.config.children_field))


@app.command()
def children(
    input_file: InputFile,
    node_id: Annotated[
        str | None, typer.Argument(help="Parent node (defaults to the root).")
    ] = None,
    full: Annotated[
        bool, typer.Option("--full", help="Print full records instead of names.")
    ] = False,
    root: RootOption = None,
) -> None:
    """
    Print the immediate children of a node.
    """
    hierarchy = _load(input_file, root)
    if node_id is not None:
        _require_node(hierarchy, node_id)
    result = hierarchy.children_of(node_id, name_only=not full)
    if result is None:
        _fail_with_error("The hierarchy has no parent-child links.")
    _echo_json(result)


@app.command()
def ancestors(
    input_file: InputFile,
    node_id: Annotated[str, typer.Argument(help="Starting node.")],
    include_current: Annotated[
        bool, typer.Option("--include-current", help="Include the starting node.")
    ] = False,
    root: RootOption = None,
) -> None:
    """
    Print the ancestors of a node, nearest first.
    """
    hierarchy = _load(input_file, root)
    _require_node(hierarchy, node_id)
    _echo_json(hierarchy.get_ancestors(node_id, include_current=include_current))


@app.command()
def descendants(
    input_file: InputFile,
    node_id: Annotated[str, typer.Argument(help="Starting node.")],
    root: RootOption = None,
) -> None:
    """
    Print every descendant of a node.
    """
    hierarchy = _load(input_file, root)
    _require_node(hierarchy, node_id)
    _echo_json(hierarchy.get_descendants(node_id))


@app.command()
def family(
    input_file: InputFile,
    node_id: Annotated[str, typer.Argument(help="Starting node.")],
    include_ancestors: Annotated[
        bool, typer.Option("--ancestors/--no-ancestors", help="Include ancestors.")
    ] = True,
    root: RootOption = None,
) -> None:
    """
    Print a node together with its descendants and ancestors.
    """
    hierarchy = _load(input_file, root)
    _require_node(hierarchy, node_id)
    _echo_json(hierarchy.get_family(node_id, include_ancestors=include_ancestors))


@app.command()
def nearest(
    input_file: InputFile,
    node_id: Annotated[str, typer.Argument(help="Starting node.")],
    attribute: Annotated[str, typer.Argument(help="Attribute to compare.")],
    value: Annotated[str, typer.Argument(help="Expected value, parsed as JSON when possible.")],
    root_if_none: Annotated[
        bool, typer.Option("--root-if-none", help="Fall back to the root when nothing matches.")
    ] = False,
    include_current: Annotated[
        bool, typer.Option("--include-current", help="Consider the starting node itself.")
    ] = False,
    root: RootOption = None,
) -> None:
    """
    Print the nearest ancestor whose attribute equals a value.
    """
    hierarchy = _load(input_file, root)
    _require_node(hierarchy, node_id)
    match = hierarchy.nearest_ancestor_having_attribute_value(
        node_id,
        attribute,
        _parse_value(value),
        return_root_if_none=root_if_none,
        include_current=include_current,
    )
    if match is None:
        _fail_with_error(f"No ancestor of {node_id} has {attribute} == {value}.")
    typer.echo(str(match))


if __name__ == "__main__":
    app()
