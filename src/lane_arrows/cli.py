"""CLI for lane-arrows."""

from __future__ import annotations

import logging
from pathlib import Path

import click
import networkx as nx

from lane_arrows import __version__
from lane_arrows.engine import separate_network, separate_node
from lane_arrows.network import RoadNetwork, format_arrows, parse_network
from lane_arrows.persistence import (
    load_legacy,
    load_records,
    records_from_json,
    records_to_json,
    save_records,
)
from lane_arrows.render import render_svg
from lane_arrows.store import ArrowStore
from lane_arrows.themes import THEMES


def _read_network(input_file: Path) -> RoadNetwork:
    try:
        return parse_network(input_file.read_text())
    except ValueError as e:
        click.echo(f"Parse error: {e}", err=True)
        raise SystemExit(1)


def _apply_arrows_file(store: ArrowStore, arrows_file: Path) -> bool:
    """Load saved arrows; JSON records or a legacy ``id:flags,...`` string."""
    text = arrows_file.read_text().strip()
    if text.startswith("["):
        try:
            records = records_from_json(text)
        except ValueError as e:
            click.echo(f"Arrow data error: {e}", err=True)
            raise SystemExit(1)
        return load_records(store, records)
    return load_legacy(store, text)


def _echo_assignments(store: ArrowStore, lane_ids: list[int]) -> None:
    network = store.network
    for lane_id in lane_ids:
        lane = network.lanes[lane_id]
        node_id, _ = network.outgoing_node(lane_id)
        arrows = format_arrows(store.get_final_lane_arrows(lane_id))
        click.echo(f"  lane {lane_id} (segment {lane.segment_id} -> node {node_id}): {arrows}")


@click.group()
@click.version_option(version=__version__)
@click.option("-v", "--verbose", is_flag=True, help="Log allocation details to stderr")
def cli(verbose: bool) -> None:
    """lane-arrows: Distribute turn arrows over junction lanes."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


@cli.command()
@click.argument("input_file", type=click.Path(exists=True, path_type=Path))
def validate(input_file: Path) -> None:
    """Validate a road network definition."""
    network = _read_network(input_file)

    errors = []
    for node in network.nodes.values():
        if not network.node_segments(node.id):
            errors.append(f"Node {node.id} has no segments")
    for segment in network.segments.values():
        if segment.start_node == segment.end_node:
            errors.append(f"Segment {segment.id} starts and ends at node {segment.start_node}")
        positions = [network.lanes[lid].position for lid in segment.lanes]
        if len(positions) != len(set(positions)):
            errors.append(f"Segment {segment.id} has lanes sharing a position")

    if errors:
        click.echo("Validation errors:", err=True)
        for err in errors:
            click.echo(f"  - {err}", err=True)
        raise SystemExit(1)

    click.echo(f"Valid: {len(network.nodes)} nodes, "
               f"{len(network.segments)} segments, "
               f"{len(network.lanes)} lanes")


@cli.command()
@click.argument("input_file", type=click.Path(exists=True, path_type=Path))
def info(input_file: Path) -> None:
    """Show information about a road network definition."""
    network = _read_network(input_file)
    G = network.to_networkx()

    click.echo(f"Title: {network.title or '(none)'}")
    click.echo(f"Nodes: {len(network.nodes)}")
    for node in network.nodes.values():
        state = "" if node.created else " (removed)"
        click.echo(f"  [{node.id}] {len(network.node_segments(node.id))} segments{state}")
    click.echo(f"Segments: {len(network.segments)}")
    for segment in network.segments.values():
        forward = sum(
            1 for lane in network.segment_lanes(segment.id)
            if network.outgoing_node(lane.id)[0] == segment.end_node
        )
        flag = ", inverted" if segment.inverted else ""
        click.echo(f"  [{segment.id}] {segment.start_node} -> {segment.end_node}: "
                   f"{len(segment.lanes)} lanes ({forward} towards {segment.end_node}{flag})")
    click.echo(f"Lanes: {len(network.lanes)}")
    if len(G):
        click.echo(f"Components: {nx.number_connected_components(G)}")


@cli.command()
@click.argument("input_file", type=click.Path(exists=True, path_type=Path))
@click.option("-n", "--node", "node_ids", type=int, multiple=True,
              help="Node to separate (repeatable). Defaults to every node.")
@click.option("--arrows", "arrows_file", type=click.Path(exists=True, path_type=Path),
              default=None, help="Saved arrows to load before separating")
@click.option("--save", type=click.Path(path_type=Path), default=None,
              help="Write the resulting custom arrows as JSON records")
def separate(
    input_file: Path,
    node_ids: tuple[int, ...],
    arrows_file: Path | None,
    save: Path | None,
) -> None:
    """Assign lane arrows at junctions in proportion to outgoing lanes."""
    network = _read_network(input_file)
    store = ArrowStore(network)
    if arrows_file is not None:
        _apply_arrows_file(store, arrows_file)
        store.routing.drain()

    if node_ids:
        applied = []
        for node_id in node_ids:
            if node_id not in network.nodes:
                click.echo(f"Unknown node {node_id}", err=True)
                raise SystemExit(1)
            applied.extend(separate_node(store, node_id))
    else:
        applied = separate_network(store)

    lane_ids = sorted({lane_id for lane_id, _ in applied})
    _echo_assignments(store, lane_ids)
    recalculated = store.routing.drain()
    click.echo(f"Separated {len(lane_ids)} lanes; "
               f"{len(recalculated)} segments queued for routing recalculation")

    if save is not None:
        save.write_text(records_to_json(save_records(store)))
        click.echo(f"Saved {len(store.custom_arrows())} lane arrows -> {save}")


@cli.command()
@click.argument("input_file", type=click.Path(exists=True, path_type=Path))
@click.argument("arrows_file", type=click.Path(exists=True, path_type=Path))
def load(input_file: Path, arrows_file: Path) -> None:
    """Apply saved lane arrows to a network and list them."""
    network = _read_network(input_file)
    store = ArrowStore(network)
    ok = _apply_arrows_file(store, arrows_file)
    _echo_assignments(store, list(store.custom_arrows()))
    click.echo(f"Loaded {len(store.custom_arrows())} lane arrows")
    if not ok:
        click.echo("Some entries could not be loaded", err=True)
        raise SystemExit(1)


@cli.command()
@click.argument("input_file", type=click.Path(exists=True, path_type=Path))
@click.option("-o", "--output", type=click.Path(path_type=Path), default=None,
              help="Output SVG file path. Defaults to <input>.svg")
@click.option("--theme", type=click.Choice(list(THEMES.keys())), default="dark",
              help="Visual theme (default: dark)")
@click.option("--scale", type=float, default=2.0,
              help="Pixels per network unit (default: 2)")
@click.option("--arrows", "arrows_file", type=click.Path(exists=True, path_type=Path),
              default=None, help="Saved arrows to show")
@click.option("--separate/--no-separate", "run_separation", default=False,
              help="Run lane separation at every node before rendering")
def render(
    input_file: Path,
    output: Path | None,
    theme: str,
    scale: float,
    arrows_file: Path | None,
    run_separation: bool,
) -> None:
    """Render a road network with its lane arrows to SVG."""
    network = _read_network(input_file)
    store = ArrowStore(network)
    if arrows_file is not None:
        _apply_arrows_file(store, arrows_file)
    if run_separation:
        separate_network(store)

    svg = render_svg(store, THEMES[theme], scale=scale)

    if output is None:
        output = input_file.with_suffix(".svg")

    output.write_text(svg)
    click.echo(f"Rendered {len(network.nodes)} nodes, "
               f"{len(network.segments)} segments, "
               f"{len(network.lanes)} lanes -> {output}")
