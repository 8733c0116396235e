import sys
import argparse
import logging

from gridsearch import config
from gridsearch.maps import SAMPLE_MAPS, MapDefinition, load_default_map, load_map
from gridsearch.pathfinding import InvalidEndpointError, PathFinder
from gridsearch.renderer import render_text


def parse_coord(text):
    """Parse an "X,Y" command line value into an (x, y) tuple."""
    try:
        x, y = text.split(",")
        return (int(x), int(y))
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected X,Y but got {text!r}")


def build_parser():
    parser = argparse.ArgumentParser(description="Find a path across a grid map.")
    source = parser.add_mutually_exclusive_group()
    source.add_argument("--map", help="JSON map file (default: bundled map)")
    source.add_argument("--sample", choices=sorted(SAMPLE_MAPS), help="built-in sample map")
    parser.add_argument("--start", type=parse_coord, help="override start cell as X,Y")
    parser.add_argument("--goal", type=parse_coord, help="override goal cell as X,Y")
    parser.add_argument("--text", action="store_true", help="print the result instead of opening a window")
    parser.add_argument(
        "--no-corner-cutting",
        dest="corner_cutting",
        action="store_false",
        default=config.ALLOW_CORNER_CUTTING,
        help="forbid diagonal moves between two blocked cells",
    )
    parser.add_argument(
        "--log-level",
        default=logging.getLevelName(config.LOG_LEVEL),
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
    )
    return parser


def select_map(args):
    if args.sample:
        definition = SAMPLE_MAPS[args.sample]()
    elif args.map:
        definition = load_map(args.map)
    else:
        definition = load_default_map()
    return MapDefinition(
        definition.grid,
        args.start or definition.start,
        args.goal or definition.goal,
        name=definition.name,
    )


def run_text(definition, corner_cutting):
    finder = PathFinder(
        definition.grid,
        definition.start,
        definition.goal,
        allow_corner_cutting=corner_cutting,
    )
    path = finder.find_path()
    print(render_text(definition.grid, definition.start, definition.goal, path, finder.closed))
    if path:
        print(" -> ".join(f"({x},{y})" for x, y in path))
    elif definition.start == definition.goal:
        print("Start and goal are the same cell.")
    else:
        print("No path found.")


def main(argv=None):
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=args.log_level, format=config.LOG_FORMAT)
    try:
        definition = select_map(args)
        if args.text:
            run_text(definition, args.corner_cutting)
        else:
            # Imported lazily so text mode never initialises pygame
            from gridsearch.viewer import Viewer

            Viewer(definition, allow_corner_cutting=args.corner_cutting).run()
    except (InvalidEndpointError, RuntimeError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
