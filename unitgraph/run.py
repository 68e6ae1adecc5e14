"""
UnitGraph Runner (CLI wrapper)

Usage:
    python -m unitgraph.run --config config.yaml
    python -m unitgraph.run --config config.yaml --query "2.4 meters in mm"
    python -m unitgraph.run --config config.yaml --list
    python -m unitgraph.run --config config.yaml --serve
"""

import argparse
import logging
import sys
from typing import Callable, Dict, Any, Optional

from unitgraph.config.validator import load_config, require_key, validate_or_die, ConfigurationError
from unitgraph.convert import UnitConverter
from unitgraph.errors import UnitGraphError, MalformedTableLine
from unitgraph.graph.builder import build_graph, load_table
from unitgraph.graph.model import UnitGraph

PROMPT = "Please enter a unit conversion: \n(example: 2.4 meters in mm)"
QUIT_WORDS = ('', 'quit', 'exit', 'q')


def load_graph(config: Dict[str, Any]) -> UnitGraph:
    """Build the graph from the configured table file."""
    strict = require_key(config, 'on_malformed_line') == 'abort'
    return build_graph(load_table(require_key(config, 'table')), strict=strict)


def convert_once(converter: UnitConverter, text: str) -> bool:
    """Convert and print one query. Returns False if it failed."""
    try:
        result = converter.convert_text(text)
    except UnitGraphError as e:
        print(e)
        return False
    print(result)
    return True


def interactive(converter: UnitConverter, read: Callable[[str], str] = input) -> None:
    """Prompt until an empty line, 'quit' or end of input."""
    while True:
        try:
            text = read(PROMPT + "\n")
        except EOFError:
            break
        if text.strip().lower() in QUIT_WORDS:
            break
        convert_once(converter, text)


def serve(converter: UnitConverter, config: Dict[str, Any]) -> None:
    import uvicorn
    from unitgraph.server.routes import create_app

    uvicorn.run(create_app(converter), host=require_key(config, 'host', 'serve'),
                port=require_key(config, 'port', 'serve'))


def main(argv: Optional[list] = None) -> int:
    parser = argparse.ArgumentParser(description="UnitGraph unit converter")
    parser.add_argument("--config", required=True, help="Path to config YAML")
    parser.add_argument("--query", help="Convert one query and exit")
    parser.add_argument("--list", action="store_true", help="List known units")
    parser.add_argument("--serve", action="store_true", help="Run the HTTP API")
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging")

    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO, format='%(message)s')

    command = 'list' if args.list else 'serve' if args.serve else 'convert'

    try:
        config = load_config(args.config)
    except ConfigurationError as e:
        print(str(e), file=sys.stderr)
        return 1
    validate_or_die(config, command, args.config)

    try:
        graph = load_graph(config)
    except MalformedTableLine as e:
        print(f"Table error: {e}", file=sys.stderr)
        return 1

    if args.list:
        for label in UnitConverter(graph).list_units():
            print(label)
        return 0

    converter = UnitConverter(graph, max_distance=require_key(config, 'max_distance', command))

    if args.serve:
        serve(converter, config)
        return 0

    if args.query:
        return 0 if convert_once(converter, args.query) else 1

    interactive(converter)
    return 0


if __name__ == "__main__":
    sys.exit(main())
