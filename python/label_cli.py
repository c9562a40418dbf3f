#!/usr/bin/env python3
"""
Label code generator CLI
------------------------
Reads a label document (JSON), binds variables, resolves placeholders and
writes the printer command stream for the selected protocol.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from label_emitters import UnsupportedProtocolError, emit_label, list_protocols
from label_model import COMMON_LABEL_SIZES, LabelDocumentError, load_document
from label_protocol import optimize_code
from label_units import supported_units
from label_variables import (
    bind_variables,
    collect_used_variable_names,
    generate_sample_data,
    get_preset,
    list_presets,
    substitute,
)

logger = logging.getLogger(__name__)


def load_variables(path: Optional[str], preset: Optional[str] = None) -> Dict[str, Any]:
    """Merge preset sample values with the values read from a JSON file."""

    values: Dict[str, Any] = {}
    if preset:
        values.update(generate_sample_data(get_preset(preset)))
    if path:
        data = json.loads(Path(path).read_text(encoding="utf-8"))
        if not isinstance(data, dict):
            raise ValueError("variables file must contain a JSON object")
        values.update(data)
    return values


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="label-codegen",
        description="Generate ZPL, EPL or DPL code from a label document",
    )
    parser.add_argument("document", help="Label document (JSON file)")
    parser.add_argument(
        "--protocol",
        type=str.upper,
        choices=list(list_protocols()),
        default="ZPL",
        help="Printer command language",
    )
    parser.add_argument("--vars", help="JSON file with variable values")
    parser.add_argument("--preset", choices=list(list_presets()), help="Fill variables from a preset's sample data")
    parser.add_argument("--size", choices=sorted(COMMON_LABEL_SIZES), help="Override the document canvas size")
    parser.add_argument("--dpi", type=float, help="Printer resolution in dots per inch")
    parser.add_argument("--units", choices=supported_units(), help="Unit of the document coordinates")
    parser.add_argument("--optimize", action="store_true", help="Collapse redundant field commands")
    parser.add_argument("--output", "-o", help="Write the command stream to this file")
    parser.add_argument(
        "--list-variables",
        action="store_true",
        help="Print the variable names referenced by the document and exit",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    return parser


def run(args: argparse.Namespace) -> int:
    try:
        document = load_document(Path(args.document))
    except (LabelDocumentError, OSError, ValueError) as exc:
        print(f"[!] Cannot load {args.document}: {exc}", file=sys.stderr)
        return 2

    if args.list_variables:
        for name in collect_used_variable_names(document.elements):
            print(name)
        return 0

    try:
        values = load_variables(args.vars, args.preset)
    except (OSError, ValueError) as exc:
        print(f"[!] Cannot load variables: {exc}", file=sys.stderr)
        return 2

    bindings = bind_variables(values)
    elements = substitute(document.elements, bindings)
    canvas = COMMON_LABEL_SIZES[args.size] if args.size else document.canvas
    logger.debug(
        "Emitting %d elements as %s on a %sx%s canvas",
        len(elements),
        args.protocol,
        canvas.width,
        canvas.height,
    )

    options: Dict[str, Any] = {}
    if args.dpi is not None:
        options["dpi"] = args.dpi
    if args.units:
        options["units"] = args.units

    try:
        code = emit_label(args.protocol, elements, canvas, options)
    except UnsupportedProtocolError as exc:
        print(f"[!] {exc}", file=sys.stderr)
        return 2
    if args.optimize:
        code = optimize_code(code, args.protocol)

    if args.output:
        Path(args.output).write_text(code, encoding="utf-8")
        print(f"[+] {args.protocol} code written to {args.output}", file=sys.stderr)
    else:
        sys.stdout.write(code)
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    return run(args)


if __name__ == "__main__":
    sys.exit(main())
