import argparse
import json
import logging
import sys
from pathlib import Path

from spintronics.circuit import LevelCapacityError
from spintronics.netlist import build_circuit
from spintronics.savefile import SaveFormatError, read_save


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="spintronics", description="Netlist JSON → simulator save file (.spin)")
    p.add_argument("-v", "--verbose", action="store_true", help="Log progress to stderr")
    sub = p.add_subparsers(dest="cmd", required=True)

    b = sub.add_parser("build", help="Build a save file from a netlist JSON file")
    b.add_argument("netlist", help="Path to netlist.json")
    b.add_argument("-o", "--out", required=True, help="Output .spin file")
    b.add_argument("--arrange", action="store_true", help="Reorder chain members into non-crossing loops")

    i = sub.add_parser("inspect", help="Summarise an existing save file")
    i.add_argument("save", help="Path to a .spin file")

    sv = sub.add_parser("serve", help="Start the HTTP builder service")
    sv.add_argument("--host", default="127.0.0.1", help="Host to bind")
    sv.add_argument("--port", type=int, default=8000, help="Port to bind")

    return p


def _build(args: argparse.Namespace) -> int:
    try:
        data = json.loads(Path(args.netlist).read_text(encoding="utf-8"))
        circuit = build_circuit(data)
        out = circuit.save(args.out, arrange_chains=args.arrange)
    except (OSError, ValueError, LevelCapacityError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    print(f"Wrote {len(circuit)} parts, {len(circuit.chains)} chains to {out}")
    return 0


def _inspect(args: argparse.Namespace) -> int:
    try:
        save = read_save(args.save)
    except (OSError, SaveFormatError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1

    print(f"version {save.version}, {len(save.parts)} parts, {len(save.chains)} chains")
    for idx, part in enumerate(save.parts):
        value = f" {part.value}" if part.value is not None else ""
        print(f"  part {idx}: {part.type.value}{value} at ({part.x}, {part.y})")
    for idx, chain in enumerate(save.chains):
        if not chain.connections:
            print(f"  chain {idx}: empty")
            continue
        first = chain.connections[0]
        members = [c.part_index for c in chain.connections]
        print(f"  chain {idx}: level {first.level.name.lower()}, "
              f"{first.rotation.name.lower()}, parts {members}")
    return 0


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    if args.cmd == "build":
        return _build(args)

    if args.cmd == "inspect":
        return _inspect(args)

    if args.cmd == "serve":
        from spintronics.web.server import main as serve_main
        serve_main(host=args.host, port=args.port)
        return 0

    return 2
