#!/usr/bin/env python3

"""
__main__.py — Command line entry point.

    python -m legality list [--generation N]
    python -m legality synthesize TEMPLATE_ID [--ot NAME --tid N --sid N --shiny]
    python -m legality check record.json
"""

import argparse
import json
import random
import sys

from .constants import NATURE_NAMES, LanguageID, ShinyPreference
from .criteria import TraitCriteria
from .entity import Entity, TrainerInfo
from .errors import LegalityError
from .finder import get_encounter_finder
from .legality_logging import init_redirectors
from .pipeline import DEFAULT_TRAINER, get_conversion_pipeline


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="legality", description="Encounter legality checker")
    parser.add_argument("--log-dir", default=None, help="Directory for legality.log")
    commands = parser.add_subparsers(dest="command", required=True)

    list_cmd = commands.add_parser("list", help="List bundled encounter templates")
    list_cmd.add_argument("--generation", type=int, default=None)

    synth = commands.add_parser("synthesize", help="Generate an entity from a template")
    synth.add_argument("template_id")
    synth.add_argument("--ot", default=DEFAULT_TRAINER.ot_name, help="Trainer name")
    synth.add_argument("--tid", type=int, default=DEFAULT_TRAINER.tid16)
    synth.add_argument("--sid", type=int, default=DEFAULT_TRAINER.sid16)
    synth.add_argument("--language", type=int, default=int(LanguageID.ENGLISH))
    synth.add_argument("--nature", type=int, default=None)
    synth.add_argument("--shiny", action="store_true", help="Request a shiny result")
    synth.add_argument("--seed", type=int, default=None, help="Seed for reproducible output")

    check = commands.add_parser("check", help="Find encounters for a parsed record (JSON)")
    check.add_argument("path", help="JSON file, or - for stdin")

    return parser.parse_args(argv)


def cmd_list(args) -> int:
    store = get_encounter_finder().store
    generations = [args.generation] if args.generation else store.generations
    for generation in generations:
        for template in store.get_generation(generation):
            print(f"{template.template_id:<24} Gen {generation}  species {template.species:>4}"
                  f"  Lv{template.level_min:<3} {template.name}"
                  f"{' (gift)' if template.is_gift else ''}")
    return 0


def cmd_synthesize(args) -> int:
    trainer = TrainerInfo(args.ot, args.tid, args.sid, language=args.language)
    criteria = TraitCriteria(
        nature=args.nature,
        shiny=ShinyPreference.SHINY if args.shiny else ShinyPreference.ANY,
    )
    rng = random.Random(args.seed) if args.seed is not None else None

    pk = get_conversion_pipeline().synthesize(args.template_id, trainer, criteria, rng)
    print(f"[Main] {pk.nickname} PID {pk.pid:08X} {NATURE_NAMES[pk.nature]}"
          f"{' (shiny)' if pk.is_shiny else ''}")
    json.dump(pk.to_parsed(), sys.stdout, indent=2)
    sys.stdout.write("\n")
    return 0


def cmd_check(args) -> int:
    if args.path == "-":
        data = json.load(sys.stdin)
    else:
        with open(args.path, "r", encoding="utf-8") as f:
            data = json.load(f)

    pk = Entity.from_parsed(data)
    results = get_encounter_finder().find_matches(pk)
    if not results:
        print("[Main] No matching encounter")
        return 1
    for match in results:
        notes = []
        if not match.trainer_ok:
            notes.append("trainer name differs")
        if not match.nickname_ok:
            notes.append("nickname differs")
        suffix = f" ({', '.join(notes)})" if notes else ""
        print(f"[Main] {match.rating.name}: {match.template.long_name}{suffix}")
    return 0


COMMANDS = {
    "list": cmd_list,
    "synthesize": cmd_synthesize,
    "check": cmd_check,
}


def main(argv=None) -> int:
    args = parse_args(argv)
    init_redirectors(args.log_dir)
    try:
        return COMMANDS[args.command](args)
    except LegalityError as e:
        print(f"[Main] Error: {e}")
        return 2


if __name__ == "__main__":
    sys.exit(main())
