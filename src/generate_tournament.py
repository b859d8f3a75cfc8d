#!/usr/bin/env python3
"""
Generate tournament match lists from a roster.

Usage:
    python src/generate_tournament.py round-robin --players data/players.yaml
    python src/generate_tournament.py knockout --players data/players.yaml --settings data/tournament.yaml
    python src/generate_tournament.py combined --seed 42 --output data/matches.yaml
    python src/generate_tournament.py seed-knockout --matches data/matches.yaml --output data/matches.yaml

Exit codes:
    0: Success
    1: Invalid or missing input
    3: Output write failure
"""
import argparse
import logging
import random
import sys

import yaml
from filelock import FileLock

from bracketgen import config
from bracketgen.elimination import generate_knockout_bracket, get_knockout_summary
from bracketgen.formats import draw_groups, generate_combined_tournament, generate_round_robin_matches, group_label
from bracketgen.models import Match
from bracketgen.standings import seed_knockout_from_groups

logger = logging.getLogger('generate_tournament')

COMMANDS = ('round-robin', 'knockout', 'combined', 'seed-knockout')


def load_document(file_path):
    """Read a match list file; returns (matches, groups) where groups may be None."""
    with open(file_path, mode='r', encoding='utf-8') as file:
        data = yaml.safe_load(file) or {}
    groups = None
    if isinstance(data, dict):
        groups = data.get('groups')
        data = data.get('matches') or []
    if not isinstance(data, list):
        raise ValueError(f"{file_path}: expected a list of matches")
    if groups is not None and not isinstance(groups, dict):
        raise ValueError(f"{file_path}: expected groups as a mapping of group id to player ids")
    return [Match.from_dict(entry) for entry in data], groups


def load_matches(file_path):
    return load_document(file_path)[0]


def build_matches(command, args):
    """Returns (matches, groups); groups is only set for the combined format."""
    settings = config.load_settings(args.settings)
    rng = random.Random(args.seed) if args.seed is not None else None

    if command == 'seed-knockout':
        if not args.matches:
            raise ValueError("seed-knockout needs --matches")
        matches, groups = load_document(args.matches)
        players_by_id = {}
        if args.players_given:
            players_by_id = {p.id: p for p in config.load_players(args.players)}
        matches = seed_knockout_from_groups(matches, settings, players_by_id,
                                            batch_id=args.batch_id, groups=groups)
        return matches, groups

    players = config.load_players(args.players)
    if not players:
        logger.warning(f"No players loaded from {args.players}")

    if command == 'round-robin':
        return generate_round_robin_matches([p.id for p in players], batch_id=args.batch_id), None
    if command == 'knockout':
        return generate_knockout_bracket(players, settings, rng=rng, batch_id=args.batch_id), None

    draw = draw_groups(players, settings, rng)
    matches = generate_combined_tournament(players, settings, rng=rng, batch_id=args.batch_id, groups=draw)
    return matches, {group_label(index): ids for index, ids in enumerate(draw)}


def write_matches(matches, output_path=None, groups=None):
    data = {}
    if groups is not None:
        data['groups'] = groups
    data['matches'] = [m.to_dict() for m in matches]
    document = yaml.safe_dump(data, sort_keys=False, default_flow_style=False)
    if output_path is None:
        sys.stdout.write(document)
        return
    with FileLock(output_path + '.lock', timeout=10):
        with open(output_path, mode='w', encoding='utf-8') as file:
            file.write(document)


def main(argv=None):
    parser = argparse.ArgumentParser(description='Generate round robin, knockout or combined tournament matches')
    parser.add_argument('command', choices=COMMANDS, help='Tournament format to generate')
    parser.add_argument('--players', help=f'Roster YAML file (default: {config.PLAYERS_FILE})')
    parser.add_argument('--settings', default=config.SETTINGS_FILE,
                        help=f'Tournament settings YAML file (default: {config.SETTINGS_FILE})')
    parser.add_argument('--matches', help='Existing match list YAML file (seed-knockout only)')
    parser.add_argument('--seed', type=int, help='Random seed used when seeding is random')
    parser.add_argument('--batch-id', help='Fixed match id prefix (default: current time in ms)')
    parser.add_argument('--output', help='Write matches to this YAML file instead of stdout')
    parser.add_argument('-v', '--verbose', action='count', default=0, help='-v for info, -vv for debug logging')

    args = parser.parse_args(argv)

    level = logging.WARNING
    if args.verbose == 1:
        level = logging.INFO
    elif args.verbose > 1:
        level = logging.DEBUG
    logging.basicConfig(level=level, format='%(levelname)s %(name)s: %(message)s', stream=sys.stderr)

    args.players_given = args.players is not None
    if args.players is None:
        args.players = config.PLAYERS_FILE

    try:
        matches, groups = build_matches(args.command, args)
    except (ValueError, FileNotFoundError, yaml.YAMLError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if args.command in ('knockout', 'combined', 'seed-knockout'):
        summary = get_knockout_summary(matches)
        logger.info(f"Knockout stage: bracket size {summary['bracket_size']}, "
                    f"{summary['byes']} byes, {summary['total_rounds']} rounds")

    try:
        write_matches(matches, args.output, groups)
    except OSError as e:
        print(f"Error: Failed to write {args.output}: {e}", file=sys.stderr)
        return 3
    return 0


if __name__ == '__main__':
    sys.exit(main())
