"""
Single elimination bracket generation.
"""
import logging
import math
import random
import time
from collections import namedtuple
from typing import List, Dict, Optional

from bracketgen.models import (
    Match, MatchResult, Player, TournamentSettings,
    SEEDING_RANDOM, SEEDING_RANKED, STATUS_COMPLETED, STATUS_PENDING,
)

logger = logging.getLogger(__name__)

# kind is 'player', 'bye' or 'match'; ref is a player id, bye label or match id
_Slot = namedtuple('_Slot', ['kind', 'ref'])


def new_batch_id() -> str:
    """Millisecond timestamp used to keep match ids unique between generation calls."""
    return str(int(time.time() * 1000))


def get_round_name(matches_in_round: int) -> str:
    """Get the name of a round based on how many matches it holds."""
    if matches_in_round == 1:
        return "Final"
    elif matches_in_round == 2:
        return "Semifinal"
    elif matches_in_round == 4:
        return "Quarterfinal"
    else:
        return f"Round of {matches_in_round * 2}"


def calculate_bracket_size(num_players: int) -> int:
    """Calculate the bracket size (next power of 2)."""
    if num_players <= 0:
        return 0
    return 2 ** math.ceil(math.log2(num_players))


def calculate_byes(num_players: int) -> int:
    """Calculate number of byes needed."""
    return calculate_bracket_size(num_players) - num_players


def calculate_total_rounds(num_players: int) -> int:
    if num_players < 2:
        return 0
    return int(math.log2(calculate_bracket_size(num_players)))


def order_players(players: List[Player], seeding: str, rng: Optional[random.Random] = None) -> List[Player]:
    """
    Order players before bracket or group placement.

    - random: unbiased shuffle using the supplied random source
    - ranked: descending by average, ties keep their input order
    - fixed: input order untouched

    Always returns a new list; the caller's roster is never reordered.
    """
    ordered = list(players)
    if seeding == SEEDING_RANDOM:
        if rng is None:
            rng = random.Random()
        rng.shuffle(ordered)
    elif seeding == SEEDING_RANKED:
        ordered.sort(key=lambda p: p.average, reverse=True)
    return ordered


def _fold_winner_slots(winners: List[_Slot]) -> List[_Slot]:
    """
    Place the winners of matches 2k and 2k+1 at mirrored positions k and len-1-k,
    so that front/back pairing in the next round reproduces the match at index k.
    """
    if len(winners) < 2:
        return winners
    slots = [None] * len(winners)
    for k in range(len(winners) // 2):
        slots[k] = winners[2 * k]
        slots[len(winners) - 1 - k] = winners[2 * k + 1]
    return slots


def _build_round(slots: List[_Slot], round_num: int, batch_id: str):
    round_matches = []
    winners = []
    for i in range(len(slots) // 2):
        p1 = slots[i]
        p2 = slots[len(slots) - 1 - i]

        match = Match(
            id=f"match-{batch_id}-r{round_num}-{i}",
            player1_id=p1.ref if p1.kind == 'player' else None,
            player2_id=p2.ref if p2.kind == 'player' else None,
            status=STATUS_PENDING,
            round=round_num,
        )

        if p1.kind == 'bye' or p2.kind == 'bye':
            winner_id = p1.ref if p1.kind == 'player' else p2.ref
            match.status = STATUS_COMPLETED
            match.result = MatchResult(0, 0, winner_id)
            winners.append(_Slot('player', winner_id))
        else:
            winners.append(_Slot('match', match.id))
        round_matches.append(match)
    return round_matches, winners


def link_knockout_rounds(rounds: List[List[Match]]) -> None:
    """Point every non-final match at the match its winner advances into."""
    for r in range(len(rounds) - 1):
        for i, match in enumerate(rounds[r]):
            match.next_match_id = rounds[r + 1][i // 2].id


def generate_knockout_bracket(players: List[Player], settings: TournamentSettings,
                              rng: Optional[random.Random] = None,
                              batch_id: Optional[str] = None) -> List[Match]:
    """
    Generate a full single elimination bracket.

    Byes are appended after the ordered players and paired front-to-back, so
    with ranked seeding the highest seeds are the ones that draw them. A bye
    match is returned already completed with the real player as winner.

    Returns every match across all rounds, in round order.
    """
    ordered = order_players(players, settings.seeding, rng)

    num_players = len(ordered)
    if num_players < 2:
        logger.warning(f"Knockout bracket needs at least 2 players, got {num_players}; no bracket generated")
        return []

    if batch_id is None:
        batch_id = new_batch_id()

    bracket_size = calculate_bracket_size(num_players)
    byes = calculate_byes(num_players)
    logger.debug(f"Knockout bracket: {num_players} players, size {bracket_size}, {byes} byes")

    slots = [_Slot('player', p.id) for p in ordered]
    slots.extend(_Slot('bye', f"bye-{i}") for i in range(byes))

    rounds = []
    round_num = 1
    while len(slots) > 1:
        round_matches, winners = _build_round(slots, round_num, batch_id)
        rounds.append(round_matches)
        slots = _fold_winner_slots(winners)
        round_num += 1

    link_knockout_rounds(rounds)

    return [match for round_matches in rounds for match in round_matches]


def get_knockout_summary(matches: List[Match]) -> Dict:
    """
    Summarise a generated knockout stage.

    Returns dict with:
    - 'bracket_size': number of first round slots
    - 'byes': first round matches resolved by a bye
    - 'total_rounds': number of rounds
    - 'matches_per_round': round number -> match count
    - 'round_names': round number -> display name
    """
    knockout = [m for m in matches if m.is_knockout]
    matches_per_round = {}
    for match in knockout:
        matches_per_round[match.round] = matches_per_round.get(match.round, 0) + 1

    first_round = [m for m in knockout if m.round == 1]
    # A first round match with an empty slot can only be a bye
    byes = sum(1 for m in first_round if m.player1_id is None or m.player2_id is None)

    return {
        'bracket_size': len(first_round) * 2,
        'byes': byes,
        'total_rounds': len(matches_per_round),
        'matches_per_round': matches_per_round,
        'round_names': {r: get_round_name(count) for r, count in matches_per_round.items()},
    }
