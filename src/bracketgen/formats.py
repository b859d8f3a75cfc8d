"""
Round robin group play and the combined group-stage-plus-knockout format.
"""
import logging
import random
from itertools import combinations
from typing import List, Optional

from bracketgen.elimination import generate_knockout_bracket, order_players, new_batch_id
from bracketgen.models import Match, Player, TournamentSettings, SEEDING_RANDOM, STATUS_PENDING

logger = logging.getLogger(__name__)


def group_label(index: int) -> str:
    return f"group-{index}"


def generate_round_robin_matches(player_ids: List[str], group_id: Optional[str] = None,
                                 batch_id: Optional[str] = None) -> List[Match]:
    """Pair every player with every later player in the list, once."""
    if batch_id is None:
        batch_id = new_batch_id()
    suffix = f"-{group_id}" if group_id else ''

    matches = []
    for (i, player1_id), (j, player2_id) in combinations(enumerate(player_ids), 2):
        matches.append(Match(
            id=f"match-{batch_id}-{i}-{j}{suffix}",
            player1_id=player1_id,
            player2_id=player2_id,
            status=STATUS_PENDING,
            group_id=group_id,
        ))
    return matches


def assign_groups_serpentine(players: List[Player], num_groups: int) -> List[List[str]]:
    """
    Deal ordered players into groups snake-draft style.

    With 8 players and 2 groups:
    group-0: 1, 4, 5, 8
    group-1: 2, 3, 6, 7
    """
    groups = [[] for _ in range(num_groups)]
    for index, player in enumerate(players):
        group_index = index % num_groups
        row_index = index // num_groups
        if row_index % 2 == 0:
            groups[group_index].append(player.id)
        else:
            groups[num_groups - 1 - group_index].append(player.id)
    return groups


def draw_groups(players: List[Player], settings: TournamentSettings,
                rng: Optional[random.Random] = None) -> List[List[str]]:
    """Order the roster and deal it into settings.num_groups groups of player ids."""
    ordered = order_players(players, settings.seeding, rng)
    if settings.num_groups > len(ordered):
        logger.warning(f"{settings.num_groups} groups requested for {len(ordered)} players; some groups will be empty")
    return assign_groups_serpentine(ordered, settings.num_groups)


def generate_combined_tournament(players: List[Player], settings: TournamentSettings,
                                 rng: Optional[random.Random] = None,
                                 batch_id: Optional[str] = None,
                                 groups: Optional[List[List[str]]] = None) -> List[Match]:
    """
    Generate a group stage followed by a placeholder knockout stage.

    Pass `groups` (as returned by draw_groups) to reuse a draw the caller
    keeps; groups of one player have no matches, so their membership is only
    recorded there.

    The knockout entrants are empty placeholders until group standings exist;
    see standings.seed_knockout_from_groups for replacing them.
    """
    if batch_id is None:
        batch_id = new_batch_id()

    if groups is None:
        groups = draw_groups(players, settings, rng)

    group_matches = []
    for index, player_ids in enumerate(groups):
        if len(player_ids) < 2:
            logger.warning(f"Group {group_label(index)} has fewer than 2 players ({len(player_ids)}); no matches generated")
        group_matches.extend(generate_round_robin_matches(player_ids, group_label(index), batch_id))
    logger.debug(f"Group stage: {len(groups)} groups, {len(group_matches)} matches")

    num_advancing = settings.num_groups * settings.players_advancing
    knockout_players = [Player.placeholder() for _ in range(num_advancing)]
    knockout_matches = generate_knockout_bracket(
        knockout_players, settings.with_seeding(SEEDING_RANDOM), rng=rng, batch_id=batch_id
    )

    return group_matches + knockout_matches
