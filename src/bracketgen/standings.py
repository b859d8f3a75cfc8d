"""
Group standings and replacement of placeholder knockout entrants.

generate_combined_tournament() reserves the knockout stage with empty
entrants because group results are not known yet. Once the group stage has
been played, seed_knockout_from_groups() ranks every group and regenerates
the knockout stage with the real advancing players:

- the top `players_advancing` finishers of each group advance, including
  the lone member of a group that had no matches to play
- all group winners are seeded before all runners-up, and so on
- within one finishing position, lower group index seeds first
- the old placeholder knockout matches are discarded, not patched
"""
import logging
from typing import Dict, List, Optional

from bracketgen.elimination import generate_knockout_bracket, new_batch_id
from bracketgen.formats import draw_groups, group_label
from bracketgen.models import Match, Player, TournamentSettings, SEEDING_FIXED, SEEDING_RANDOM

logger = logging.getLogger(__name__)


def _group_sort_key(group_id):
    # 'group-10' sorts after 'group-9'
    prefix, _, number = group_id.rpartition('-')
    if number.isdigit():
        return (prefix, int(number))
    return (group_id, -1)


def _empty_row(player_id):
    return {
        'player_id': player_id,
        'wins': 0,
        'losses': 0,
        'draws': 0,
        'points_for': 0,
        'points_against': 0,
        'matches_played': 0,
    }


def group_members(groups) -> Dict[str, List[str]]:
    """Accept groups as a draw_groups() list or a {group_id: [player ids]} mapping."""
    if groups is None:
        return {}
    if isinstance(groups, dict):
        return {group_id: list(ids) for group_id, ids in groups.items()}
    return {group_label(index): list(ids) for index, ids in enumerate(groups)}


def calculate_group_standings(matches: List[Match], groups=None) -> Dict[str, List[Dict]]:
    """
    Calculate standings for each group from its round robin matches.

    Membership comes from the matches plus `groups`, when given, so a
    player without matches still gets a zero row.

    Returns: {group_id: [{'player_id': id, 'wins': n, 'losses': n, 'draws': n,
                          'points_for': n, 'points_against': n, 'point_diff': n,
                          'matches_played': n}, ...]}

    Ranking: wins -> point differential -> points scored -> player id
    """
    group_stats = {}
    for group_id, player_ids in group_members(groups).items():
        stats = group_stats.setdefault(group_id, {})
        for player_id in player_ids:
            stats[player_id] = _empty_row(player_id)

    for match in matches:
        if match.group_id is None:
            continue
        stats = group_stats.setdefault(match.group_id, {})
        for player_id in (match.player1_id, match.player2_id):
            if player_id not in stats:
                stats[player_id] = _empty_row(player_id)

        if not match.is_completed or match.result is None:
            continue

        result = match.result
        player1 = stats[match.player1_id]
        player2 = stats[match.player2_id]

        player1['points_for'] += result.player1_score
        player1['points_against'] += result.player2_score
        player1['matches_played'] += 1
        player2['points_for'] += result.player2_score
        player2['points_against'] += result.player1_score
        player2['matches_played'] += 1

        # Use stored winner rather than re-deriving it from the scores
        if result.winner_id == match.player1_id:
            player1['wins'] += 1
            player2['losses'] += 1
        elif result.winner_id == match.player2_id:
            player2['wins'] += 1
            player1['losses'] += 1
        else:
            player1['draws'] += 1
            player2['draws'] += 1

    standings = {}
    for group_id in sorted(group_stats, key=_group_sort_key):
        rows = list(group_stats[group_id].values())
        for row in rows:
            row['point_diff'] = row['points_for'] - row['points_against']
        standings[group_id] = sorted(
            rows,
            key=lambda x: (-x['wins'], -x['point_diff'], -x['points_for'], x['player_id'])
        )
    return standings


def advancing_players(standings: Dict[str, List[Dict]], players_advancing: int) -> List[str]:
    """Player ids that leave the group stage, in knockout seeding order."""
    seeded = []
    for position in range(players_advancing):
        for group_id, rows in standings.items():
            if position < len(rows):
                seeded.append(rows[position]['player_id'])
            else:
                logger.warning(f"Group {group_id} has no finisher in position {position + 1}")
    return seeded


def seed_knockout_from_groups(matches: List[Match], settings: TournamentSettings,
                              players_by_id: Optional[Dict[str, Player]] = None,
                              batch_id: Optional[str] = None,
                              groups=None) -> List[Match]:
    """
    Replace the placeholder knockout stage with one built from group results.

    Group membership is taken from `groups` (the draw the group stage was
    generated from). Without it, a ranked or fixed draw is repeated from the
    roster in `players_by_id`; a random draw cannot be repeated, so only
    players that appear in group matches are known.

    Returns the group matches unchanged followed by the new knockout matches.
    Incomplete group matches are ignored for ranking purposes; callers decide
    whether the group stage is finished before calling this.
    """
    players_by_id = players_by_id or {}
    if groups is None and players_by_id and settings.seeding != SEEDING_RANDOM:
        groups = draw_groups(list(players_by_id.values()), settings)
    if groups is None:
        logger.warning("No group draw supplied; players in groups without matches cannot advance")

    group_matches = [m for m in matches if m.group_id is not None]
    standings = calculate_group_standings(group_matches, groups)
    seeded_ids = advancing_players(standings, settings.players_advancing)

    entrants = [players_by_id.get(player_id) or Player(id=player_id, name=player_id)
                for player_id in seeded_ids]
    logger.info(f"Seeding knockout stage with {len(entrants)} players from {len(standings)} groups")

    if batch_id is None:
        batch_id = new_batch_id()
    knockout_matches = generate_knockout_bracket(
        entrants, settings.with_seeding(SEEDING_FIXED), batch_id=batch_id
    )
    return group_matches + knockout_matches
