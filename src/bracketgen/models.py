SEEDING_RANDOM = 'random'
SEEDING_RANKED = 'ranked'
SEEDING_FIXED = 'fixed'
SEEDING_MODES = (SEEDING_RANDOM, SEEDING_RANKED, SEEDING_FIXED)

STATUS_PENDING = 'pending'
STATUS_COMPLETED = 'completed'


class Player:
    def __init__(self, id, name='', avatar='', average=0):
        self.id = id
        self.name = name
        self.avatar = avatar
        self.average = average

    @classmethod
    def placeholder(cls):
        """A knockout entrant whose real occupant is not known yet."""
        return cls(id='', name='', avatar='', average=0)

    @classmethod
    def from_dict(cls, data):
        player_id = str(data['id'])
        return cls(
            id=player_id,
            name=data.get('name') or player_id,
            avatar=data.get('avatar') or '',
            average=data.get('average') or 0,
        )

    def to_dict(self):
        return {'id': self.id, 'name': self.name, 'avatar': self.avatar, 'average': self.average}

    def __repr__(self):
        return f"Player(id={self.id}, name={self.name}, average={self.average})"


class MatchResult:
    def __init__(self, player1_score, player2_score, winner_id):
        self.player1_score = player1_score
        self.player2_score = player2_score
        self.winner_id = winner_id

    def to_dict(self):
        return {
            'player1Score': self.player1_score,
            'player2Score': self.player2_score,
            'winnerId': self.winner_id,
        }

    @classmethod
    def from_dict(cls, data):
        return cls(data['player1Score'], data['player2Score'], data['winnerId'])

    def __repr__(self):
        return f"MatchResult({self.player1_score}-{self.player2_score}, winner={self.winner_id})"


class Match:
    def __init__(self, id, player1_id=None, player2_id=None, status=STATUS_PENDING,
                 result=None, round=None, group_id=None, next_match_id=None):
        self.id = id
        self.player1_id = player1_id
        self.player2_id = player2_id
        self.status = status
        self.result = result
        self.round = round  # knockout only, 1-based
        self.group_id = group_id  # round-robin within a group stage only
        self.next_match_id = next_match_id

    @property
    def is_completed(self):
        return self.status == STATUS_COMPLETED

    @property
    def is_knockout(self):
        return self.round is not None

    @property
    def winner_id(self):
        return self.result.winner_id if self.result else None

    def to_dict(self):
        """Serialise using the record keys the calling application stores."""
        data = {
            'id': self.id,
            'player1Id': self.player1_id,
            'player2Id': self.player2_id,
            'status': self.status,
        }
        if self.result is not None:
            data['result'] = self.result.to_dict()
        if self.round is not None:
            data['round'] = self.round
        if self.group_id is not None:
            data['groupId'] = self.group_id
        if self.next_match_id is not None:
            data['nextMatchId'] = self.next_match_id
        return data

    @classmethod
    def from_dict(cls, data):
        result = data.get('result')
        return cls(
            id=data['id'],
            player1_id=data.get('player1Id'),
            player2_id=data.get('player2Id'),
            status=data.get('status', STATUS_PENDING),
            result=MatchResult.from_dict(result) if result else None,
            round=data.get('round'),
            group_id=data.get('groupId'),
            next_match_id=data.get('nextMatchId'),
        )

    def __repr__(self):
        return (f"Match(id={self.id}, players=({self.player1_id}, {self.player2_id}), "
                f"status={self.status}, round={self.round}, group={self.group_id})")


class TournamentSettings:
    def __init__(self, seeding=SEEDING_RANKED, num_groups=1, players_advancing=1):
        if seeding not in SEEDING_MODES:
            raise ValueError(f"Unknown seeding mode '{seeding}', expected one of {', '.join(SEEDING_MODES)}")
        if num_groups is None:
            num_groups = 1
        if players_advancing is None:
            players_advancing = 1
        if int(num_groups) < 1:
            raise ValueError(f"num_groups must be at least 1, got {num_groups}")
        if int(players_advancing) < 1:
            raise ValueError(f"players_advancing must be at least 1, got {players_advancing}")
        self.seeding = seeding
        self.num_groups = int(num_groups)
        self.players_advancing = int(players_advancing)

    def with_seeding(self, seeding):
        return TournamentSettings(seeding, self.num_groups, self.players_advancing)

    @classmethod
    def from_dict(cls, data):
        data = data or {}
        return cls(
            seeding=data.get('seeding') or SEEDING_RANKED,
            num_groups=data.get('num_groups', data.get('numGroups')),
            players_advancing=data.get('players_advancing', data.get('playersAdvancing')),
        )

    def to_dict(self):
        return {
            'seeding': self.seeding,
            'num_groups': self.num_groups,
            'players_advancing': self.players_advancing,
        }

    def __repr__(self):
        return (f"TournamentSettings(seeding={self.seeding}, num_groups={self.num_groups}, "
                f"players_advancing={self.players_advancing})")
