from typing import Any, Dict, List, Optional


def is_valid_id(value) -> bool:
    """Room and entity ids are non-empty strings or numbers."""
    if isinstance(value, bool):
        return False
    if isinstance(value, str):
        return value != ''
    return isinstance(value, (int, float))


class Entity:
    """A positioned, rotatable object placed on the table."""

    def __init__(self, ID: str, x: float = 0, y: float = 0, rotation: float = 0):
        self.ID = ID
        self.x = x
        self.y = y
        self.rotation = rotation

    @classmethod
    def from_dict(cls, descriptor: Dict[str, Any]) -> Optional['Entity']:
        """Build an entity from its wire descriptor, or None if it has no ID."""
        if not isinstance(descriptor, dict) or not is_valid_id(descriptor.get('ID')):
            return None
        return cls(**cls._init_args(descriptor))

    @staticmethod
    def _init_args(descriptor):
        return {
            'ID': descriptor['ID'],
            'x': descriptor.get('x', 0),
            'y': descriptor.get('y', 0),
            'rotation': descriptor.get('rotation', 0),
        }

    def move(self, x, y):
        self.x = x
        self.y = y

    def rotate(self, rotation):
        self.rotation = rotation

    def label(self) -> str:
        return str(self.ID)

    def to_dict(self):
        return {
            'ID': self.ID,
            'x': self.x,
            'y': self.y,
            'rotation': self.rotation,
        }


class Card(Entity):
    # card metadata is set once at creation and never replaced
    def __init__(self, ID, x=0, y=0, rotation=0, data=None):
        super(Card, self).__init__(ID, x, y, rotation)
        self.data = data if data is not None else {}

    @staticmethod
    def _init_args(descriptor):
        args = Entity._init_args(descriptor)
        args['data'] = descriptor.get('data')
        return args

    def label(self):
        name = self.data.get('name') if isinstance(self.data, dict) else None
        return f"{name} ({self.ID})" if name else str(self.ID)

    def to_dict(self):
        d = super(Card, self).to_dict()
        d['data'] = self.data
        return d


class CardStack(Entity):
    def __init__(self, ID, x=0, y=0, rotation=0, cards=None):
        super(CardStack, self).__init__(ID, x, y, rotation)
        self.cards: List[Any] = list(cards or [])

    @staticmethod
    def _init_args(descriptor):
        args = Entity._init_args(descriptor)
        args['cards'] = descriptor.get('cards')
        return args

    def replace(self, cards):
        self.cards = list(cards or [])
        return self.cards

    def to_dict(self):
        d = super(CardStack, self).to_dict()
        d['cards'] = list(self.cards)
        return d


class Counter(Entity):
    def __init__(self, ID, x=0, y=0, rotation=0, vals=None):
        super(Counter, self).__init__(ID, x, y, rotation)
        self.vals: List[float] = list(vals or [])

    @staticmethod
    def _init_args(descriptor):
        args = Entity._init_args(descriptor)
        args['vals'] = descriptor.get('vals')
        return args

    def replace(self, vals):
        self.vals = list(vals or [])
        return self.vals

    def to_dict(self):
        d = super(Counter, self).to_dict()
        d['vals'] = list(self.vals)
        return d


class Room:
    """A named table: its members, its host and the entities placed on it.

    Members are kept in join order so host election is deterministic: when
    the host departs, the earliest-joined surviving member takes over.
    """

    def __init__(self, room_id: str, host_id: str):
        self.room_id = room_id
        self.host_id = host_id
        self.players: List[str] = [host_id]
        self.cards: Dict[str, Card] = {}
        self.card_stacks: Dict[str, CardStack] = {}
        self.counters: Dict[str, Counter] = {}

    def has_player(self, player_id: str) -> bool:
        return player_id in self.players

    def add_player(self, player_id: str) -> None:
        if player_id not in self.players:
            self.players.append(player_id)

    def remove_player(self, player_id: str) -> bool:
        """Remove a member. Returns True if the host changed as a result."""
        if player_id not in self.players:
            return False
        self.players.remove(player_id)
        if player_id != self.host_id or not self.players:
            return False
        self.host_id = self.players[0]
        return True

    def is_empty(self) -> bool:
        return len(self.players) == 0

    def describe(self):
        return {'roomID': self.room_id, 'hostID': self.host_id}

    def summary(self):
        d = self.describe()
        d['players'] = list(self.players)
        return d

    def to_dict(self):
        d = self.summary()
        d['cards'] = {cid: c.to_dict() for cid, c in self.cards.items()}
        d['cardStacks'] = {sid: s.to_dict() for sid, s in self.card_stacks.items()}
        d['counters'] = {cid: c.to_dict() for cid, c in self.counters.items()}
        return d

    def __str__(self):
        return (
            f"room={self.room_id} host={self.host_id} players={self.players} "
            f"cards={len(self.cards)} cardStacks={len(self.card_stacks)} counters={len(self.counters)}"
        )
