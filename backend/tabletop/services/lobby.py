import threading
from typing import Dict, Optional

from tabletop.models import Room


class Lobby:
    """Process-wide owner of the room registry and the player directory.

    ``rooms`` maps room id -> Room and ``players`` maps player id -> room id.
    Both are only touched while holding ``lock``, so intents are applied one
    at a time even when the Socket.IO server dispatches handlers on threads.
    """

    def __init__(self):
        self.lock = threading.RLock()
        self.rooms: Dict[str, Room] = {}
        self.players: Dict[str, str] = {}

    def reset(self) -> None:
        with self.lock:
            self.rooms.clear()
            self.players.clear()

    def get_room(self, room_id: str) -> Optional[Room]:
        return self.rooms.get(room_id)

    def room_id_of(self, player_id: str) -> Optional[str]:
        return self.players.get(player_id)

    def room_of(self, player_id: str) -> Optional[Room]:
        room_id = self.players.get(player_id)
        if room_id is None:
            return None
        return self.rooms.get(room_id)

    def open_room(self, room_id: str, host_id: str) -> Room:
        room = Room(room_id, host_id)
        self.rooms[room_id] = room
        return room

    def close_room(self, room_id: str) -> Optional[Room]:
        return self.rooms.pop(room_id, None)

    def assign(self, player_id: str, room_id: str) -> None:
        self.players[player_id] = room_id

    def unassign(self, player_id: str) -> Optional[str]:
        return self.players.pop(player_id, None)

    def summaries(self):
        with self.lock:
            return [room.summary() for room in self.rooms.values()]

    def snapshot(self, room_id: str):
        with self.lock:
            room = self.rooms.get(room_id)
            return room.to_dict() if room else None
