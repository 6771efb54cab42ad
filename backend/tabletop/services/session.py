import functools
from typing import Any, Dict, List, NamedTuple, Optional, Tuple

from tabletop.events import Events
from tabletop.models import Card, CardStack, Counter, Entity, Room, is_valid_id


class EntityKind(NamedTuple):
    name: str
    factory: type
    attr: str  # Room attribute holding this kind's entity map
    created: str
    deleted: str
    moved: str
    rotated: str


CARD = EntityKind('card', Card, 'cards',
                  Events.CARD_CREATED, Events.CARD_DELETED, Events.CARD_MOVED, Events.CARD_ROTATED)
COUNTER = EntityKind('counter', Counter, 'counters',
                     Events.COUNTER_CREATED, Events.COUNTER_DELETED, Events.COUNTER_MOVED, Events.COUNTER_ROTATED)
CARD_STACK = EntityKind('cardStack', CardStack, 'card_stacks',
                        Events.CARDSTACK_CREATED, Events.CARDSTACK_DELETED, Events.CARDSTACK_MOVED,
                        Events.CARDSTACK_ROTATED)


def _serialized(fn):
    @functools.wraps(fn)
    def wrapper(self, *args, **kwargs):
        with self.lobby.lock:
            return fn(self, *args, **kwargs)
    return wrapper


class TableSession:
    """Applies player intents to room state and fans the result out.

    Every intent either mutates state and broadcasts exactly once to the
    room, or is dropped without a broadcast. Nothing is reported back to the
    sender: unknown rooms or entities, duplicate creations and intents from
    players outside any room are logged and ignored.

    ``transport`` must provide ``emit(event, args, room)``,
    ``enter(player_id, room)``, ``exit(player_id, room)`` and ``close(room)``.
    """

    def __init__(self, lobby, transport, logger):
        self.lobby = lobby
        self.transport = transport
        self.logger = logger

    # ---- membership ----

    @_serialized
    def join(self, player_id: str, room_id: str) -> None:
        self.logger.info(f"[join] player={player_id} room={room_id}")
        if not is_valid_id(room_id):
            self.logger.warning(f"[join-skip] player={player_id} sent an invalid room id: {room_id!r}")
            return

        previous = self.lobby.room_id_of(player_id)
        if previous == room_id and self.lobby.get_room(room_id) is not None:
            self.logger.info(f"[join-skip] player={player_id} already in room {room_id}")
            return
        if previous is not None:
            self.lobby.unassign(player_id)
            self._vacate(player_id, previous)

        self.lobby.assign(player_id, room_id)
        self.transport.enter(player_id, room_id)

        room = self.lobby.get_room(room_id)
        if room is None:
            room = self.lobby.open_room(room_id, player_id)
            self.transport.emit(Events.ROOM_CREATED, (room.describe(),), room_id)
            self.logger.info(f"[room-created] room={room_id} host={player_id}")
        else:
            room.add_player(player_id)
            self.transport.emit(Events.PLAYER_JOINED, (player_id,), room_id)
            self.logger.info(f"[player-joined] room={room_id} player={player_id}")
        self.logger.info(f"[state] {room}")

    @_serialized
    def leave(self, player_id: str) -> None:
        room_id = self.lobby.unassign(player_id)
        if room_id is None:
            self.logger.info(f"[leave-skip] player={player_id} was not in a room")
            return
        self._vacate(player_id, room_id)

    def _vacate(self, player_id: str, room_id: str) -> None:
        self.transport.exit(player_id, room_id)
        room = self.lobby.get_room(room_id)
        if room is None:
            return
        host_changed = room.remove_player(player_id)
        self.logger.info(f"[leave] player={player_id} removed from room {room_id}")

        if room.is_empty():
            self.lobby.close_room(room_id)
            self.transport.close(room_id)
            self.logger.info(f"[room-closed] room={room_id} is empty")
            return
        if host_changed:
            self.transport.emit(Events.PLAYER_LEFT, (player_id,), room_id)
            self.logger.info(f"[host-migrated] room={room_id} old={player_id} new={room.host_id}")
            self.logger.info(f"[state] {room}")

    # ---- shared entity operations ----

    def _room_for(self, player_id: str, event: str) -> Optional[Room]:
        room = self.lobby.room_of(player_id)
        if room is None:
            self.logger.warning(f"[{event}-skip] player={player_id} is not in a room")
        return room

    def _lookup(self, kind: EntityKind, player_id: str, entity_id, event: str) -> Tuple[Optional[Room], Optional[Entity]]:
        room = self._room_for(player_id, event)
        if room is None:
            return None, None
        if not is_valid_id(entity_id):
            self.logger.warning(f"[{event}-skip] room={room.room_id} invalid {kind.name} id: {entity_id!r}")
            return room, None
        entity = getattr(room, kind.attr).get(entity_id)
        if entity is None:
            self.logger.info(f"[{event}-skip] room={room.room_id} {kind.name} {entity_id} does not exist")
            return room, None
        return room, entity

    def _create(self, kind: EntityKind, player_id: str, descriptor: Dict[str, Any]) -> None:
        room = self._room_for(player_id, kind.created)
        if room is None:
            return
        entity = kind.factory.from_dict(descriptor)
        if entity is None:
            self.logger.warning(f"[{kind.created}-skip] room={room.room_id} malformed {kind.name}: {descriptor!r}")
            return
        entities = getattr(room, kind.attr)
        existing = entities.get(entity.ID)
        if existing is not None:
            self.logger.info(f"[{kind.created}-skip] room={room.room_id} {kind.name} {existing.label()} already exists")
            return
        entities[entity.ID] = entity
        self.transport.emit(kind.created, (descriptor,), room.room_id)
        self.logger.info(f"[{kind.created}] room={room.room_id} {kind.name} {entity.label()}")

    def _delete(self, kind: EntityKind, player_id: str, entity_id) -> None:
        room, entity = self._lookup(kind, player_id, entity_id, kind.deleted)
        if entity is None:
            return
        del getattr(room, kind.attr)[entity_id]
        self.transport.emit(kind.deleted, (entity_id,), room.room_id)
        self.logger.info(f"[{kind.deleted}] room={room.room_id} {kind.name} {entity.label()}")

    def _move(self, kind: EntityKind, player_id: str, entity_id, x, y) -> None:
        room, entity = self._lookup(kind, player_id, entity_id, kind.moved)
        if entity is None:
            return
        old = (entity.x, entity.y)
        entity.move(x, y)
        self.transport.emit(kind.moved, (entity_id, x, y), room.room_id)
        self.logger.info(f"[{kind.moved}] room={room.room_id} {kind.name} {entity.label()} {list(old)} -> {[x, y]}")

    def _rotate(self, kind: EntityKind, player_id: str, entity_id, rotation) -> None:
        room, entity = self._lookup(kind, player_id, entity_id, kind.rotated)
        if entity is None:
            return
        old = entity.rotation
        entity.rotate(rotation)
        self.transport.emit(kind.rotated, (entity_id, rotation), room.room_id)
        self.logger.info(f"[{kind.rotated}] room={room.room_id} {kind.name} {entity.label()} {old} -> {rotation}")

    def _replace(self, kind: EntityKind, player_id: str, entity_id, payload: List[Any], event: str, echo: bool) -> None:
        room, entity = self._lookup(kind, player_id, entity_id, event)
        if entity is None:
            return
        stored = entity.replace(payload)
        # card stack broadcasts carry no arguments; clients re-read the stack
        args = (entity_id, list(stored)) if echo else ()
        self.transport.emit(event, args, room.room_id)
        self.logger.info(f"[{event}] room={room.room_id} {kind.name} {entity.label()}")

    # ---- cards ----

    @_serialized
    def create_card(self, player_id, descriptor):
        self._create(CARD, player_id, descriptor)

    @_serialized
    def delete_card(self, player_id, card_id):
        self._delete(CARD, player_id, card_id)

    @_serialized
    def move_card(self, player_id, card_id, x, y):
        self._move(CARD, player_id, card_id, x, y)

    @_serialized
    def rotate_card(self, player_id, card_id, rotation):
        self._rotate(CARD, player_id, card_id, rotation)

    # ---- counters ----

    @_serialized
    def create_counter(self, player_id, descriptor):
        self._create(COUNTER, player_id, descriptor)

    @_serialized
    def delete_counter(self, player_id, counter_id):
        self._delete(COUNTER, player_id, counter_id)

    @_serialized
    def change_counter_vals(self, player_id, counter_id, vals):
        self._replace(COUNTER, player_id, counter_id, vals, Events.COUNTER_VALS_CHANGED, echo=True)

    @_serialized
    def move_counter(self, player_id, counter_id, x, y):
        self._move(COUNTER, player_id, counter_id, x, y)

    @_serialized
    def rotate_counter(self, player_id, counter_id, rotation):
        self._rotate(COUNTER, player_id, counter_id, rotation)

    # ---- card stacks ----

    @_serialized
    def create_card_stack(self, player_id, descriptor):
        self._create(CARD_STACK, player_id, descriptor)

    @_serialized
    def delete_card_stack(self, player_id, stack_id):
        self._delete(CARD_STACK, player_id, stack_id)

    @_serialized
    def shuffle_card_stack(self, player_id, stack_id, cards):
        self._replace(CARD_STACK, player_id, stack_id, cards, Events.CARDSTACK_SHUFFLED, echo=False)

    @_serialized
    def modify_card_stack(self, player_id, stack_id, cards):
        self._replace(CARD_STACK, player_id, stack_id, cards, Events.CARDSTACK_MODIFIED, echo=False)

    @_serialized
    def move_card_stack(self, player_id, stack_id, x, y):
        self._move(CARD_STACK, player_id, stack_id, x, y)

    @_serialized
    def rotate_card_stack(self, player_id, stack_id, rotation):
        self._rotate(CARD_STACK, player_id, stack_id, rotation)
