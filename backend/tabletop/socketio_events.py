from flask import current_app, request

from tabletop import socketio
from tabletop.events import Events


def _session():
    return current_app.extensions['tabletop']


def _get_sid() -> str:
    # type: ignore: request.sid exists in Socket.IO context
    return request.sid  # type: ignore


def handle_connect(auth=None):
    current_app.logger.info(f"[connect] player={_get_sid()}")


def handle_disconnect(*args):
    current_app.logger.info(f"[disconnect] player={_get_sid()}")
    _session().leave(_get_sid())


def handle_join(room_id=None):
    _session().join(_get_sid(), room_id)


# ---- cards ----

def handle_card_created(descriptor=None):
    _session().create_card(_get_sid(), descriptor)


def handle_card_deleted(card_id=None):
    _session().delete_card(_get_sid(), card_id)


def handle_card_moved(card_id=None, x=None, y=None):
    _session().move_card(_get_sid(), card_id, x, y)


def handle_card_rotated(card_id=None, rotation=None):
    _session().rotate_card(_get_sid(), card_id, rotation)


# ---- counters ----

def handle_counter_created(descriptor=None):
    _session().create_counter(_get_sid(), descriptor)


def handle_counter_deleted(counter_id=None):
    _session().delete_counter(_get_sid(), counter_id)


def handle_counter_vals_changed(counter_id=None, vals=None):
    _session().change_counter_vals(_get_sid(), counter_id, vals)


def handle_counter_moved(counter_id=None, x=None, y=None):
    _session().move_counter(_get_sid(), counter_id, x, y)


def handle_counter_rotated(counter_id=None, rotation=None):
    _session().rotate_counter(_get_sid(), counter_id, rotation)


# ---- card stacks ----

def handle_cardstack_created(descriptor=None):
    _session().create_card_stack(_get_sid(), descriptor)


def handle_cardstack_deleted(stack_id=None):
    _session().delete_card_stack(_get_sid(), stack_id)


def handle_cardstack_shuffled(stack_id=None, cards=None):
    _session().shuffle_card_stack(_get_sid(), stack_id, cards)


def handle_cardstack_modified(stack_id=None, cards=None):
    _session().modify_card_stack(_get_sid(), stack_id, cards)


def handle_cardstack_moved(stack_id=None, x=None, y=None):
    _session().move_card_stack(_get_sid(), stack_id, x, y)


def handle_cardstack_rotated(stack_id=None, rotation=None):
    _session().rotate_card_stack(_get_sid(), stack_id, rotation)


HANDLERS = {
    Events.CONNECT: handle_connect,
    Events.DISCONNECT: handle_disconnect,
    Events.PLAYER_JOINED: handle_join,
    Events.CARD_CREATED: handle_card_created,
    Events.CARD_DELETED: handle_card_deleted,
    Events.CARD_MOVED: handle_card_moved,
    Events.CARD_ROTATED: handle_card_rotated,
    Events.COUNTER_CREATED: handle_counter_created,
    Events.COUNTER_DELETED: handle_counter_deleted,
    Events.COUNTER_VALS_CHANGED: handle_counter_vals_changed,
    Events.COUNTER_MOVED: handle_counter_moved,
    Events.COUNTER_ROTATED: handle_counter_rotated,
    Events.CARDSTACK_CREATED: handle_cardstack_created,
    Events.CARDSTACK_DELETED: handle_cardstack_deleted,
    Events.CARDSTACK_SHUFFLED: handle_cardstack_shuffled,
    Events.CARDSTACK_MODIFIED: handle_cardstack_modified,
    Events.CARDSTACK_MOVED: handle_cardstack_moved,
    Events.CARDSTACK_ROTATED: handle_cardstack_rotated,
}


def register_socketio_handlers(namespace: str = '/') -> None:
    """Register Socket.IO event handlers on the given namespace.

    Broadcasts go out on the same namespace (see SocketIOTransport), so the
    two must be configured together.
    """
    for event, handler in HANDLERS.items():
        socketio.on_event(event, handler, namespace=namespace)
