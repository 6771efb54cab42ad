"""Socket.IO event names.

Inbound intents and outbound broadcasts share the same names; the join
intent arrives on ``player-joined`` and is echoed back on the same name.
"""


class Events:
    CONNECT = 'connect'
    DISCONNECT = 'disconnect'

    # Room membership
    PLAYER_JOINED = 'player-joined'
    PLAYER_LEFT = 'player-left'
    ROOM_CREATED = 'room-created'

    # Cards
    CARD_CREATED = 'card-created'
    CARD_DELETED = 'card-deleted'
    CARD_MOVED = 'card-moved'
    CARD_ROTATED = 'card-rotated'

    # Counters
    COUNTER_CREATED = 'counter-created'
    COUNTER_DELETED = 'counter-deleted'
    COUNTER_VALS_CHANGED = 'counter-vals-changed'
    COUNTER_MOVED = 'counter-moved'
    COUNTER_ROTATED = 'counter-rotated'

    # Card stacks
    CARDSTACK_CREATED = 'cardstack-created'
    CARDSTACK_DELETED = 'cardstack-deleted'
    CARDSTACK_SHUFFLED = 'cardstack-shuffled'
    CARDSTACK_MODIFIED = 'cardstack-modified'
    CARDSTACK_MOVED = 'cardstack-moved'
    CARDSTACK_ROTATED = 'cardstack-rotated'
