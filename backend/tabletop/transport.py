"""Socket.IO transport used by the table session to reach clients."""

from flask_socketio import join_room, leave_room, close_room

from tabletop import socketio


class SocketIOTransport:
    """Maps session broadcasts onto Socket.IO rooms.

    Every table room is a Socket.IO room of the same name, so a broadcast to
    a room reaches every connection currently bound to it, sender included.
    """

    def __init__(self, namespace='/'):
        self.namespace = namespace

    def emit(self, event, args, room):
        # a tuple payload is delivered as positional arguments
        socketio.emit(event, tuple(args), to=room, namespace=self.namespace)

    def enter(self, player_id, room):
        join_room(room, sid=player_id, namespace=self.namespace)

    def exit(self, player_id, room):
        leave_room(room, sid=player_id, namespace=self.namespace)

    def close(self, room):
        """Force-disconnect every connection still bound to ``room``, then drop it."""
        stragglers = [sid for sid, _ in socketio.server.manager.get_participants(self.namespace, room)]
        for sid in stragglers:
            socketio.server.disconnect(sid, namespace=self.namespace)
        close_room(room, namespace=self.namespace)
