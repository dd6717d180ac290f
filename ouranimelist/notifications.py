"""
Notification sink for events raised outside of a request, such as the anomaly
monitor's attack_detected. Delivery is fire-and-forget: subscribers and the
Socket.IO emitter are called in order, failures are logged and dropped.
"""
import logging
import threading

from ouranimelist.constants import ATTACK_DETECTED_EVENT

logger = logging.getLogger('main')


class NotificationSink:
    """One-way event channel from background jobs to the presentation layer"""

    def __init__(self, emitter=None):
        self._emitter = emitter
        self._subscribers = []
        self._lock = threading.Lock()

    def attach_emitter(self, emitter):
        """Attach a callable with the SocketIO.emit(event, data, **kwargs) signature"""
        self._emitter = emitter

    def subscribe(self, callback):
        """Register callback(event, payload). Returns a function that unsubscribes it."""
        with self._lock:
            self._subscribers.append(callback)

        def unsubscribe():
            with self._lock:
                if callback in self._subscribers:
                    self._subscribers.remove(callback)

        return unsubscribe

    def publish(self, event, payload):
        with self._lock:
            subscribers = list(self._subscribers)

        for callback in subscribers:
            try:
                callback(event, payload)
            except Exception as e:
                logger.error(f"Subscriber {getattr(callback, '__name__', callback)} failed for '{event}': {e}", exc_info=True)

        if self._emitter is not None:
            try:
                self._emitter(event, payload)
                logger.debug(f"Emitted '{event}' to Socket.IO clients")
            except Exception as e:
                logger.error(f"Emit failed for '{event}': {e}", exc_info=True)

    def notify(self, account_name):
        """Signal that the anomaly monitor flagged account_name"""
        logger.warning(f"Attack detected for account '{account_name}'")
        self.publish(ATTACK_DETECTED_EVENT, account_name)


def get_socketio_emitter(socketio):
    """Returns an emitter that broadcasts on the default namespace"""

    def broadcast_emit(event, data, *args, **kwargs):
        # Background threads have no request context, so always broadcast explicitly
        kwargs.setdefault('namespace', '/')
        socketio.emit(event, data, *args, **kwargs)

    return broadcast_emit
