from journey.services.mailer import Mailer
from journey.services.notifications import NotificationDispatcher

_mailer = Mailer()
_dispatcher = NotificationDispatcher()


def get_mailer() -> Mailer:
    """FastAPI dependency for the confirmation-email gateway."""
    return _mailer


def get_dispatcher() -> NotificationDispatcher:
    """FastAPI dependency for the detached email dispatcher."""
    return _dispatcher
