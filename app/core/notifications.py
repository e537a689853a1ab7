import logging

logger = logging.getLogger(__name__)


def notify_client(client_id: int, message: str) -> bool:
    """Envia uma notificação ao cliente. Por enquanto só registra no log."""
    logger.info(f"Notificação para cliente {client_id}: {message}")
    return True
