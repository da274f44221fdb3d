"""Email delivery of generated documents.

Responsibilities:
    - Mail transport configuration (sender identity, credentials, SMTP server)
    - MIME assembly with the document attached
    - SMTP send with authentication/connection/send failure classification
    - Startup verification of the transport
"""

from src.delivery.config import MailConfig, get_mail_config
from src.delivery.mailer import EmailDeliveryService, MailSender

__all__ = ["EmailDeliveryService", "MailConfig", "MailSender", "get_mail_config"]
