"""
Autenticación de notificaciones entrantes.
"""
from app.infrastructure.security.webhook_authenticator import WebhookAuthenticator, compute_signature

__all__ = ["WebhookAuthenticator", "compute_signature"]
