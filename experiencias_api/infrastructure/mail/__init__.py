"""Envío de correos de notificación."""
