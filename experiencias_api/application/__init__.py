"""Capa de aplicación: servicios del motor de workflow y casos de uso."""
