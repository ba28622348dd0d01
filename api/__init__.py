"""Capa de servicios y utilidades X.509 sobre el paquete `blacklist`."""
