"""Core: configuración, errores y dominio (sin I/O)."""
