"""Personal expense tracking backend: login plus per-user expense CRUD."""

__version__ = "1.0.0"
