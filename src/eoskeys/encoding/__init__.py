"""Text encodings: Base58."""

from .b58 import b58decode, b58encode

__all__: tuple[str, ...] = ("b58decode", "b58encode")
