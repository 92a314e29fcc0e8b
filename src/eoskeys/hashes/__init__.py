"""Hash functions: RIPEMD-160."""

from .ripemd import ripemd160

__all__: tuple[str, ...] = ("ripemd160",)
