"""Assembler and emulator for the Willow88 8-bit fantasy computer."""

__version__ = "0.1.0"
__all__ = ["isa", "assembler", "machine"]