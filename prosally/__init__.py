"""Processor, shared memory, RIOT and TIA sound chips of a 7800-class console."""

__version__ = "0.1.0"
__all__ = ["alu", "bus", "cpu", "equates", "opcodes", "riot", "sound", "tia"]