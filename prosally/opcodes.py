"""Instruction set of the 6502-style CPU: mnemonics, addressing modes and cycle counts."""

import enum
from dataclasses import dataclass


class Mode(enum.Enum):
    """Addressing modes, each reading a fixed number of operand bytes."""

    IMPLIED = "implied"
    ACCUMULATOR = "accumulator"
    IMMEDIATE = "immediate"
    ZERO_PAGE = "zero_page"
    ZERO_PAGE_X = "zero_page_x"
    ZERO_PAGE_Y = "zero_page_y"
    ABSOLUTE = "absolute"
    ABSOLUTE_X = "absolute_x"
    ABSOLUTE_Y = "absolute_y"
    INDIRECT = "indirect"
    INDIRECT_X = "indirect_x"
    INDIRECT_Y = "indirect_y"
    RELATIVE = "relative"

    @property
    def operand_bytes(self):
        """Number of bytes following the opcode byte."""
        return _OPERAND_BYTES[self]


_OPERAND_BYTES = {
    Mode.IMPLIED: 0,
    Mode.ACCUMULATOR: 0,
    Mode.IMMEDIATE: 1,
    Mode.ZERO_PAGE: 1,
    Mode.ZERO_PAGE_X: 1,
    Mode.ZERO_PAGE_Y: 1,
    Mode.INDIRECT_X: 1,
    Mode.INDIRECT_Y: 1,
    Mode.RELATIVE: 1,
    Mode.ABSOLUTE: 2,
    Mode.ABSOLUTE_X: 2,
    Mode.ABSOLUTE_Y: 2,
    Mode.INDIRECT: 2,
}


@dataclass(frozen=True)
class Opcode:
    """One decoded opcode.

    ``delay`` names the index register ("x" or "y") whose addition costs an
    extra cycle when it carries the address into another page, or is None.
    Undefined opcodes have no mnemonic and do nothing but take their cycles.
    """

    code: int
    mnemonic: "str | None"
    mode: Mode
    cycles: int
    delay: "str | None" = None

    @property
    def defined(self):
        """True if the opcode performs an operation."""
        return self.mnemonic is not None

    @property
    def size(self):
        """Length of the instruction in bytes, opcode included."""
        return 1 + self.mode.operand_bytes


_CYCLES = bytes((
    7, 6, 0, 0, 0, 3, 5, 0, 3, 2, 2, 0, 0, 4, 6, 0,
    2, 5, 0, 0, 0, 4, 6, 0, 2, 4, 0, 0, 0, 4, 7, 0,
    6, 6, 0, 0, 3, 3, 5, 0, 4, 2, 2, 0, 4, 4, 6, 0,
    2, 5, 0, 0, 0, 4, 6, 0, 2, 4, 0, 0, 0, 4, 7, 0,
    6, 6, 0, 0, 0, 3, 5, 0, 3, 2, 2, 0, 3, 4, 6, 0,
    2, 5, 0, 0, 0, 4, 6, 0, 2, 4, 0, 0, 0, 4, 7, 0,
    6, 6, 0, 0, 0, 3, 5, 0, 4, 2, 2, 0, 5, 4, 6, 0,
    2, 5, 0, 0, 0, 4, 6, 0, 2, 4, 0, 0, 0, 4, 7, 0,
    0, 6, 0, 0, 3, 3, 3, 0, 2, 0, 2, 0, 4, 4, 4, 0,
    2, 6, 0, 0, 4, 4, 4, 0, 2, 5, 2, 0, 0, 5, 0, 0,
    2, 6, 2, 0, 3, 3, 3, 0, 2, 2, 2, 0, 4, 4, 4, 0,
    2, 5, 0, 0, 4, 4, 4, 0, 2, 4, 2, 0, 4, 4, 4, 0,
    2, 6, 0, 0, 3, 3, 5, 0, 2, 2, 2, 0, 4, 4, 6, 0,
    2, 5, 0, 0, 0, 4, 6, 0, 2, 4, 0, 0, 0, 4, 7, 0,
    2, 6, 0, 0, 3, 3, 5, 0, 2, 2, 2, 0, 4, 4, 6, 0,
    2, 5, 0, 0, 0, 4, 6, 0, 2, 4, 0, 0, 0, 4, 7, 0,
))

_IMP = Mode.IMPLIED
_ACC = Mode.ACCUMULATOR
_IMM = Mode.IMMEDIATE
_ZP = Mode.ZERO_PAGE
_ZPX = Mode.ZERO_PAGE_X
_ZPY = Mode.ZERO_PAGE_Y
_ABS = Mode.ABSOLUTE
_ABX = Mode.ABSOLUTE_X
_ABY = Mode.ABSOLUTE_Y
_IND = Mode.INDIRECT
_INX = Mode.INDIRECT_X
_INY = Mode.INDIRECT_Y
_REL = Mode.RELATIVE

# opcode -> (mnemonic, mode, page-crossing delay register)
_DEFINED = {
    0x00: ("BRK", _IMP, None),
    0x01: ("ORA", _INX, None),
    0x05: ("ORA", _ZP, None),
    0x06: ("ASL", _ZP, None),
    0x08: ("PHP", _IMP, None),
    0x09: ("ORA", _IMM, None),
    0x0A: ("ASL", _ACC, None),
    0x0D: ("ORA", _ABS, None),
    0x0E: ("ASL", _ABS, None),
    0x10: ("BPL", _REL, None),
    0x11: ("ORA", _INY, "y"),
    0x15: ("ORA", _ZPX, None),
    0x16: ("ASL", _ZPX, None),
    0x18: ("CLC", _IMP, None),
    0x19: ("ORA", _ABY, "y"),
    0x1D: ("ORA", _ABX, "x"),
    0x1E: ("ASL", _ABX, None),
    0x20: ("JSR", _ABS, None),
    0x21: ("AND", _INX, None),
    0x24: ("BIT", _ZP, None),
    0x25: ("AND", _ZP, None),
    0x26: ("ROL", _ZP, None),
    0x28: ("PLP", _IMP, None),
    0x29: ("AND", _IMM, None),
    0x2A: ("ROL", _ACC, None),
    0x2C: ("BIT", _ABS, None),
    0x2D: ("AND", _ABS, None),
    0x2E: ("ROL", _ABS, None),
    0x30: ("BMI", _REL, None),
    0x31: ("AND", _INY, "y"),
    0x35: ("AND", _ZPX, None),
    0x36: ("ROL", _ZPX, None),
    0x38: ("SEC", _IMP, None),
    0x39: ("AND", _ABY, "y"),
    0x3D: ("AND", _ABX, "x"),
    0x3E: ("ROL", _ABX, None),
    0x40: ("RTI", _IMP, None),
    0x41: ("EOR", _INX, None),
    0x45: ("EOR", _ZP, None),
    0x46: ("LSR", _ZP, None),
    0x48: ("PHA", _IMP, None),
    0x49: ("EOR", _IMM, None),
    0x4A: ("LSR", _ACC, None),
    0x4C: ("JMP", _ABS, None),
    0x4D: ("EOR", _ABS, None),
    0x4E: ("LSR", _ABS, None),
    0x50: ("BVC", _REL, None),
    0x51: ("EOR", _INY, "y"),
    0x55: ("EOR", _ZPX, None),
    0x56: ("LSR", _ZPX, None),
    0x58: ("CLI", _IMP, None),
    0x59: ("EOR", _ABY, "y"),
    0x5D: ("EOR", _ABX, "x"),
    0x5E: ("LSR", _ABX, None),
    0x60: ("RTS", _IMP, None),
    0x61: ("ADC", _INX, None),
    0x65: ("ADC", _ZP, None),
    0x66: ("ROR", _ZP, None),
    0x68: ("PLA", _IMP, None),
    0x69: ("ADC", _IMM, None),
    0x6A: ("ROR", _ACC, None),
    0x6C: ("JMP", _IND, None),
    0x6D: ("ADC", _ABS, None),
    0x6E: ("ROR", _ABS, None),
    0x70: ("BVS", _REL, None),
    0x71: ("ADC", _INY, "y"),
    0x75: ("ADC", _ZPX, None),
    0x76: ("ROR", _ZPX, None),
    0x78: ("SEI", _IMP, None),
    0x79: ("ADC", _ABY, "y"),
    0x7D: ("ADC", _ABX, "x"),
    0x7E: ("ROR", _ABX, None),
    0x81: ("STA", _INX, None),
    0x84: ("STY", _ZP, None),
    0x85: ("STA", _ZP, None),
    0x86: ("STX", _ZP, None),
    0x88: ("DEY", _IMP, None),
    0x8A: ("TXA", _IMP, None),
    0x8C: ("STY", _ABS, None),
    0x8D: ("STA", _ABS, None),
    0x8E: ("STX", _ABS, None),
    0x90: ("BCC", _REL, None),
    0x91: ("STA", _INY, None),
    0x94: ("STY", _ZPX, None),
    0x95: ("STA", _ZPX, None),
    0x96: ("STX", _ZPY, None),
    0x98: ("TYA", _IMP, None),
    0x99: ("STA", _ABY, None),
    0x9A: ("TXS", _IMP, None),
    0x9D: ("STA", _ABX, None),
    0xA0: ("LDY", _IMM, None),
    0xA1: ("LDA", _INX, None),
    0xA2: ("LDX", _IMM, None),
    0xA4: ("LDY", _ZP, None),
    0xA5: ("LDA", _ZP, None),
    0xA6: ("LDX", _ZP, None),
    0xA8: ("TAY", _IMP, None),
    0xA9: ("LDA", _IMM, None),
    0xAA: ("TAX", _IMP, None),
    0xAC: ("LDY", _ABS, None),
    0xAD: ("LDA", _ABS, None),
    0xAE: ("LDX", _ABS, None),
    0xB0: ("BCS", _REL, None),
    0xB1: ("LDA", _INY, "y"),
    0xB4: ("LDY", _ZPX, None),
    0xB5: ("LDA", _ZPX, None),
    0xB6: ("LDX", _ZPY, None),
    0xB8: ("CLV", _IMP, None),
    0xB9: ("LDA", _ABY, "y"),
    0xBA: ("TSX", _IMP, None),
    0xBC: ("LDY", _ABX, "x"),
    0xBD: ("LDA", _ABX, "x"),
    0xBE: ("LDX", _ABY, "y"),
    0xC0: ("CPY", _IMM, None),
    0xC1: ("CMP", _INX, None),
    0xC4: ("CPY", _ZP, None),
    0xC5: ("CMP", _ZP, None),
    0xC6: ("DEC", _ZP, None),
    0xC8: ("INY", _IMP, None),
    0xC9: ("CMP", _IMM, None),
    0xCA: ("DEX", _IMP, None),
    0xCC: ("CPY", _ABS, None),
    0xCD: ("CMP", _ABS, None),
    0xCE: ("DEC", _ABS, None),
    0xD0: ("BNE", _REL, None),
    0xD1: ("CMP", _INY, "y"),
    0xD5: ("CMP", _ZPX, None),
    0xD6: ("DEC", _ZPX, None),
    0xD8: ("CLD", _IMP, None),
    0xD9: ("CMP", _ABY, "y"),
    0xDD: ("CMP", _ABX, "x"),
    0xDE: ("DEC", _ABX, None),
    0xE0: ("CPX", _IMM, None),
    0xE1: ("SBC", _INX, None),
    0xE4: ("CPX", _ZP, None),
    0xE5: ("SBC", _ZP, None),
    0xE6: ("INC", _ZP, None),
    0xE8: ("INX", _IMP, None),
    0xE9: ("SBC", _IMM, None),
    0xEA: ("NOP", _IMP, None),
    0xEC: ("CPX", _ABS, None),
    0xED: ("SBC", _ABS, None),
    0xEE: ("INC", _ABS, None),
    0xF0: ("BEQ", _REL, None),
    0xF1: ("SBC", _INY, "y"),
    0xF5: ("SBC", _ZPX, None),
    0xF6: ("INC", _ZPX, None),
    0xF8: ("SED", _IMP, None),
    0xF9: ("SBC", _ABY, "y"),
    0xFD: ("SBC", _ABX, "x"),
    0xFE: ("INC", _ABX, None),
}


def _build_table():
    table = []
    for code, cycles in enumerate(_CYCLES):
        mnemonic, mode, delay = _DEFINED.get(code, (None, Mode.IMPLIED, None))
        table.append(Opcode(code, mnemonic, mode, cycles, delay))
    return tuple(table)


OPCODES = _build_table()


def decode(opcode):
    """Return the :class:`Opcode` for the byte ``opcode``."""
    if not isinstance(opcode, int) or isinstance(opcode, bool):
        raise TypeError(f"opcode must be an int, not {type(opcode).__name__}")
    if not 0 <= opcode <= 0xFF:
        raise ValueError(f"opcode {opcode} is not a byte")
    return OPCODES[opcode]