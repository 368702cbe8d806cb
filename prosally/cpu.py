"""The Sally CPU: a 6502 variant that fetches, decodes and executes instructions."""

from .alu import Flag, adc, asl, bit, compare, lsr, rol, ror, sbc, set_nz
from .equates import INPT4
from .opcodes import OPCODES, Mode

STACK_BASE = 0x100

RES_VECTOR = 0xFFFC
NMI_VECTOR = 0xFFFA
IRQ_VECTOR = 0xFFFE

RES_CYCLES = 6
INTERRUPT_CYCLES = 7


def _signed(byte):
    return byte - 0x100 if byte & 0x80 else byte


class Sally:
    """CPU registers and instruction execution over a shared ``memory``.

    ``half_cycle`` is set when the last instruction touched a slow chip
    register (BIT on INPT4), so the caller can account for the slower clock.
    """

    def __init__(self, memory):
        self.memory = memory
        self.half_cycle = False
        self._address = 0
        self._cycles = 0
        self._mode = Mode.IMPLIED
        self._operations = {
            "ADC": self._adc, "AND": self._and, "ASL": self._asl, "BCC": self._bcc,
            "BCS": self._bcs, "BEQ": self._beq, "BIT": self._bit, "BMI": self._bmi,
            "BNE": self._bne, "BPL": self._bpl, "BRK": self._brk, "BVC": self._bvc,
            "BVS": self._bvs, "CLC": self._clc, "CLD": self._cld, "CLI": self._cli,
            "CLV": self._clv, "CMP": self._cmp, "CPX": self._cpx, "CPY": self._cpy,
            "DEC": self._dec, "DEX": self._dex, "DEY": self._dey, "EOR": self._eor,
            "INC": self._inc, "INX": self._inx, "INY": self._iny, "JMP": self._jmp,
            "JSR": self._jsr, "LDA": self._lda, "LDX": self._ldx, "LDY": self._ldy,
            "LSR": self._lsr, "NOP": self._nop, "ORA": self._ora, "PHA": self._pha,
            "PHP": self._php, "PLA": self._pla, "PLP": self._plp, "ROL": self._rol,
            "ROR": self._ror, "RTI": self._rti, "RTS": self._rts, "SBC": self._sbc,
            "SEC": self._sec, "SED": self._sed, "SEI": self._sei, "STA": self._sta,
            "STX": self._stx, "STY": self._sty, "TAX": self._tax, "TAY": self._tay,
            "TSX": self._tsx, "TXA": self._txa, "TXS": self._txs, "TYA": self._tya,
        }
        self.reset()

    # -- public interface -------------------------------------------------

    def reset(self):
        """Clear the registers; only the reserved status bit stays set."""
        self.a = 0
        self.x = 0
        self.y = 0
        self.p = int(Flag.R)
        self.s = 0
        self.pc = 0

    def execute_instruction(self):
        """Run the instruction at ``pc`` and return the cycles it took."""
        self.half_cycle = False
        code = self.memory[self.pc]
        self.pc = (self.pc + 1) & 0xFFFF
        opcode = OPCODES[code]
        self._cycles = opcode.cycles
        if not opcode.defined:
            return self._cycles

        self._mode = opcode.mode
        self._address = self._resolve(opcode.mode)
        self._operations[opcode.mnemonic]()

        if opcode.delay == "x":
            self._delay(self.x)
        elif opcode.delay == "y":
            self._delay(self.y)

        if (opcode.mnemonic == "BIT" and opcode.mode is Mode.ZERO_PAGE
                and self._address == INPT4):
            self.half_cycle = True
        return self._cycles

    def execute_res(self):
        """Take the reset vector; return the cycles it took."""
        self.p = int(Flag.I | Flag.R | Flag.Z)
        self.pc = self._vector(RES_VECTOR)
        return RES_CYCLES

    def execute_nmi(self):
        """Take a non-maskable interrupt; return the cycles it took."""
        self._interrupt(NMI_VECTOR)
        return INTERRUPT_CYCLES

    def execute_irq(self):
        """Take an interrupt request unless I is set; return the cycles it took."""
        if not self.p & Flag.I:
            self._interrupt(IRQ_VECTOR)
        return INTERRUPT_CYCLES

    # -- helpers ----------------------------------------------------------

    def _vector(self, address):
        ram = self.memory
        return ram[address] | (ram[address + 1] << 8)

    def _interrupt(self, vector):
        self._push(self.pc >> 8)
        self._push(self.pc & 0xFF)
        self.p &= ~Flag.B & 0xFF
        self._push(self.p)
        self.p |= Flag.I
        self.pc = self._vector(vector)

    def _push(self, data):
        self.memory.write(self.s + STACK_BASE, data)
        self.s = (self.s - 1) & 0xFF

    def _pop(self):
        self.s = (self.s + 1) & 0xFF
        return self.memory[self.s + STACK_BASE]

    def _fetch(self):
        data = self.memory.read(self.pc)
        self.pc = (self.pc + 1) & 0xFFFF
        return data

    def _fetch_word(self):
        low = self._fetch()
        return low | (self._fetch() << 8)

    def _resolve(self, mode):
        read = self.memory.read
        if mode in (Mode.IMPLIED, Mode.ACCUMULATOR):
            return self._address
        if mode is Mode.IMMEDIATE:
            address = self.pc
            self.pc = (self.pc + 1) & 0xFFFF
            return address
        if mode in (Mode.ZERO_PAGE, Mode.RELATIVE):
            return self._fetch()
        if mode is Mode.ZERO_PAGE_X:
            return (self._fetch() + self.x) & 0xFF
        if mode is Mode.ZERO_PAGE_Y:
            return (self._fetch() + self.y) & 0xFF
        if mode is Mode.ABSOLUTE:
            return self._fetch_word()
        if mode is Mode.ABSOLUTE_X:
            return (self._fetch_word() + self.x) & 0xFFFF
        if mode is Mode.ABSOLUTE_Y:
            return (self._fetch_word() + self.y) & 0xFFFF
        if mode is Mode.INDIRECT:
            base = self._fetch_word()
            return read(base) | (read(base + 1) << 8)
        if mode is Mode.INDIRECT_X:
            pointer = (self._fetch() + self.x) & 0xFF
            return read(pointer) | (read(pointer + 1) << 8)
        if mode is Mode.INDIRECT_Y:
            pointer = self._fetch()
            base = read(pointer) | (read(pointer + 1) << 8)
            return (base + self.y) & 0xFFFF
        raise ValueError(f"unknown addressing mode {mode}")

    def _delay(self, delta):
        if ((self._address - delta) & 0xFFFF) >> 8 != self._address >> 8:
            self._cycles += 1

    def _branch(self, condition):
        if not condition:
            return
        old = self.pc
        self.pc = (self.pc + _signed(self._address & 0xFF)) & 0xFFFF
        self._cycles += 2 if (old >> 8) != (self.pc >> 8) else 1

    def _operand(self):
        return self.memory.read(self._address)

    def _modify(self, operation):
        if self._mode is Mode.ACCUMULATOR:
            self.a, self.p = operation(self.a, self.p)
        else:
            value, self.p = operation(self._operand(), self.p)
            self.memory.write(self._address, value)

    # -- operations -------------------------------------------------------

    def _adc(self):
        self.a, self.p = adc(self.a, self._operand(), self.p)

    def _sbc(self):
        self.a, self.p = sbc(self.a, self._operand(), self.p)

    def _and(self):
        self.a &= self._operand()
        self.p = set_nz(self.p, self.a)

    def _ora(self):
        self.a |= self._operand()
        self.p = set_nz(self.p, self.a)

    def _eor(self):
        self.a ^= self._operand()
        self.p = set_nz(self.p, self.a)

    def _asl(self):
        self._modify(asl)

    def _lsr(self):
        self._modify(lsr)

    def _rol(self):
        self._modify(rol)

    def _ror(self):
        self._modify(ror)

    def _bit(self):
        self.p = bit(self.a, self._operand(), self.p)

    def _bcc(self):
        self._branch(not self.p & Flag.C)

    def _bcs(self):
        self._branch(self.p & Flag.C)

    def _beq(self):
        self._branch(self.p & Flag.Z)

    def _bne(self):
        self._branch(not self.p & Flag.Z)

    def _bmi(self):
        self._branch(self.p & Flag.N)

    def _bpl(self):
        self._branch(not self.p & Flag.N)

    def _bvc(self):
        self._branch(not self.p & Flag.V)

    def _bvs(self):
        self._branch(self.p & Flag.V)

    def _brk(self):
        self.pc = (self.pc + 1) & 0xFFFF
        self.p |= Flag.B
        self._push(self.pc >> 8)
        self._push(self.pc & 0xFF)
        self._push(self.p)
        self.p |= Flag.I
        self.pc = self._vector(IRQ_VECTOR)

    def _clc(self):
        self.p &= ~Flag.C & 0xFF

    def _cld(self):
        self.p &= ~Flag.D & 0xFF

    def _cli(self):
        self.p &= ~Flag.I & 0xFF

    def _clv(self):
        self.p &= ~Flag.V & 0xFF

    def _sec(self):
        self.p |= Flag.C

    def _sed(self):
        self.p |= Flag.D

    def _sei(self):
        self.p |= Flag.I

    def _cmp(self):
        self.p = compare(self.a, self._operand(), self.p)

    def _cpx(self):
        self.p = compare(self.x, self._operand(), self.p)

    def _cpy(self):
        self.p = compare(self.y, self._operand(), self.p)

    def _dec(self):
        data = (self._operand() - 1) & 0xFF
        self.memory.write(self._address, data)
        self.p = set_nz(self.p, data)

    def _inc(self):
        data = (self._operand() + 1) & 0xFF
        self.memory.write(self._address, data)
        self.p = set_nz(self.p, data)

    def _dex(self):
        self.x = (self.x - 1) & 0xFF
        self.p = set_nz(self.p, self.x)

    def _dey(self):
        self.y = (self.y - 1) & 0xFF
        self.p = set_nz(self.p, self.y)

    def _inx(self):
        self.x = (self.x + 1) & 0xFF
        self.p = set_nz(self.p, self.x)

    def _iny(self):
        self.y = (self.y + 1) & 0xFF
        self.p = set_nz(self.p, self.y)

    def _jmp(self):
        self.pc = self._address

    def _jsr(self):
        self.pc = (self.pc - 1) & 0xFFFF
        self._push(self.pc >> 8)
        self._push(self.pc & 0xFF)
        self.pc = self._address

    def _rts(self):
        low = self._pop()
        self.pc = ((low | (self._pop() << 8)) + 1) & 0xFFFF

    def _rti(self):
        self.p = self._pop()
        low = self._pop()
        self.pc = low | (self._pop() << 8)

    def _lda(self):
        self.a = self._operand()
        self.p = set_nz(self.p, self.a)

    def _ldx(self):
        self.x = self._operand()
        self.p = set_nz(self.p, self.x)

    def _ldy(self):
        self.y = self._operand()
        self.p = set_nz(self.p, self.y)

    def _nop(self):
        pass

    def _pha(self):
        self._push(self.a)

    def _php(self):
        self._push(self.p)

    def _pla(self):
        self.a = self._pop()
        self.p = set_nz(self.p, self.a)

    def _plp(self):
        self.p = self._pop()

    def _sta(self):
        self.memory.write(self._address, self.a)

    def _stx(self):
        self.memory.write(self._address, self.x)

    def _sty(self):
        self.memory.write(self._address, self.y)

    def _tax(self):
        self.x = self.a
        self.p = set_nz(self.p, self.x)

    def _tay(self):
        self.y = self.a
        self.p = set_nz(self.p, self.y)

    def _tsx(self):
        self.x = self.s
        self.p = set_nz(self.p, self.x)

    def _txa(self):
        self.a = self.x
        self.p = set_nz(self.p, self.a)

    def _txs(self):
        self.s = self.x

    def _tya(self):
        self.a = self.y
        self.p = set_nz(self.p, self.a)