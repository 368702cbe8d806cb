import pytest

from prosally.alu import Flag, adc
from prosally.bus import Memory
from prosally.cpu import Sally
from prosally.equates import INPT4
from prosally.opcodes import decode

START = 0x8000


def make_cpu(program, start=START):
    memory = Memory()
    memory.load(start, bytes(program))
    cpu = Sally(memory)
    cpu.pc = start
    return cpu


def test_reset_state():
    cpu = make_cpu([])
    cpu.a = cpu.x = cpu.y = 5
    cpu.reset()
    assert (cpu.a, cpu.x, cpu.y, cpu.s, cpu.pc) == (0, 0, 0, 0, 0)
    assert cpu.p == Flag.R


def test_execute_res_reads_vector():
    memory = Memory()
    memory[0xFFFC] = 0x34
    memory[0xFFFD] = 0x12
    cpu = Sally(memory)
    assert cpu.execute_res() == 6
    assert cpu.pc == 0x1234
    assert cpu.p == Flag.I | Flag.R | Flag.Z


def test_lda_immediate():
    cpu = make_cpu([0xA9, 0x42])
    cycles = cpu.execute_instruction()
    assert cpu.a == 0x42
    assert cpu.pc == START + 2
    assert cycles == decode(0xA9).cycles
    assert not cpu.p & Flag.Z


def test_lda_zero_sets_zero_flag():
    cpu = make_cpu([0xA9, 0x00])
    cpu.a = 0x11
    cpu.execute_instruction()
    assert cpu.a == 0
    assert (cpu.p & Flag.Z) == Flag.Z
    assert (cpu.p & Flag.N) == 0


def test_sta_zero_page():
    cpu = make_cpu([0xA9, 0x37, 0x85, 0x10])
    cpu.execute_instruction()
    cpu.execute_instruction()
    assert cpu.memory[0x10] == 0x37


def test_jsr_rts_round_trip():
    cpu = make_cpu([0x20, 0x00, 0x90])
    cpu.memory[0x9000] = 0x60
    stack = cpu.s
    cpu.execute_instruction()
    assert cpu.pc == 0x9000
    assert cpu.s != stack
    cpu.execute_instruction()
    assert cpu.pc == START + 3
    assert cpu.s == stack


def test_pha_pla_round_trip():
    cpu = make_cpu([0x48, 0xA9, 0x00, 0x68])
    cpu.a = 0x99
    cpu.s = 0xFF
    cpu.execute_instruction()
    assert cpu.memory[0x1FF] == 0x99
    cpu.execute_instruction()
    assert cpu.a == 0
    cpu.execute_instruction()
    assert cpu.a == 0x99
    assert cpu.s == 0xFF
    assert cpu.p & Flag.N


def test_branch_taken_same_page():
    cpu = make_cpu([0xD0, 0x04])
    cycles = cpu.execute_instruction()
    assert cpu.pc == START + 2 + 4
    assert cycles == decode(0xD0).cycles + 1


def test_branch_not_taken():
    cpu = make_cpu([0xD0, 0x04])
    cpu.p |= Flag.Z
    cycles = cpu.execute_instruction()
    assert cpu.pc == START + 2
    assert cycles == decode(0xD0).cycles


def test_branch_backwards_to_itself():
    cpu = make_cpu([0xF0, 0xFE])
    cpu.p |= Flag.Z
    cpu.execute_instruction()
    assert cpu.pc == START


def test_branch_crossing_page_costs_two():
    start = 0x80F0
    cpu = make_cpu([0x90, 0x20], start=start)
    cycles = cpu.execute_instruction()
    assert cpu.pc == start + 2 + 0x20
    assert cycles == decode(0x90).cycles + 2


def test_absolute_x_page_cross_delay():
    cpu = make_cpu([0xBD, 0xFF, 0x20, 0xBD, 0x00, 0x20])
    cpu.x = 1
    cpu.memory[0x2100] = 0x55
    crossing = cpu.execute_instruction()
    assert cpu.a == 0x55
    assert crossing == decode(0xBD).cycles + 1
    same_page = cpu.execute_instruction()
    assert same_page == decode(0xBD).cycles


def test_bit_on_inpt4_sets_half_cycle():
    cpu = make_cpu([0x24, INPT4, 0x24, 0x40])
    cpu.execute_instruction()
    assert cpu.half_cycle is True
    cpu.execute_instruction()
    assert cpu.half_cycle is False


def test_undefined_opcode_only_advances_pc():
    cpu = make_cpu([0x02])
    cpu.a = 7
    cycles = cpu.execute_instruction()
    assert cycles == decode(0x02).cycles
    assert cpu.pc == START + 1
    assert cpu.a == 7


def test_nmi_then_rti_restores_state():
    cpu = make_cpu([])
    cpu.memory[0xFFFA] = 0x00
    cpu.memory[0xFFFB] = 0x90
    cpu.memory[0x9000] = 0x40
    cpu.s = 0xFF
    cpu.p = int(Flag.R | Flag.C)
    assert cpu.execute_nmi() == 7
    assert cpu.pc == 0x9000
    assert cpu.p & Flag.I
    cpu.execute_instruction()
    assert cpu.pc == START
    assert cpu.p == Flag.R | Flag.C
    assert cpu.s == 0xFF


def test_irq_ignored_when_masked():
    cpu = make_cpu([])
    cpu.memory[0xFFFE] = 0x00
    cpu.memory[0xFFFF] = 0x90
    cpu.p |= Flag.I
    assert cpu.execute_irq() == 7
    assert cpu.pc == START
    cpu.p &= ~Flag.I
    cpu.execute_irq()
    assert cpu.pc == 0x9000


def test_brk_and_rti_skip_padding_byte():
    cpu = make_cpu([0x00, 0xEA])
    cpu.memory[0xFFFE] = 0x00
    cpu.memory[0xFFFF] = 0x90
    cpu.memory[0x9000] = 0x40
    cpu.s = 0xFF
    cpu.execute_instruction()
    assert cpu.pc == 0x9000
    assert cpu.p & Flag.B
    cpu.execute_instruction()
    assert cpu.pc == START + 2


@pytest.mark.parametrize("a, data, carry", [(0x10, 0x20, 0), (0x7F, 0x01, 1), (0xFF, 0xFF, 1)])
def test_adc_immediate_matches_alu(a, data, carry):
    cpu = make_cpu([0x69, data])
    cpu.a = a
    cpu.p = int(Flag.R) | carry
    expected = adc(a, data, cpu.p)
    cpu.execute_instruction()
    assert (cpu.a, cpu.p) == expected


def test_inc_dec_round_trip():
    cpu = make_cpu([0xE6, 0x30, 0xC6, 0x30])
    cpu.memory[0x30] = 0xFF
    cpu.execute_instruction()
    assert cpu.memory[0x30] == 0
    assert cpu.p & Flag.Z
    cpu.execute_instruction()
    assert cpu.memory[0x30] == 0xFF
    assert cpu.p & Flag.N


def test_jmp_indirect():
    cpu = make_cpu([0x6C, 0x00, 0x30])
    cpu.memory[0x3000] = 0x78
    cpu.memory[0x3001] = 0x56
    cpu.execute_instruction()
    assert cpu.pc == 0x5678


def test_indirect_y_load():
    cpu = make_cpu([0xB1, 0x20])
    cpu.memory[0x20] = 0x00
    cpu.memory[0x21] = 0x40
    cpu.y = 3
    cpu.memory[0x4003] = 0x66
    cpu.execute_instruction()
    assert cpu.a == 0x66


def test_indirect_x_load():
    cpu = make_cpu([0xA1, 0x20])
    cpu.x = 4
    cpu.memory[0x24] = 0x10
    cpu.memory[0x25] = 0x40
    cpu.memory[0x4010] = 0x77
    cpu.execute_instruction()
    assert cpu.a == 0x77


def test_txs_tsx_round_trip_and_flags():
    cpu = make_cpu([0x9A, 0xA2, 0x00, 0xBA])
    cpu.x = 0x80
    p_before = cpu.p
    cpu.execute_instruction()
    assert cpu.s == 0x80
    assert cpu.p == p_before
    cpu.execute_instruction()
    cpu.execute_instruction()
    assert cpu.x == 0x80
    assert cpu.p & Flag.N


def test_asl_accumulator_and_memory_agree():
    cpu = make_cpu([0x0A, 0x06, 0x40])
    cpu.a = 0x81
    cpu.memory[0x40] = 0x81
    cpu.execute_instruction()
    acc_result, acc_p = cpu.a, cpu.p
    cpu.p = int(Flag.R)
    cpu.execute_instruction()
    assert cpu.memory[0x40] == acc_result
    assert cpu.p == acc_p
    assert cpu.p & Flag.C