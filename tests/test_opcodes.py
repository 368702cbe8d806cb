import pytest

from prosally.opcodes import OPCODES, Mode, Opcode, decode


def _all_decoded():
    return [decode(code) for code in range(256)]


def test_lda_immediate():
    op = decode(0xA9)
    assert op.mnemonic == "LDA"
    assert op.mode is Mode.IMMEDIATE
    assert op.cycles == 2
    assert op.size == 2
    assert op.delay is None


def test_brk_takes_seven_cycles():
    op = decode(0x00)
    assert op.mnemonic == "BRK"
    assert op.cycles == 7
    assert op.size == 1


def test_jmp_indirect_and_absolute():
    assert decode(0x6C).mode is Mode.INDIRECT
    assert decode(0x4C).mode is Mode.ABSOLUTE
    assert decode(0x6C).size == 3


def test_ldx_absolute_y_has_page_delay():
    op = decode(0xBE)
    assert op.mnemonic == "LDX"
    assert op.mode is Mode.ABSOLUTE_Y
    assert op.delay == "y"


def test_stores_have_no_page_delay():
    for code in (0x91, 0x99, 0x9D):
        assert decode(code).mnemonic == "STA"
        assert decode(code).delay is None


def test_accumulator_shifts():
    assert [decode(c).mnemonic for c in (0x0A, 0x2A, 0x4A, 0x6A)] == ["ASL", "ROL", "LSR", "ROR"]
    assert all(decode(c).mode is Mode.ACCUMULATOR for c in (0x0A, 0x2A, 0x4A, 0x6A))


def test_undefined_opcode():
    op = decode(0x02)
    assert not op.defined
    assert op.mnemonic is None
    assert op.cycles == 0


def test_table_is_indexed_by_code():
    assert len(OPCODES) == 256
    assert all(op.code == code for code, op in enumerate(OPCODES))
    assert all(decode(code) is op for code, op in enumerate(OPCODES))


def test_defined_opcodes_take_cycles():
    decoded = _all_decoded()
    assert any(op.defined for op in decoded)
    assert all(op.cycles > 0 for op in decoded if op.defined)


def test_delay_matches_indexed_mode():
    for op in _all_decoded():
        if op.delay == "x":
            assert op.mode is Mode.ABSOLUTE_X
        elif op.delay == "y":
            assert op.mode in (Mode.ABSOLUTE_Y, Mode.INDIRECT_Y)


def test_branches_are_relative():
    branches = {"BPL", "BMI", "BVC", "BVS", "BCC", "BCS", "BNE", "BEQ"}
    found = set()
    for op in _all_decoded():
        if op.mnemonic in branches:
            found.add(op.mnemonic)
            assert op.mode is Mode.RELATIVE
            assert op.size == 2
    assert found == branches


def test_size_follows_mode():
    for op in _all_decoded():
        assert op.size == 1 + op.mode.operand_bytes


def test_opcode_is_frozen():
    op = decode(0xEA)
    with pytest.raises(AttributeError):
        op.cycles = 5
    assert op == Opcode(0xEA, "NOP", Mode.IMPLIED, 2, None)


@pytest.mark.parametrize("bad", [-1, 256, 1000])
def test_out_of_range(bad):
    with pytest.raises(ValueError):
        decode(bad)


def test_not_an_int():
    with pytest.raises(TypeError):
        decode("0xa9")