import pytest

from prosally.bus import ADDRESS_SPACE, Memory


def test_new_memory_is_zeroed():
    memory = Memory()
    assert len(memory.ram) == ADDRESS_SPACE
    assert not any(memory.ram)


def test_write_then_read_round_trip():
    memory = Memory()
    memory.write(0x1234, 0x5A)
    assert memory.read(0x1234) == 0x5A
    assert memory[0x1234] == 0x5A


def test_write_keeps_low_byte():
    memory = Memory()
    memory.write(0x40, 0x1FF)
    assert memory.read(0x40) == 0xFF
    memory.write(0x41, -1)
    assert memory.read(0x41) == 0xFF


def test_addresses_wrap_at_sixteen_bits():
    memory = Memory()
    memory.write(0x10000 + 7, 42)
    assert memory.read(7) == 42
    assert memory.read(0x20007) == 42


def test_load_copies_block():
    memory = Memory()
    memory.load(0xFFFC, b"\x01\x02\x03\x04")
    assert memory[0xFFFC:0x10000] == bytearray(b"\x01\x02\x03\x04")
    assert memory.read(0xFFFB) == 0


def test_load_past_end_raises():
    memory = Memory()
    with pytest.raises(ValueError):
        memory.load(0xFFFE, b"\x01\x02\x03")


def test_load_negative_address_raises():
    memory = Memory()
    with pytest.raises(ValueError):
        memory.load(-1, b"\x01")


def test_setitem_masks_value_and_supports_slices():
    memory = Memory()
    memory[0x80] = 0x180
    assert memory[0x80] == 0x80
    memory[0x90:0x92] = b"\xAA\xBB"
    assert memory.read(0x90) == 0xAA
    assert memory.read(0x91) == 0xBB