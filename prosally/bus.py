"""The 64 KiB address space the CPU and the chips share."""

ADDRESS_SPACE = 0x10000


class Memory:
    """Flat 16-bit address space of bytes, read and written by the CPU and the chips."""

    def __init__(self):
        self.ram = bytearray(ADDRESS_SPACE)

    def read(self, address):
        """Return the byte at ``address``; the address wraps at 16 bits."""
        return self.ram[address & 0xFFFF]

    def write(self, address, data):
        """Store the low 8 bits of ``data`` at ``address``; the address wraps at 16 bits."""
        self.ram[address & 0xFFFF] = data & 0xFF

    def load(self, address, data):
        """Copy the bytes of ``data`` into memory starting at ``address``."""
        data = bytes(data)
        if not 0 <= address < ADDRESS_SPACE:
            raise ValueError(f"address {address:#x} is outside the address space")
        end = address + len(data)
        if end > ADDRESS_SPACE:
            raise ValueError(
                f"{len(data)} bytes at {address:#x} run past the end of the address space"
            )
        self.ram[address:end] = data

    def __getitem__(self, address):
        return self.ram[address]

    def __setitem__(self, address, value):
        if isinstance(address, slice):
            self.ram[address] = value
        else:
            self.ram[address] = value & 0xFF