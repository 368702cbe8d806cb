"""Sound generation of the TIA chip: two channels of polynomial noise and tones."""

from .equates import AUDC0, AUDC1, AUDF0, AUDF1, AUDV0, AUDV1

BUFFER_SIZE = 624
DEFAULT_SIZE = 524

_POLY4 = bytes((1, 1, 0, 1, 1, 1, 0, 0, 0, 0, 1, 0, 1, 0, 0))
_POLY5 = bytes((
    0, 0, 1, 0, 1, 1, 0, 0, 1, 1, 1, 1, 1, 0, 0, 0, 1, 1, 0, 1, 1, 1, 0, 1, 0, 1,
    0, 0, 0, 0, 1,
))
_POLY9 = bytes((
    0, 0, 1, 0, 1, 0, 0, 0, 1, 0, 0, 0, 0, 0, 0, 0, 1, 0, 1, 1, 1, 0, 0, 1, 0, 1,
    0, 0, 1, 1, 1, 1, 1, 0, 0, 1, 1, 0, 1, 1, 0, 1, 0, 1, 1, 1, 0, 1, 1, 0, 0, 1,
    0, 0, 1, 1, 1, 1, 0, 1, 0, 0, 0, 0, 1, 1, 0, 1, 1, 0, 0, 0, 1, 0, 0, 0, 1, 1,
    1, 1, 0, 1, 0, 1, 1, 0, 1, 0, 1, 0, 0, 0, 0, 1, 1, 0, 1, 0, 1, 0, 0, 0, 1, 0,
    1, 0, 0, 0, 1, 1, 1, 0, 0, 1, 1, 0, 1, 1, 0, 0, 1, 1, 1, 1, 1, 0, 0, 1, 1, 0,
    0, 0, 1, 1, 0, 1, 0, 0, 0, 1, 1, 0, 0, 1, 1, 1, 1, 0, 0, 1, 0, 0, 0, 1, 1, 1,
    0, 0, 1, 1, 0, 1, 0, 1, 1, 0, 1, 1, 0, 1, 0, 0, 1, 0, 0, 1, 1, 1, 1, 1, 1, 0,
    1, 1, 1, 1, 0, 1, 1, 0, 0, 0, 0, 1, 1, 1, 1, 1, 0, 0, 0, 1, 0, 0, 0, 0, 1, 0,
    0, 0, 1, 0, 1, 0, 1, 1, 0, 0, 0, 0, 1, 0, 1, 1, 1, 1, 0, 1, 0, 0, 0, 1, 1, 0,
    0, 0, 1, 1, 1, 0, 1, 1, 1, 0, 1, 0, 0, 0, 0, 0, 0, 0, 0, 1, 0, 1, 0, 0, 1, 0,
    0, 0, 0, 1, 1, 1, 0, 0, 0, 1, 1, 1, 0, 0, 1, 1, 0, 0, 1, 0, 0, 1, 0, 1, 1, 0,
    0, 0, 0, 1, 0, 0, 0, 1, 0, 0, 0, 1, 0, 1, 1, 1, 1, 0, 0, 0, 1, 1, 1, 0, 0, 0,
    1, 0, 0, 1, 1, 1, 1, 0, 1, 1, 1, 1, 1, 1, 1, 0, 1, 1, 1, 1, 1, 1, 0, 1, 1, 0,
    1, 0, 1, 1, 1, 1, 0, 0, 1, 0, 1, 0, 1, 1, 1, 0, 0, 0, 0, 0, 1, 1, 0, 1, 1, 0,
    0, 0, 1, 0, 1, 0, 1, 0, 0, 0, 0, 1, 0, 1, 1, 1, 0, 0, 0, 0, 1, 0, 0, 1, 0, 1,
    0, 0, 0, 1, 0, 1, 1, 1, 0, 0, 1, 1, 1, 1, 1, 1, 1, 0, 0, 0, 0, 0, 1, 0, 0, 1,
    1, 0, 1, 0, 0, 1, 0, 0, 0, 1, 0, 0, 1, 0, 1, 0, 0, 0, 1, 1, 0, 1, 0, 0, 0, 0,
    0, 1, 1, 1, 1, 0, 0, 1, 0, 0, 1, 0, 1, 1, 1, 1, 1, 1, 1, 0, 1, 0, 0, 1, 0, 0,
    0, 1, 1, 0, 1, 1, 1, 0, 0, 0, 1, 0, 1, 0, 0, 1, 0, 1, 0, 1, 0, 1, 1, 1, 0, 0,
    1, 0, 1, 1, 0, 0, 1, 1, 1, 1, 1, 0, 0, 0, 1, 1, 0,
))
_DIV31 = bytes((
    1, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 1, 0, 0, 0, 0, 0, 0, 0,
    0, 0, 0, 0, 0,
))

# register address -> (register name, channel)
_REGISTERS = {
    AUDC0: ("audc", 0),
    AUDC1: ("audc", 1),
    AUDF0: ("audf", 0),
    AUDF1: ("audf", 1),
    AUDV0: ("audv", 0),
    AUDV1: ("audv", 1),
}


class Tia:
    """Two-channel TIA sound generator writing unsigned 8-bit samples to ``buffer``."""

    def __init__(self):
        self.buffer = bytearray(BUFFER_SIZE)
        self.size = DEFAULT_SIZE
        self.reset()

    def reset(self):
        """Silence both channels, rewind the counters and clear the buffer."""
        self._sound_counter = 0
        self._volume = [0, 0]
        self._counter_max = [0, 0]
        self._counter = [0, 0]
        self._audc = [0, 0]
        self._audf = [0, 0]
        self._audv = [0, 0]
        self._poly4 = [0, 0]
        self._poly5 = [0, 0]
        self._poly9 = [0, 0]
        self.clear()

    def clear(self):
        """Fill the sample buffer with zeros."""
        self.buffer[:] = bytes(len(self.buffer))

    def set_register(self, address, data):
        """Write ``data`` to an audio register; other addresses are ignored."""
        register = _REGISTERS.get(address)
        if register is None:
            return
        name, channel = register
        if name == "audc":
            self._audc[channel] = data & 15
        elif name == "audf":
            self._audf[channel] = data & 31
        else:
            self._audv[channel] = (data & 15) << 2

        if self._audc[channel] == 0:
            frequency = 0
            self._volume[channel] = self._audv[channel]
        else:
            frequency = self._audf[channel] + 1
            if self._audc[channel] > 11:
                frequency *= 3

        if frequency != self._counter_max[channel]:
            self._counter_max[channel] = frequency
            if self._counter[channel] == 0 or frequency == 0:
                self._counter[channel] = frequency

    def process(self, length):
        """Generate ``length`` samples into the buffer, wrapping at ``size``."""
        for _ in range(length):
            for channel in (0, 1):
                counter = self._counter[channel]
                if counter > 1:
                    self._counter[channel] = counter - 1
                elif counter == 1:
                    self._counter[channel] = self._counter_max[channel]
                    self._process_channel(channel)
            self.buffer[self._sound_counter] = self._volume[0] + self._volume[1]
            self._sound_counter += 1
            if self._sound_counter >= self.size:
                self._sound_counter = 0

    def _process_channel(self, channel):
        poly5 = (self._poly5[channel] + 1) % len(_POLY5)
        self._poly5[channel] = poly5
        audc = self._audc[channel]
        audv = self._audv[channel]

        clocked = (
            (audc & 2) == 0
            or ((audc & 1) == 0 and _DIV31[poly5])
            or ((audc & 1) == 1 and _POLY5[poly5])
        )
        if not clocked:
            return

        if audc & 4:
            self._volume[channel] = 0 if self._volume[channel] else audv
        elif audc & 8:
            if audc == 8:
                poly9 = (self._poly9[channel] + 1) % len(_POLY9)
                self._poly9[channel] = poly9
                self._volume[channel] = audv if _POLY9[poly9] else 0
            else:
                self._volume[channel] = audv if _POLY5[poly5] else 0
        else:
            poly4 = (self._poly4[channel] + 1) % len(_POLY4)
            self._poly4[channel] = poly4
            self._volume[channel] = audv if _POLY4[poly4] else 0