"""Audio mixing: resampling TIA/POKEY output to the playback rate and buffering it."""

OUTPUT_FREQUENCY = 44100
MAX_SAMPLE_SIZE = 512
RING_SIZE = 16 * MAX_SAMPLE_SIZE
SOURCE_RATE = 31440


class RingBuffer:
    """Fixed-size byte ring; consumed slots are zeroed so underruns play silence."""

    def __init__(self, size=RING_SIZE):
        if size <= 0:
            raise ValueError("ring buffer size must be positive")
        self.size = size
        self._data = bytearray(size)
        self._produced = 0
        self._consumed = 0

    def produce(self, data):
        """Append ``data`` at the write position, overwriting old bytes on wrap."""
        for value in data:
            self._data[self._produced] = value
            self._produced = (self._produced + 1) % self.size

    def consume(self, size):
        """Take ``size`` bytes from the read position, leaving zeros behind."""
        out = bytearray(size)
        for index in range(size):
            out[index] = self._data[self._consumed]
            self._data[self._consumed] = 0
            self._consumed = (self._consumed + 1) % self.size
        return bytes(out)


def sample_length(length, unit, unit_max):
    """Samples per unit: ``length // unit_max``, rounded up if the rest reaches ``unit``."""
    if unit_max <= 0:
        raise ValueError("unit_max must be positive")
    count, remain = divmod(length, unit_max)
    if remain != 0 and remain >= unit:
        count += 1
    return count


def resample(source, length, frequency):
    """Stretch ``source`` (at the TIA rate) to ``length`` samples at ``frequency``."""
    if frequency <= 0:
        raise ValueError("frequency must be positive")
    out = bytearray()
    measurement = frequency
    source_index = 0
    while len(out) < length:
        if measurement >= SOURCE_RATE:
            out.append(source[source_index])
            measurement -= SOURCE_RATE
        else:
            source_index += 1
            measurement += frequency
    return bytes(out)


def render_frame(tia_buffer, output_frequency, frames_per_second, prosystem_frequency,
                 pokey_buffer=None):
    """Return one frame of 8-bit audio, averaging in POKEY output when given."""
    length = sample_length(output_frequency, frames_per_second, prosystem_frequency)
    sample = resample(tia_buffer, length, output_frequency)
    if pokey_buffer is None:
        return sample
    pokey = resample(pokey_buffer, length, output_frequency)
    return bytes(((a + b) & 0xFF) // 2 for a, b in zip(sample, pokey))