# prosally

`prosally` provides the core chips of a 7800-class game console in plain
Python. It needs nothing outside the standard library.

- `prosally.cpu.Sally` is a 6502-style processor. It takes each
  instruction's cycle count from a table, adds the page-crossing and
  taken-branch penalties, and handles BCD arithmetic in `ADC` and `SBC`.
  It runs reset, NMI and IRQ sequences (`execute_res`, `execute_nmi`,
  `execute_irq`). Undefined opcodes do nothing and take their table
  cycles. After `BIT` on `INPT4` it sets `half_cycle`.
- `prosally.bus.Memory` is a 64 KiB address space that the processor and
  the RIOT share. `read` and `write` wrap the address at 16 bits. `load`
  copies a block of bytes in and raises `ValueError` if the block does
  not fit.
- `prosally.riot.Riot` models the RIOT. It covers:
  - the interval timer (`TIM1T`, `TIM8T`, `TIM64T`, `T1024T`), which
    updates `INTIM` and `INTFLG`;
  - the joystick and console-switch ports (`SWCHA`, `SWCHB`);
  - one- and two-button controller modes (`INPT0`–`INPT5`).
- `prosally.tia.Tia` produces TIA sound from two channels with polynomial
  noise generators. It writes unsigned 8-bit samples into `Tia.buffer`.
- `prosally.sound` turns chip output into audio frames:
  - `sample_length` gives the number of samples in one frame.
  - `resample` stretches samples from the 31440 Hz chip rate to an
    output rate.
  - `render_frame` resamples one frame. When it is given a second
    buffer, it averages that buffer in.
  - `RingBuffer` queues samples for playback. Slots that have been
    consumed are set back to zero.
- `prosally.opcodes` decodes an opcode byte into an `Opcode`. An `Opcode`
  holds the mnemonic, the addressing `Mode`, the base cycle count and the
  instruction size.
- `prosally.alu` holds the flag-setting arithmetic as pure functions:
  - `adc`, `sbc`
  - `compare`, `bit`
  - `asl`, `lsr`, `rol`, `ror`
  - `set_nz`

  The status bits are in `Flag`.
- `prosally.equates` names the hardware register addresses.

## Installing

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Running the processor

```python
from prosally.bus import Memory
from prosally.cpu import Sally

memory = Memory()
memory.load(0x8000, bytes([0xA9, 0x42, 0x85, 0x80]))  # LDA #$42 ; STA $80
memory[0xFFFC] = 0x00
memory[0xFFFD] = 0x80

cpu = Sally(memory)
cpu.reset()
cpu.execute_res()
cycles = cpu.execute_instruction() + cpu.execute_instruction()
assert memory[0x80] == 0x42
assert cycles == 5
```

## Input and timer

`Riot.set_input` takes the buttons that are held down, as members of
`prosally.riot.InputButton`. These cover both joysticks and the console
switches. It writes the resulting `SWCHA`, `SWCHB` and `INPT0`–`INPT5`
values into the shared memory.

```python
from prosally.bus import Memory
from prosally.equates import SWCHA, TIM64T
from prosally.riot import InputButton, Riot

memory = Memory()
riot = Riot(memory)
riot.reset()
riot.set_input([InputButton.JOY1_UP])
assert memory[SWCHA] == 0xEF

riot.set_timer(TIM64T, 10)
riot.update_timer(64)
```

## Sound

```python
from prosally.tia import Tia
from prosally.equates import AUDC0, AUDF0, AUDV0
from prosally.sound import RingBuffer, render_frame

tia = Tia()
tia.set_register(AUDC0, 4)
tia.set_register(AUDF0, 10)
tia.set_register(AUDV0, 15)
tia.process(524)

frame = render_frame(tia.buffer, 44100, 60, 60, None)  # 735 samples
ring = RingBuffer(8192)
ring.produce(frame)
chunk = ring.consume(512)
```

## What it does not do

`prosally` contains only the chips listed above. It is not a complete
console. It has:

- no video chip or display;
- no cartridge or ROM loading beyond `Memory.load`;
- no second sound chip (`render_frame` only mixes in a buffer you hand
  it);
- no audio device output;
- no command-line program.

You drive the chips and play the samples from your own code.