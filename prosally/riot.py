"""The RIOT chip: joystick and console-switch ports and the interval timer."""

import enum

from .equates import (
    CTLSWA,
    CTLSWB,
    INPT0,
    INPT1,
    INPT2,
    INPT3,
    INPT4,
    INPT5,
    INTFLG,
    INTIM,
    SWCHA,
    SWCHB,
    T1024T,
    TIM1T,
    TIM8T,
    TIM64T,
)


class InputButton(enum.IntEnum):
    """Controls that can be held down, by their slot in the input state."""

    JOY1_RIGHT = 0x00
    JOY1_LEFT = 0x01
    JOY1_DOWN = 0x02
    JOY1_UP = 0x03
    JOY1_BUTTON1 = 0x04
    JOY1_BUTTON2 = 0x05
    JOY2_RIGHT = 0x06
    JOY2_LEFT = 0x07
    JOY2_DOWN = 0x08
    JOY2_UP = 0x09
    JOY2_BUTTON1 = 0x0A
    JOY2_BUTTON2 = 0x0B
    RESET = 0x0C
    SELECT = 0x0D
    PAUSE = 0x0E
    LEFT_DIFFICULTY = 0x0F
    RIGHT_DIFFICULTY = 0x10


_SWCHA_BITS = {
    InputButton.JOY1_RIGHT: 0x80,
    InputButton.JOY1_LEFT: 0x40,
    InputButton.JOY1_DOWN: 0x20,
    InputButton.JOY1_UP: 0x10,
    InputButton.JOY2_RIGHT: 0x08,
    InputButton.JOY2_LEFT: 0x04,
    InputButton.JOY2_DOWN: 0x02,
    InputButton.JOY2_UP: 0x01,
}

_SWCHB_BITS = {
    InputButton.RESET: 0x01,
    InputButton.SELECT: 0x02,
    InputButton.PAUSE: 0x08,
    InputButton.LEFT_DIFFICULTY: 0x40,
    InputButton.RIGHT_DIFFICULTY: 0x80,
}

_TIMER_CLOCKS = {T1024T: 1024, TIM1T: 1, TIM8T: 8, TIM64T: 64}

# (mode bit in SWCHB, legacy button, left button, right button, button 1, button 2)
_PLAYERS = (
    (0x04, INPT4, INPT1, INPT0, InputButton.JOY1_BUTTON1, InputButton.JOY1_BUTTON2),
    (0x10, INPT5, INPT3, INPT2, InputButton.JOY2_BUTTON1, InputButton.JOY2_BUTTON2),
)


class Riot:
    """RIOT ports and timer, reflected into the registers of ``memory``."""

    def __init__(self, memory):
        self.memory = memory
        self.timing = False
        self.timer = TIM64T
        self.intervals = 0
        self.dra = 0
        self.drb = 0
        self._elapsed = False
        self._current_time = 0
        self._clocks = 0

    def reset(self):
        """Clear the data registers and stop the timer."""
        self.set_dra(0)
        self.set_drb(0)
        self.timing = False
        self.timer = TIM64T
        self.intervals = 0
        self._clocks = 0
        self._elapsed = False
        self._current_time = 0

    def set_input(self, buttons):
        """Update SWCHA, SWCHB and INPT0-5 from the collection of held ``buttons``."""
        pressed = frozenset(InputButton(button) for button in buttons)
        ram = self.memory

        swcha = (~ram[CTLSWA] | self.dra) & 0xFF
        for button, bit in _SWCHA_BITS.items():
            if button in pressed:
                swcha &= ~bit
        ram[SWCHA] = swcha

        # A 0 in CTLSWB lets RIOT drive 1; a 1 lets DRB through. Switches pull bits low.
        swchb = (~ram[CTLSWB] | self.drb) & 0xFF
        for button, bit in _SWCHB_BITS.items():
            if button in pressed:
                swchb &= ~bit
        ram[SWCHB] = swchb

        for mode_bit, legacy, left, right, button1, button2 in _PLAYERS:
            if swchb & mode_bit:
                # One-button mode: only the legacy signal, active low.
                ram[right] &= 0x7F
                ram[left] &= 0x7F
                if button1 in pressed or button2 in pressed:
                    ram[legacy] &= 0x7F
                else:
                    ram[legacy] |= 0x80
            else:
                # Two-button mode: the new signals, active high.
                ram[legacy] |= 0x80
                ram[left] = (ram[left] | 0x80) if button1 in pressed else (ram[left] & 0x7F)
                ram[right] = (ram[right] | 0x80) if button2 in pressed else (ram[right] & 0x7F)

    def set_dra(self, data):
        """Store a value written to SWCHA in the internal DRA register."""
        self.dra = data & 0xFF

    def set_drb(self, data):
        """Store a value written to SWCHB in DRB and apply the button-mode bits at once."""
        self.drb = data & 0xFF
        ram = self.memory
        ram[SWCHB] = (ram[SWCHB] & ~0x14) | ((~ram[CTLSWB] | self.drb) & 0x14)

    def set_timer(self, timer, intervals):
        """Start the interval timer selected by the register address ``timer``."""
        self.timer = timer
        self.intervals = intervals
        clocks = _TIMER_CLOCKS.get(timer)
        if clocks is not None:
            self._clocks = clocks
            self.timing = True
        if self.timing:
            self._current_time = self._clocks * intervals
            self._elapsed = False

    def update_timer(self, cycles):
        """Advance the timer by ``cycles`` and refresh INTIM and INTFLG."""
        self._current_time -= cycles
        if not self._elapsed and self._current_time > 0:
            self.memory.write(INTIM, self._current_time // self._clocks)
        elif self._elapsed:
            if self._current_time >= -255:
                self.memory.write(INTIM, self._current_time)
            else:
                self.memory.write(INTIM, 0)
                self.timing = False
        else:
            self._current_time = self._clocks
            self.memory.write(INTIM, 0)
            self.memory[INTFLG] |= 0x80
            self._elapsed = True