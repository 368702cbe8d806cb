"""Addresses of the memory-mapped TIA and RIOT registers."""

INPTCTRL = 1
INPT0 = 8
INPT1 = 9
INPT2 = 10
INPT3 = 11
INPT4 = 12
INPT5 = 13
AUDC0 = 21
AUDC1 = 22
AUDF0 = 23
AUDF1 = 24
AUDV0 = 25
AUDV1 = 26
BACKGRND = 32
P0C1 = 33
P0C2 = 34
P0C3 = 35
WSYNC = 36
P1C1 = 37
P1C2 = 38
P1C3 = 39
MSTAT = 40
P2C1 = 41
P2C2 = 42
P2C3 = 43
DPPH = 44
P3C1 = 45
P3C2 = 46
P3C3 = 47
DPPL = 48
P4C1 = 49
P4C2 = 50
P4C3 = 51
CHARBASE = 52
P5C1 = 53
P5C2 = 54
P5C3 = 55
OFFSET = 56
P6C1 = 57
P6C2 = 58
P6C3 = 59
CTRL = 60
P7C1 = 61
P7C2 = 62
P7C3 = 63
SWCHA = 640
CTLSWA = 641
SWCHB = 642
CTLSWB = 643
INTIM = 644
INTFLG = 645
TIM1T = 660
TIM8T = 661
TIM64T = 662
T1024T = 663