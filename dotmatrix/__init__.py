"""Emulation building blocks: instruction decoding, CPU, interrupts, timers, joypad, serial and video memory."""

__version__ = "0.0.1"