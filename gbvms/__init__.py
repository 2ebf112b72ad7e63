"""Configuration, device, webhook and playback-address helpers for a GB/T 28181 video platform."""

__version__ = "0.1.0"