"""WAV decoding/encoding and silence helpers."""
