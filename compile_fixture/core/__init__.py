"""Core — models, configuration and the fixture engine."""
