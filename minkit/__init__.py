"""Small message-driven objects for timing, lists, dictionaries, audio buffers, host facts, text buffers and autolinking."""

__version__ = "0.1.0"