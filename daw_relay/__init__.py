"""
DAW AI relay.

Forwards prompts from the DAW frontend to a generative model and reshapes the
reply into bounded sentiment / EQ / compressor settings.
"""
