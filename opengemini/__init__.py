"""Line protocol encoding, query and measurement statement builders, parameter substitution and response decoding for openGemini."""

__version__ = "0.1.0"