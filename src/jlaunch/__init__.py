"""jlaunch: decide how Java scripts, source sets and jars get built and launched."""

__version__ = "0.1.0"
