"""Local task list: add, complete, filter and delete tasks, saved between runs."""

__version__ = "0.1.0"
