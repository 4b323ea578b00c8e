"""TaskMaster CLI - task tracking with points, levels and achievements."""

__version__ = "1.0.0"
