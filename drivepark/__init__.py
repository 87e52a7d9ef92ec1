"""DrivePark mobility marketplace: server-rendered web front-end and backend API."""

__version__ = "0.1.0"
