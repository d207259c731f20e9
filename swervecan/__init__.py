"""CAN frames, drive-command encoding and twist estimation for a four-wheel swerve drive."""

__version__ = "0.1.0"
__all__ = ["controller", "frames", "visualization"]