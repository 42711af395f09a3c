"""lessonctl: validate and render lesson documents."""

__version__ = "0.1.0"
