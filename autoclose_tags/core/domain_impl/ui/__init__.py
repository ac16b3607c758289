"""UI domain package: Tk text adapter and settings dialog."""
