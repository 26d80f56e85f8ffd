from .writer import DEFAULT_FILE_MODE, FileWriter

__all__ = ["DEFAULT_FILE_MODE", "FileWriter"]
