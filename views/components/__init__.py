from .file_select import file_selector

__all__ = ["file_selector"]
