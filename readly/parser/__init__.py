from .loader import CLIPPINGS_RELATIVE_PATH, clippings_file_path, load_text
from .models import Highlight
from .parser import ClippingsParser

__all__ = ["CLIPPINGS_RELATIVE_PATH", "ClippingsParser", "Highlight", "clippings_file_path", "load_text"]
