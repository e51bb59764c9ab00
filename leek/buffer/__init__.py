from leek.buffer.line_index import LineIndex
from leek.buffer.edit_buffer import EditBuffer

__all__ = ["LineIndex", "EditBuffer"]
