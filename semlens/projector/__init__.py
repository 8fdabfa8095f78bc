from semlens.projector.cursor import format_cursor, parse_cursor
from semlens.projector.projector import Projection, project, text_snippet

__all__ = ["Projection", "format_cursor", "parse_cursor", "project", "text_snippet"]
