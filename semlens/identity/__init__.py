from semlens.identity.sid import derive_sid, format_path, format_segment, normalize_label

__all__ = ["derive_sid", "format_path", "format_segment", "normalize_label"]
