from .common import resolve_output_path, write_json_summary

__all__ = [
    "resolve_output_path",
    "write_json_summary",
]
