from .convert import SOURCE_SUFFIXES, handle_convert, _collect_sources, _convert_single_file, _print_batch_summary

__all__ = [
  "SOURCE_SUFFIXES",
  "handle_convert",
]
