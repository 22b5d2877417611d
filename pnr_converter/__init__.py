from .converter import convert, parse_html_pnr, parse_raw_pnr

__all__ = ["convert", "parse_html_pnr", "parse_raw_pnr"]
