import os, json, click, logging
from typing import Dict, Any, List, Optional
from .options import load_options, LANGUAGES
from .loader import load_pnr_text
from .classifier import format_hints, MARKUP
from .converter import convert
from .renderer import render_text, to_jsonable
from .utils import try_parse_date

logger = logging.getLogger(__name__)

PNR_EXTENSIONS = (".txt", ".html", ".htm")

def convert_file(path: str, base_year: Optional[int]) -> Dict[str, Any]:
    text, err = load_pnr_text(path)
    fmt, hints = format_hints(text)
    if fmt == MARKUP and not hints["rows"]:
        logger.info("%s: markup input without table rows", path)
    elif fmt != MARKUP and text.strip() and not hints["raw_lines"]:
        logger.info("%s: no RAW segment lines found", path)

    result = convert(text, base_year=base_year)
    if not result["segments"]:
        msg = "no_segments"
        err = (err + " | " if err else "") + msg

    return {
        "path_in": path,
        "format": fmt,
        "result": result,
        "errors": err,
    }

def _collect(path: str, recursive: bool) -> List[str]:
    if path == "-" or not os.path.isdir(path):
        return [path]
    files: List[str] = []
    for root, _, names in os.walk(path):
        for n in sorted(names):
            if n.lower().endswith(PNR_EXTENSIONS):
                files.append(os.path.join(root, n))
        if not recursive:
            break
    return files

@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Debug logging")
def main(verbose):
    """PNR (RAW / AIR html) to itinerary converter"""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

@main.command("convert")
@click.argument("path", type=click.Path(exists=True, allow_dash=True))
@click.option("--format", "out_format", default="json", show_default=True, type=click.Choice(["json", "text"]), help="Output format")
@click.option("--lang", default=None, type=click.Choice(LANGUAGES), help="Language of the text output (overrides config)")
@click.option("--config", "config_path", default=None, type=click.Path(exists=True), help="Path to render options YAML")
@click.option("--base-year", default=None, type=int, help="Year of the first segment (default: current year)")
@click.option("--reference-date", default=None, help="Issue/booking date; its year is used as base year")
@click.option("--recursive", is_flag=True, help="Recurse into directories")
def convert_cmd(path, out_format, lang, config_path, base_year, reference_date, recursive):
    """Convert a PNR file (or every .txt/.html file in a directory)."""
    options = load_options(config_path)
    if lang:
        options["language"] = lang

    if base_year is None and reference_date:
        ref = try_parse_date(reference_date)
        if ref is None:
            raise click.BadParameter(f"cannot parse date {reference_date!r}", param_hint="--reference-date")
        base_year = ref.year

    for f in _collect(path, recursive):
        res = convert_file(f, base_year)
        if out_format == "text":
            click.echo(render_text(res["result"], options))
            click.echo("")
        else:
            click.echo(json.dumps(to_jsonable(res), ensure_ascii=False))

if __name__ == "__main__":
    main()
