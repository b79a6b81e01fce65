"""
Report Generation
Renders parsed lines as console tables, JSON, or CSV.
"""

import csv
import io
import json
import logging
from pathlib import Path
from typing import List, Optional

from .field_catalog import SPECIFICATION, field_kinds
from .line_parser import ParsedLine

logger = logging.getLogger(__name__)

REPORT_STEM = "partspec_results"


def _column_kinds(parsed_lines: List[ParsedLine]) -> List[str]:
    if parsed_lines and parsed_lines[0].fields:
        return [f.kind for f in parsed_lines[0].fields]
    return field_kinds(SPECIFICATION)


def build_report_data(parsed_lines: List[ParsedLine]) -> dict:
    """JSON-ready report: every line, its tokens, and its fields."""
    recognized = sum(1 for pl in parsed_lines for r in pl.results if r.matched)
    total = sum(len(pl.results) for pl in parsed_lines)
    return {
        "fields": _column_kinds(parsed_lines),
        "lines": [pl.to_dict() for pl in parsed_lines],
        "summary": {
            "total_lines": len(parsed_lines),
            "total_tokens": total,
            "recognized_tokens": recognized,
            "unrecognized_tokens": total - recognized,
        },
    }


def render_json(parsed_lines: List[ParsedLine]) -> str:
    return json.dumps(build_report_data(parsed_lines), indent=2) + "\n"


def render_csv(parsed_lines: List[ParsedLine]) -> str:
    """
    One row per line: item number, input text, then one column per field
    holding that field's values joined with " | ".
    """
    fieldnames = ['#', 'INPUT DATA', 'TOKENIZATION'] + _column_kinds(parsed_lines)

    buffer = io.StringIO()
    writer = csv.DictWriter(buffer, fieldnames=fieldnames, lineterminator='\n')
    writer.writeheader()
    for i, pl in enumerate(parsed_lines, start=1):
        row = {
            '#': i,
            'INPUT DATA': pl.line,
            'TOKENIZATION': " | ".join(pl.tokens),
        }
        for f in pl.fields:
            row[f.kind] = f.display()
        writer.writerow(row)
    return buffer.getvalue()


def _table(headers: List[str], rows: List[List[str]]) -> str:
    widths = [len(h) for h in headers]
    for row in rows:
        for i, cell in enumerate(row):
            widths[i] = max(widths[i], len(cell))

    def fmt(cells):
        return " | ".join(cell.ljust(widths[i]) for i, cell in enumerate(cells)).rstrip()

    lines = [fmt(headers), "-+-".join("-" * w for w in widths)]
    lines.extend(fmt(row) for row in rows)
    return "\n".join(lines)


def render_table(parsed_lines: List[ParsedLine]) -> str:
    """Input lines, their tokenization, and the field table, as plain text."""
    inputs = _table(
        ['#', 'INPUT DATA'],
        [[str(i), pl.line] for i, pl in enumerate(parsed_lines, start=1)]
    )
    tokens = _table(
        ['#', 'TOKENIZATION'],
        [[str(i), " ".join(f"[{t}]" for t in pl.tokens)]
         for i, pl in enumerate(parsed_lines, start=1)]
    )
    fields = _table(
        ['#'] + _column_kinds(parsed_lines),
        [[str(i)] + [f.display() for f in pl.fields]
         for i, pl in enumerate(parsed_lines, start=1)]
    )
    return "\n\n".join([inputs, tokens, fields]) + "\n"


RENDERERS = {
    "table": render_table,
    "json": render_json,
    "csv": render_csv,
}


def render(parsed_lines: List[ParsedLine], output_format: str = "table") -> str:
    try:
        renderer = RENDERERS[output_format]
    except KeyError:
        raise ValueError(f"Unknown output format: {output_format}")
    return renderer(parsed_lines)


def write_reports(
    parsed_lines: List[ParsedLine],
    output_path: Path,
    filename_stem: Optional[str] = None
) -> List[str]:
    """
    Save JSON and CSV reports to the output directory.

    Returns:
        Paths of the written files
    """
    output_dir = Path(output_path)
    output_dir.mkdir(parents=True, exist_ok=True)
    stem = filename_stem or REPORT_STEM

    json_path = output_dir / f"{stem}.json"
    with open(json_path, 'w', encoding='utf-8') as f:
        f.write(render_json(parsed_lines))
    logger.info(f"JSON report saved: {json_path}")

    csv_path = output_dir / f"{stem}.csv"
    with open(csv_path, 'w', newline='', encoding='utf-8') as f:
        f.write(render_csv(parsed_lines))
    logger.info(f"CSV report saved: {csv_path}")

    return [str(json_path), str(csv_path)]
