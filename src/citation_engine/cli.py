"""Command line interface for formatting, detecting and parsing citations."""
from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List

from .app import CitationEngine
from .config import LOG_LEVELS, Settings, load_settings
from .exporters import to_bibtex, to_json, to_ris
from .models import CitationInput, CitationSourceType, CitationStyle, CitationStyleDetection
from .names import parse_authors
from .report import render_detection, render_format_report, render_parse_report

STYLE_CHOICES = [style.value for style in CitationStyle]
SOURCE_TYPE_CHOICES = [source_type.value for source_type in CitationSourceType]


def _serialize_detection(detection: CitationStyleDetection) -> Dict[str, Any]:
    style = detection.style.value if isinstance(detection.style, CitationStyle) else detection.style
    return {"style": style, "confidence": detection.confidence, "scores": detection.scores}


def _read_lines(args: argparse.Namespace) -> List[str]:
    lines = list(args.text or [])
    if args.input:
        lines.extend(args.input.read_text(encoding="utf-8").splitlines())
    return [line for line in lines if line.strip()]


def _entries_from_args(args: argparse.Namespace, settings: Settings) -> List[CitationInput]:
    if args.input_json:
        data = json.loads(args.input_json.read_text(encoding="utf-8"))
        items = data if isinstance(data, list) else [data]
        entries = []
        for item in items:
            item.setdefault("style", args.style or settings.style.value)
            item.setdefault("source_type", args.source_type or settings.source_type.value)
            entries.append(CitationInput.from_dict(item))
        return entries

    return [
        CitationInput(
            style=CitationStyle(args.style or settings.style),
            source_type=CitationSourceType(args.source_type or settings.source_type),
            authors=parse_authors("\n".join(args.author or [])),
            title=args.title,
            container_title=args.container_title,
            publisher=args.publisher,
            published_date=args.published_date,
            access_date=args.access_date,
            volume=args.volume,
            issue=args.issue,
            pages=args.pages,
            url=args.url,
            doi=args.doi,
        )
    ]


def _write_exports(args: argparse.Namespace, entries: List[CitationInput]) -> None:
    if args.records_output:
        args.records_output.write_text(to_json(entries), encoding="utf-8")
    if args.bibtex_output:
        args.bibtex_output.write_text(to_bibtex(entries), encoding="utf-8")
    if args.ris_output:
        args.ris_output.write_text(to_ris(entries), encoding="utf-8")


def _run_format(args: argparse.Namespace, engine: CitationEngine, settings: Settings) -> int:
    entries = _entries_from_args(args, settings)
    results = engine.format_many(entries)
    print(render_format_report(results, locale=args.locale or settings.locale))

    if args.json_output:
        payload = [
            {"citation": result.citation, "warnings": [code.value for code in result.sorted_warnings()]}
            for result in results
        ]
        args.json_output.write_text(json.dumps(payload, indent=2, ensure_ascii=False), encoding="utf-8")
    _write_exports(args, entries)
    return 0


def _run_detect(args: argparse.Namespace, engine: CitationEngine, settings: Settings) -> int:
    lines = _read_lines(args)
    detections = [engine.detect(line) for line in lines]
    for line, detection in zip(lines, detections):
        print(f"{render_detection(detection)}: {line}")

    if args.json_output:
        payload = [dict(text=line, **_serialize_detection(d)) for line, d in zip(lines, detections)]
        args.json_output.write_text(json.dumps(payload, indent=2, ensure_ascii=False), encoding="utf-8")
    return 0


def _run_parse(args: argparse.Namespace, engine: CitationEngine, settings: Settings) -> int:
    preferred = CitationStyle(args.style) if args.style else None
    parsed = engine.parse_many(_read_lines(args), preferred)
    target = CitationStyle(args.convert_to) if args.convert_to else None
    fallback_type = CitationSourceType(args.source_type or settings.source_type)
    entries = [fields.to_input(style=target, fallback_source_type=fallback_type) for fields in parsed]

    for idx, fields in enumerate(parsed):
        if idx:
            print()
        print(render_parse_report(fields))
        if target:
            print(f"Converted: {engine.format(entries[idx]).citation}")

    if args.json_output:
        payload = [fields.to_dict() for fields in parsed]
        args.json_output.write_text(json.dumps(payload, indent=2, ensure_ascii=False), encoding="utf-8")
    _write_exports(args, entries)
    return 0


def _build_parser() -> argparse.ArgumentParser:
    shared = argparse.ArgumentParser(add_help=False)
    shared.add_argument("--locale", choices=["en", "zh"], help="Month names and labels to use")
    shared.add_argument("--log-level", choices=LOG_LEVELS, help="Logging verbosity")
    shared.add_argument("--json-output", type=Path, help="Write structured results to a JSON file")
    shared.add_argument("--bibtex-output", type=Path, help="Write the citation records as BibTeX")
    shared.add_argument("--ris-output", type=Path, help="Write the citation records as RIS")
    shared.add_argument("--records-output", type=Path, help="Write the citation records as JSON")

    parser = argparse.ArgumentParser(description="Format, detect and parse bibliographic citations")
    commands = parser.add_subparsers(dest="command", required=True)

    fmt = commands.add_parser("format", parents=[shared], help="Render a citation from structured fields")
    fmt.add_argument("--style", choices=STYLE_CHOICES, help="Citation style")
    fmt.add_argument("--source-type", choices=SOURCE_TYPE_CHOICES, help="Kind of cited work")
    fmt.add_argument("--author", action="append", help="Author as 'Family, Given' (repeatable)")
    fmt.add_argument("--title", default="")
    fmt.add_argument("--container-title", default="", help="Journal or website name")
    fmt.add_argument("--publisher", default="")
    fmt.add_argument("--published-date", default="", help="YYYY, YYYY-MM or YYYY-MM-DD")
    fmt.add_argument("--access-date", default="", help="YYYY, YYYY-MM or YYYY-MM-DD")
    fmt.add_argument("--volume", default="")
    fmt.add_argument("--issue", default="")
    fmt.add_argument("--pages", default="")
    fmt.add_argument("--url", default="")
    fmt.add_argument("--doi", default="")
    fmt.add_argument("--input-json", type=Path, help="JSON object or list of objects with citation fields")
    fmt.set_defaults(handler=_run_format)

    detect = commands.add_parser("detect", parents=[shared], help="Guess the style of citation text")
    detect.add_argument("text", nargs="*", help="Citation text")
    detect.add_argument("--input", type=Path, help="File with one citation per line")
    detect.set_defaults(handler=_run_detect)

    parse = commands.add_parser("parse", parents=[shared], help="Extract fields from citation text")
    parse.add_argument("text", nargs="*", help="Citation text")
    parse.add_argument("--input", type=Path, help="File with one citation per line")
    parse.add_argument("--style", choices=STYLE_CHOICES, help="Skip detection and parse as this style")
    parse.add_argument("--source-type", choices=SOURCE_TYPE_CHOICES, help="Fallback kind of cited work")
    parse.add_argument("--convert-to", choices=STYLE_CHOICES, help="Re-format parsed citations in this style")
    parse.set_defaults(handler=_run_parse)
    return parser


def main(argv: List[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    try:
        settings = load_settings()
    except ValueError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1

    logging.basicConfig(
        level=args.log_level or settings.log_level,
        format="%(levelname)s %(name)s: %(message)s",
    )
    engine = CitationEngine(locale=args.locale or settings.locale)

    try:
        return args.handler(args, engine, settings)
    except (OSError, ValueError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":  # pragma: no cover - manual invocation helper
    raise SystemExit(main())
