#!/usr/bin/env python3
"""
PhotoStory to Bloom Batch Converter

Converts one or more extracted PhotoStory 3 projects into Bloom books.
Each project directory holds project.xml, the slide images and audio, and
one Word script document per language, named after the language
(e.g. "My Story English.docx", "My Story Tok Pisin.docx").

Usage:
    # Convert a single project
    python3 batch_converter.py --project projects/Creation --code ABC123

    # Convert every project below a folder
    python3 batch_converter.py --projects-root projects --output Books --overwrite
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from ps2bloom.config import AppConfig, load_config
from ps2bloom.converter import ConversionResult, ProjectConverter
from ps2bloom.errors import ConfigError
from ps2bloom.project_reader import PROJECT_XML
from ps2bloom.tracker import ConversionTracker
from ps2bloom.utils import setup_logger


def find_projects(args: argparse.Namespace) -> List[Path]:
    """Collect project directories from --project and --projects-root."""
    projects = [Path(p) for p in (args.project or [])]
    if args.projects_root:
        root = Path(args.projects_root)
        projects.extend(
            child for child in sorted(root.iterdir())
            if child.is_dir() and (child / PROJECT_XML).exists()
        )
    return projects


def convert_project(
    converter: ProjectConverter,
    config: AppConfig,
    project_dir: Path,
    output_dir: Path,
    code: Optional[str] = None,
) -> ConversionResult:
    docx_paths = sorted(project_dir.glob("*.docx"))
    project_code = code or config.conversion.project_codes.get(project_dir.name)
    return converter.convert_safely(
        project_dir / PROJECT_XML,
        output_dir,
        docx_paths=docx_paths,
        project_code=project_code,
    )


def main(argv=None) -> int:
    """Main entry point for the batch converter."""
    parser = argparse.ArgumentParser(
        description="Convert PhotoStory 3 projects into multilingual Bloom books"
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=Path("config.yaml"),
        help="Path to configuration file (default: config.yaml)"
    )
    parser.add_argument(
        "--project",
        action="append",
        help="Project directory containing project.xml (repeatable)"
    )
    parser.add_argument(
        "--projects-root",
        help="Convert every subdirectory that contains a project.xml"
    )
    parser.add_argument("--output", help="Directory the books are written to")
    parser.add_argument("--code", help="Project code prefixed to book titles")
    parser.add_argument("--overwrite", action="store_true", help="Replace existing books")
    parser.add_argument(
        "--include-references",
        action="store_true",
        help="Put each page's reference above its text"
    )
    parser.add_argument("--bloom", help="Path to the Bloom executable used for hydration")
    parser.add_argument("--no-hydrate", action="store_true", help="Skip Bloom hydration")
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Override log level from config"
    )

    args = parser.parse_args(argv)
    if args.projects_root and not Path(args.projects_root).is_dir():
        parser.error(f"Projects folder not found: {args.projects_root}")

    try:
        config = load_config(args.config)
    except ConfigError as e:
        print(f"ERROR: {e}")
        return 1

    if args.log_level:
        config.log_level = args.log_level
    if args.output:
        config.output_dir = args.output
    if args.overwrite:
        config.conversion.overwrite = True
    if args.include_references:
        config.conversion.include_references = True
    if args.bloom:
        config.hydration.bloom_path = args.bloom
    if args.no_hydrate:
        config.hydration.enabled = False

    log_level = getattr(logging, config.log_level.upper())
    log_file = Path(config.log_file) if config.log_file else None
    logger = setup_logger(log_file=log_file, level=log_level)

    projects = find_projects(args)
    if not projects:
        parser.error("No projects given; use --project or --projects-root")

    if args.code and len(projects) > 1:
        logger.warning("--code applies the same code to every project")

    output_dir = Path(config.output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)
    converter = ProjectConverter(config)
    tracker = ConversionTracker(Path(config.dashboard.path)) if config.dashboard.enabled else None

    results = []
    for project_dir in projects:
        logger.info("=" * 60)
        logger.info(f"Converting {project_dir}")
        logger.info("=" * 60)
        if tracker:
            tracker.start_conversion(project_dir.name)
        result = convert_project(converter, config, project_dir, output_dir, args.code)
        if tracker:
            tracker.complete_conversion(result)
        results.append(result)

    failed = [r for r in results if not r.success]
    print("\n" + "=" * 60)
    print("CONVERSION COMPLETE")
    print("=" * 60)
    print(f"Converted: {len(results) - len(failed)}")
    print(f"Failed:    {len(failed)}")
    for result in failed:
        print(f"  {result.project_name}: {result.error}")
    print()

    return 0 if not failed else 1


if __name__ == "__main__":
    sys.exit(main())
