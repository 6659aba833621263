from __future__ import annotations

import argparse
import sys
from pathlib import Path

from dotenv import load_dotenv

from ..config.loader import DEFAULT_CONFIG_PATH, ConfigError, ReconcileConfig, load_config
from ..db.question_store import QuestionStore, QuestionStoreError, connect
from ..excel.reader import (
    MissingColumnsError,
    ResponseFileError,
    SheetHeaderError,
    read_question_bank,
    read_response_file,
)
from ..logging.init import log_summary, set_debug, setup_logging
from ..models.question import CanonicalQuestion
from ..services.orchestrator import ProcessingError, process_all, scan_response_files
from ..services.summary import render_summary_line

"""CLI entrypoint.

Flow:
- load .env (override) and the YAML config
- load the canonical questions (question bank file, else database by owner_id)
- reconcile every response export in source_directory, write JSON reports
- print the SUMMARY line, exit 0 / 2 (some files failed) / 1 (fatal)
"""

EXIT_SUCCESS_ALL = 0
EXIT_PARTIAL_FAILURE = 2
EXIT_FATAL = 1


class QuestionSourceError(Exception):
    """Raised when the canonical questions cannot be loaded."""


def _load_env_file(path: Path, override: bool = True) -> None:
    """Load .env; its values win over the inherited environment."""
    if path.exists():
        load_dotenv(dotenv_path=path, override=override)


def _parse_args(argv: list[str]) -> argparse.Namespace:
    p = argparse.ArgumentParser(
        prog="qreconcile",
        description="Reconcile questionnaire response exports against a question bank",
    )
    p.add_argument("--config", type=Path, default=DEFAULT_CONFIG_PATH, help="YAML config path")
    p.add_argument("--debug", action="store_true", help="Enable debug logging")
    p.add_argument(
        "--inspect-data", action="store_true", help="Print headers of each response file then exit"
    )
    return p.parse_args(argv)


def load_canonical_questions(cfg: ReconcileConfig) -> list[CanonicalQuestion]:
    """Question bank file when configured, database otherwise."""
    if cfg.question_bank:
        try:
            return read_question_bank(Path(cfg.question_bank))
        except (ResponseFileError, SheetHeaderError, MissingColumnsError) as e:
            raise QuestionSourceError(f"question bank: {e}") from e
    try:
        with connect(cfg.database) as cur:
            return QuestionStore(cur).fetch_canonical_questions(cfg.owner_id)
    except QuestionStoreError as e:
        raise QuestionSourceError(str(e)) from e


def _inspect_data(cfg: ReconcileConfig) -> int:
    try:
        files = scan_response_files(Path(cfg.source_directory))
    except ProcessingError as e:
        print(f"inspect: {e}")
        return EXIT_FATAL
    if not files:
        print("inspect: no response files")
        return EXIT_SUCCESS_ALL
    for f in files:
        print(f"FILE: {f.name}")
        try:
            sheet = read_response_file(f)
        except (ResponseFileError, SheetHeaderError) as e:
            print(f"  read_error: {e}")
            continue
        print(f"  cols={sheet.columns}")
        print(f"  questions={sheet.question_columns(cfg.standard_columns)}")
        print(f"  rows={len(sheet.rows)}")
    return EXIT_SUCCESS_ALL


def main(argv: list[str] | None = None) -> int:
    logger = setup_logging()

    # only read sys.argv when called without arguments (tests pass [])
    if argv is None:
        argv = sys.argv[1:]
    args = _parse_args(argv)
    _load_env_file(Path(".env"), override=True)

    try:
        cfg = load_config(args.config)
    except ConfigError as e:
        logger.error(f"config: {e}")
        return EXIT_FATAL

    if args.debug:
        set_debug(True)
        logger.debug("debug mode enabled")

    directory = Path(cfg.source_directory)
    if not directory.exists():
        logger.error(f"directory not found: {directory}")
        return EXIT_FATAL

    if args.inspect_data:
        return _inspect_data(cfg)

    try:
        canonical = load_canonical_questions(cfg)
    except QuestionSourceError as e:
        logger.error(f"questions: {e}")
        return EXIT_FATAL
    source = cfg.question_bank or f"owner {cfg.owner_id}"
    logger.info(f"Loaded {len(canonical)} questions from {source}")
    logger.info(f"Processing files from: {directory}")

    try:
        result = process_all(cfg, canonical)
    except ProcessingError as e:
        logger.error(f"processing: {e}")
        return EXIT_FATAL

    if result.error_log_path:
        logger.warning(f"errors written to {result.error_log_path}")

    total_files = result.success_files + result.failed_files
    summary_line = render_summary_line(total_files, result)
    # log_summary adds the "SUMMARY " label itself
    log_summary(summary_line[len("SUMMARY "):])

    if result.failed_files > 0:
        return EXIT_PARTIAL_FAILURE
    return EXIT_SUCCESS_ALL


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
