#!/usr/bin/env python
"""Tablealign - align the columns of plain-text tables without editing them"""


import argparse
import logging
from importlib.metadata import version
import sys
from typing import Optional

from tablealign.aligner import TableAligner
from tablealign.document import StringDocument
from tablealign.metrics import MonospaceMetrics
from tablealign.preferences import LayoutConfig, PrefKey, preferences
from tablealign.preview import render
from tablealign.utilities import sing_plur

logger = logging.getLogger(__package__)

MESSAGE_FORMAT = "%(asctime)s: %(levelname)s - %(message)s"
DEBUG_FORMAT = "%(asctime)s: %(levelname)s - %(filename)s:%(lineno)d - %(message)s"
# Pixels per monospace cell when previewing
PREVIEW_UNIT = 8


class Tablealign:
    """Top level command line application."""

    def __init__(self, args: Optional[list[str]] = None) -> None:
        """Initialize Tablealign class.

        Parses arguments, sets up logging and loads preferences."""

        self.parse_args(args)

        if self.args.version:
            print(version("tablealign"))
            sys.exit(0)

        self.logging_init()
        logger.debug("Tablealign started")

        self.initialize_preferences()

    def parse_args(self, args: Optional[list[str]] = None) -> None:
        """Parse command line args"""
        if args is None:
            args = sys.argv[1:]
        parser = argparse.ArgumentParser(
            prog="tablealign",
            description="Show a file with its tables visually aligned",
        )
        parser.add_argument(
            "filename", nargs="?", help="Name of file to be aligned (default stdin)"
        )
        parser.add_argument(
            "--padding",
            type=int,
            help="Fixed padding added to every column, in pixels",
        )
        parser.add_argument(
            "--full-height-bar",
            action="store_true",
            help="Draw pipe delimiters as full-height bars",
        )
        parser.add_argument(
            "--dialect",
            choices=("markdown", "org"),
            help="Pipe table dialect when a table gives no hint",
        )
        parser.add_argument(
            "-p",
            "--prefsfile",
            help="Name of JSON prefs file",
        )
        parser.add_argument(
            "-d",
            "--debug",
            action="store_true",
            help="Run in debug mode",
        )
        parser.add_argument(
            "--version",
            action="store_true",
            help="Display the version of Tablealign",
        )
        self.args = parser.parse_args(args)

    def logging_init(self) -> None:
        """Set up console logger."""
        if self.args.debug:
            log_level = logging.DEBUG
            console_log_level = logging.DEBUG
            formatter = logging.Formatter(DEBUG_FORMAT, "%H:%M:%S")
        else:
            log_level = logging.INFO
            console_log_level = logging.WARNING
            formatter = logging.Formatter(MESSAGE_FORMAT, "%H:%M:%S")
        logger.setLevel(log_level)
        # Output to console
        console_handler = logging.StreamHandler()
        console_handler.setLevel(console_log_level)
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

    def initialize_preferences(self) -> None:
        """Load preferences file, then let command line options override it."""
        preferences.load(self.args.prefsfile)
        if self.args.padding is not None:
            preferences.set(PrefKey.TABLE_PADDING, self.args.padding)
        if self.args.full_height_bar:
            preferences.set(PrefKey.TABLE_FULL_HEIGHT_BAR, True)
        if self.args.dialect:
            preferences.set(PrefKey.TABLE_DEFAULT_DIALECT, self.args.dialect)

    def read_input(self) -> str:
        """Return text of the file named on the command line, or of stdin."""
        if self.args.filename:
            with open(self.args.filename, "r", encoding="utf-8") as fp:
                return fp.read()
        return sys.stdin.read()

    def run(self) -> int:
        """Align every table in the input and print the preview.

        Returns:
            Exit status: 0 on success, 1 if the input could not be read or
            any table could not be aligned.
        """
        try:
            text = self.read_input()
        except OSError as exc:
            logger.error(f"Unable to read {self.args.filename}: {exc}")
            return 1
        try:
            config = LayoutConfig.from_preferences(preferences)
        except ValueError as exc:
            logger.error(f"Invalid preferences: {exc}")
            return 1

        document = StringDocument(text)
        metrics = MonospaceMetrics(document, unit=PREVIEW_UNIT)
        aligner = TableAligner(document, metrics, config)
        result = aligner.align_region(0, document.length())
        logger.info(
            f"Aligned {sing_plur(len(result.tables), 'table')}, "
            f"{sing_plur(len(result.errors), 'error')}"
        )
        for error in result.errors:
            logger.error(
                f"Table at offset {error.table.start} left unaligned: {error.message}"
            )
        sys.stdout.write(render(document, PREVIEW_UNIT))
        return 1 if result.errors else 0


def main() -> None:
    """Main application function."""
    sys.exit(Tablealign().run())


if __name__ == "__main__":
    main()
