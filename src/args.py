"""Argument parsing functionality for forgepack."""

import argparse


def build_parser():
    """Build the argument parser for the forgepack command."""
    parser = argparse.ArgumentParser(
        prog="forgepack",
        description=(
            "forgepack - build offline Forge client jars from the official installer"
        ),
        add_help=True,
    )

    parser.add_argument("--latest",
                        dest="LATEST",
                        help="Build the latest Forge version (of the --mc version, or of the newest Minecraft)",
                        action="store_true")
    parser.add_argument("--mc",
                        dest="MC_VERSION",
                        help="Minecraft version, e.g. 1.20.1",
                        action="store",
                        type=str)
    parser.add_argument("--forge",
                        dest="FORGE_VERSION",
                        help="Explicit Forge version to build together with --mc, e.g. 47.1.0",
                        action="store",
                        type=str)

    parser.add_argument("-o", "--output-dir",
                        dest="OUTPUT_DIR",
                        help="Directory receiving <mc>-<forge>/ output folders (default: current directory)",
                        action="store",
                        type=str)
    parser.add_argument("-w", "--work-dir",
                        dest="WORK_DIR",
                        help="Directory for transient build workspaces (default: build)",
                        action="store",
                        type=str)
    parser.add_argument("-s", "--summary-file",
                        dest="SUMMARY_FILE",
                        help="Result summary file (default: artifacts.txt)",
                        action="store",
                        type=str)
    parser.add_argument("--java",
                        dest="JAVA",
                        help="Java executable used to run the installer",
                        action="store",
                        type=str)
    parser.add_argument("--metadata-url",
                        dest="METADATA_URL",
                        help="Override the Forge metadata URL",
                        action="store",
                        type=str)
    parser.add_argument("--repository-url",
                        dest="REPOSITORY_URL",
                        help="Override the Forge Maven repository base URL",
                        action="store",
                        type=str)

    parser.add_argument("-c", "--config",
                        dest="CONFIG",
                        help="Path to configuration file (YAML, YML, or JSON)",
                        action="store",
                        type=str)
    parser.add_argument("--loglevel",
                        dest="LOG_LEVEL",
                        help="Set the logging level (default: FORGEPACK_LOG_LEVEL or INFO)",
                        action="store",
                        type=str,
                        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'])
    parser.add_argument("--logfile",
                        dest="LOG_FILE",
                        help="Log output file",
                        action="store",
                        type=str)
    return parser


def parse_args(argv=None):
    """Parses the arguments passed to the program."""
    return build_parser().parse_args(argv)
