"""forgepack - build offline Forge client jars from the official installer.

Resolves a (Minecraft, Forge) version pair from the Forge metadata, drives the
installer in offline mode and collects the client jar, its version.json and
the auxiliary data files into <output-dir>/<mc>-<forge>/.

Returns:
    int: Exit code
"""
import logging
import sys

from args import parse_args
from assembly.assembler import ArtifactAssembler
from cli_config import load_settings
from common.logging_utils import add_file_handler, configure_logging, extra_context, is_debug_enabled
from constants import ExitCodes
from errors import ForgepackError
from versioning.metadata import fetch_metadata
from versioning.selector import select_version, selection_mode
from versioning.models import SelectionMode

logger = logging.getLogger(__name__)


def write_summary(path, artifact_path, pair):
    """Write the one-line result summary: '<artifact> <mc> <forge>'.

    Args:
        path (str): Summary file path; overwritten on every run.
        artifact_path (str): Path of the produced client jar.
        pair (VersionPair): The version pair that was built.
    """
    with open(path, "w", encoding="utf-8") as file:
        file.write(f"{artifact_path} {pair.base_version} {pair.loader_version}\n")
    logging.info("Summary written to %s", path)


def run(args):
    """Resolve, build and summarize; raises ForgepackError on fatal failure.

    Returns:
        BuildResult: The result of the build.
    """
    settings = load_settings(args)

    filter_base = args.MC_VERSION or None
    loader_version = args.FORGE_VERSION or None
    mode = selection_mode(filter_base, loader_version, args.LATEST)

    metadata = None
    if mode != SelectionMode.EXPLICIT:
        metadata = fetch_metadata(settings.metadata_url, timeout=settings.request_timeout)
    pair = select_version(metadata, filter_base, loader_version, args.LATEST)

    logging.info("==== Building %s ====", pair)
    assembler = ArtifactAssembler.from_settings(settings)
    result = assembler.build(pair)

    try:
        write_summary(settings.summary_file, result.artifact_path, pair)
    except OSError as e:
        raise ForgepackError(f"Summary file couldn't be written to disk: {e}") from e
    logging.info("Build finished: %s %s", pair.base_version, pair.loader_version)
    return result


def main(argv=None):
    """Main function of the program."""
    args = parse_args(argv)
    configure_logging(args.LOG_LEVEL)
    if args.LOG_FILE:
        try:
            add_file_handler(args.LOG_FILE)
        except OSError as e:
            logging.warning("Cannot log to file %s: %s", args.LOG_FILE, e)

    if is_debug_enabled(logger):
        logger.debug(
            "CLI start",
            extra=extra_context(event="function_entry", component="cli", action="main")
        )

    try:
        run(args)
    except ForgepackError as e:
        logging.error("Build failed: %s", e)
        sys.exit(ExitCodes.FAILURE.value)
    sys.exit(ExitCodes.SUCCESS.value)


if __name__ == "__main__":
    main()
