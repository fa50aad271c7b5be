"""Constants used in the project."""

from enum import Enum


class ExitCodes(Enum):
    """Exit codes for the program.

    Args:
        Enum (int): Exit codes for the program.
    """

    SUCCESS = 0
    FAILURE = 1


class MetadataShapes(Enum):
    """Wire shapes of the upstream loader metadata.

    Args:
        Enum (string): Shape identifiers used in logs.
    """

    VERSION_MAP = "version_map"
    GAME_VERSIONS = "game_versions"


class Constants:  # pylint: disable=too-few-public-methods
    """General constants used in the project.
    Data holder for configuration defaults; not intended to provide behavior.
    """

    METADATA_URL = "https://files.minecraftforge.net/net/minecraftforge/forge/maven-metadata.json"
    REPOSITORY_URL = "https://maven.minecraftforge.net/net/minecraftforge/forge"

    LOADER_GROUP = "net.minecraftforge"
    LOADER_ARTIFACT = "forge"
    INSTALLER_FILE_TEMPLATE = "{artifact}-{full}-installer.jar"
    # Tried in order; the second is the pre-1.13 layout without the -client suffix.
    PRIMARY_FILE_TEMPLATES = (
        "{artifact}-{full}-client.jar",
        "{artifact}-{full}.jar",
    )

    JAVA_BIN = "java"
    INSTALLER_ARGS = ("--makeOffline",)

    OUTPUT_DIR = "."
    WORK_DIR = "build"
    SUMMARY_FILE = "artifacts.txt"

    DESCRIPTOR_FILE = "version.json"
    MANIFEST_CANDIDATES = (
        "install_profile.json",
        "installer_profile.json",
        "profile.json",
    )
    LIBRARY_DIRS = ("libraries", "maven")
    DEFAULT_EXTENSION = "jar"

    LOG_FORMAT = "[%(levelname)s] %(message)s"
    LOG_FILE_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"
    REQUEST_TIMEOUT = 30  # Timeout in seconds for all HTTP requests
    DOWNLOAD_CHUNK_SIZE = 64 * 1024

    ENV_CONFIG = "FORGEPACK_CONFIG"
    ENV_LOG_LEVEL = "FORGEPACK_LOG_LEVEL"
    ENV_METADATA_URL = "FORGEPACK_METADATA_URL"
    ENV_REPOSITORY_URL = "FORGEPACK_REPOSITORY_URL"
    ENV_JAVA = "FORGEPACK_JAVA"
    ENV_OUTPUT_DIR = "FORGEPACK_OUTPUT_DIR"
    ENV_WORK_DIR = "FORGEPACK_WORK_DIR"
