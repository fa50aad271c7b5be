"""Tests for dependency coordinate parsing and path resolution."""

import pytest

from errors import MalformedCoordinate
from resolution.coordinates import DependencyCoordinate, parse_coordinate, resolve_path


class TestResolvePath:
    """resolve_path() maps coordinates onto the repository layout."""

    def test_three_part_coordinate(self):
        assert resolve_path("net.example:lib:1.0") == "net/example/lib/1.0/lib-1.0.jar"

    def test_single_segment_group(self):
        assert resolve_path("junit:junit:4.13.2") == "junit/junit/4.13.2/junit-4.13.2.jar"

    def test_classifier_with_extension(self):
        path = resolve_path("de.oceanlabs.mcp:mcp_config:1.20.1-20230612.114412:mappings@zip")
        assert path == (
            "de/oceanlabs/mcp/mcp_config/1.20.1-20230612.114412/"
            "mcp_config-1.20.1-20230612.114412-mappings.zip"
        )

    def test_classifier_only_defaults_to_jar(self):
        assert resolve_path("g:a:v:cls").endswith("/a-v-cls.jar")

    def test_extension_only(self):
        assert resolve_path("g:a:v:@zip") == "g/a/v/a-v.zip"

    def test_minecraft_client_srg(self):
        path = resolve_path("net.minecraft:client:1.20.1-20230612.114412:srg")
        assert path == (
            "net/minecraft/client/1.20.1-20230612.114412/"
            "client-1.20.1-20230612.114412-srg.jar"
        )

    @pytest.mark.parametrize("bad", ["", "lib", "net.example:lib", "a:b"])
    def test_fewer_than_three_parts(self, bad):
        with pytest.raises(MalformedCoordinate):
            resolve_path(bad)

    def test_empty_required_part(self):
        with pytest.raises(MalformedCoordinate):
            resolve_path("net.example::1.0")


class TestParseCoordinate:
    """parse_coordinate() exposes the individual parts."""

    def test_parts(self):
        coord = parse_coordinate("net.example:lib:1.0:natives@tar.gz")
        assert coord == DependencyCoordinate(
            group="net.example",
            artifact="lib",
            version="1.0",
            classifier="natives",
            extension="tar.gz",
        )
        assert coord.filename == "lib-1.0-natives.tar.gz"

    def test_defaults(self):
        coord = parse_coordinate("net.example:lib:1.0")
        assert coord.classifier is None
        assert coord.extension == "jar"

    def test_whitespace_is_trimmed(self):
        assert parse_coordinate("  g:a:v \n").version == "v"
