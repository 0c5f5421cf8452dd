"""Tests for artifact discovery and classification."""

import zipfile
from pathlib import Path

import pytest

from build_system.buildsystem import gradle, maven
from build_system.core.exceptions import DiscoveryError
from build_system.models.build import ArtifactKind
from build_system.runner.locator import classify, locate_artifact, parse_manifest


class TestClassify:
    """Tests for artifact classification."""

    def test_executable_jar(self, temp_dir: Path, write_archive) -> None:
        """Test a jar naming a Main-Class is executable."""
        jar = write_archive(temp_dir / "app.jar", main_class="com.example.Main")

        assert classify(jar) is ArtifactKind.EXECUTABLE_JAR

    def test_spring_boot_start_class(self, temp_dir: Path) -> None:
        """Test a Start-Class also marks a launcher."""
        jar = temp_dir / "app.jar"

        with zipfile.ZipFile(jar, "w") as zf:
            zf.writestr(
                "META-INF/MANIFEST.MF",
                "Manifest-Version: 1.0\r\nStart-Class: com.example.App\r\n\r\n",
            )

        assert classify(jar) is ArtifactKind.EXECUTABLE_JAR

    def test_lowercase_attribute(self, temp_dir: Path) -> None:
        """Test attribute names are matched regardless of case."""
        jar = temp_dir / "app.jar"

        with zipfile.ZipFile(jar, "w") as zf:
            zf.writestr(
                "META-INF/MANIFEST.MF",
                "Manifest-Version: 1.0\r\nmain-class: com.example.Main\r\n\r\n",
            )

        assert classify(jar) is ArtifactKind.EXECUTABLE_JAR

    def test_plain_jar(self, temp_dir: Path, write_archive) -> None:
        """Test a jar without a launcher is plain despite its extension."""
        jar = write_archive(temp_dir / "library.jar")

        assert classify(jar) is ArtifactKind.PLAIN_JAR

    def test_jar_without_manifest(self, temp_dir: Path) -> None:
        """Test a jar with no manifest is plain."""
        jar = temp_dir / "bare.jar"
        with zipfile.ZipFile(jar, "w") as zf:
            zf.writestr("fixture-marker", "")

        assert classify(jar) is ArtifactKind.PLAIN_JAR

    def test_war(self, temp_dir: Path, write_archive) -> None:
        """Test a war is always exploded."""
        war = write_archive(temp_dir / "app.war")

        assert classify(war) is ArtifactKind.WAR

    def test_corrupt_archive(self, temp_dir: Path) -> None:
        """Test an unreadable jar raises DiscoveryError."""
        jar = temp_dir / "broken.jar"
        jar.write_text("not a zip")

        with pytest.raises(DiscoveryError, match="Unable to read"):
            classify(jar)


class TestParseManifest:
    """Tests for manifest parsing."""

    def test_continuation_lines(self) -> None:
        """Test wrapped values are joined."""
        text = "Manifest-Version: 1.0\r\nMain-Class: com.example.very.long\r\n .Main\r\n"

        assert parse_manifest(text)["main-class"] == "com.example.very.long.Main"

    def test_only_main_section(self) -> None:
        """Test per-entry sections are ignored."""
        text = "Manifest-Version: 1.0\n\nName: foo/\nMain-Class: Ignored\n"

        assert "main-class" not in parse_manifest(text)

    def test_keys_lowercased(self) -> None:
        """Test attribute names are normalized to lowercase."""
        text = "Manifest-Version: 1.0\nMAIN-CLASS: com.example.Main\n"

        manifest = parse_manifest(text)

        assert manifest == {"manifest-version": "1.0", "main-class": "com.example.Main"}


class TestLocateArtifact:
    """Tests for artifact discovery."""

    def test_gradle_artifact(self, temp_dir: Path, write_archive) -> None:
        """Test Gradle output is found in build/libs."""
        jar = write_archive(temp_dir / "build" / "libs" / "app.jar", main_class="Main")

        artifact = locate_artifact(gradle(temp_dir))

        assert artifact.path == jar
        assert artifact.kind is ArtifactKind.EXECUTABLE_JAR
        assert artifact.module is None

    def test_maven_plain_jar(self, temp_dir: Path, write_archive) -> None:
        """Test a single Maven jar is found in target."""
        jar = write_archive(temp_dir / "target" / "app.jar")

        artifact = locate_artifact(maven(temp_dir))

        assert artifact.path == jar
        assert artifact.kind is ArtifactKind.PLAIN_JAR

    def test_maven_war(self, temp_dir: Path, write_archive) -> None:
        """Test a Maven war is found in target."""
        war = write_archive(temp_dir / "target" / "app.war")

        assert locate_artifact(maven(temp_dir)).path == war

    def test_maven_module(self, temp_dir: Path, write_archive) -> None:
        """Test a module override scopes discovery to the module."""
        jar = write_archive(temp_dir / "test-module" / "target" / "app.jar")

        artifact = locate_artifact(maven(temp_dir), "test-module")

        assert artifact.path == jar
        assert artifact.module == "test-module"

    def test_maven_module_without_override(self, temp_dir: Path, write_archive) -> None:
        """Test a module artifact is not found without the override."""
        write_archive(temp_dir / "test-module" / "target" / "app.jar")

        with pytest.raises(DiscoveryError, match="No built artifact"):
            locate_artifact(maven(temp_dir))

    def test_no_artifact(self, temp_dir: Path) -> None:
        """Test zero candidates is a discovery error."""
        with pytest.raises(DiscoveryError) as exc_info:
            locate_artifact(gradle(temp_dir))

        assert exc_info.value.candidates == []
        assert exc_info.value.details["patterns"] == gradle(temp_dir).artifact_patterns()

    def test_multiple_artifacts(self, temp_dir: Path, write_archive) -> None:
        """Test several candidates is a discovery error, not a guess."""
        first = write_archive(temp_dir / "build" / "libs" / "app.jar", main_class="Main")
        second = write_archive(temp_dir / "build" / "libs" / "app-plain.jar")

        with pytest.raises(DiscoveryError, match="Multiple") as exc_info:
            locate_artifact(gradle(temp_dir))

        assert exc_info.value.candidates == sorted([str(first), str(second)])

    def test_jar_and_war(self, temp_dir: Path, write_archive) -> None:
        """Test a jar and a war together are ambiguous."""
        write_archive(temp_dir / "target" / "app.jar")
        write_archive(temp_dir / "target" / "app.war")

        with pytest.raises(DiscoveryError, match="Multiple"):
            locate_artifact(maven(temp_dir))

    def test_gradle_ignores_module(self, temp_dir: Path, write_archive) -> None:
        """Test a module override does not scope Gradle discovery."""
        jar = write_archive(temp_dir / "build" / "libs" / "app.jar")

        artifact = locate_artifact(gradle(temp_dir), "test-module")

        assert artifact.path == jar
        assert artifact.module is None
