"""
Unit tests for settings and workspace construction.
"""

from pathlib import Path

from config import Settings
from src.storage import DirectoryBlobStore, Workspace


class TestSettings:
    def test_directories_derive_from_data_dir(self, tmp_path):
        settings = Settings(data_dir=tmp_path, _env_file=None)

        assert settings.surveys_path == tmp_path / "surveys"
        assert settings.survey_responses_path == tmp_path / "responses"
        assert settings.tests_path == tmp_path / "tests"
        assert settings.test_responses_path == tmp_path / "test_responses"

    def test_explicit_directory_wins(self, tmp_path):
        settings = Settings(data_dir=tmp_path, tests_dir=Path("/srv/exams"), _env_file=None)

        assert settings.tests_path == Path("/srv/exams")

    def test_environment_override(self, monkeypatch, tmp_path):
        monkeypatch.setenv("DATA_DIR", str(tmp_path))
        monkeypatch.setenv("RESPONSE_EXTENSION", ".answers")

        settings = Settings(_env_file=None)

        assert settings.data_dir == tmp_path
        assert settings.response_extension == ".answers"


class TestWorkspace:
    def test_from_settings(self, tmp_path):
        workspace = Workspace.from_settings(
            Settings(data_dir=tmp_path, collection_extension=".survey", _env_file=None)
        )

        assert isinstance(workspace.tests.blobs, DirectoryBlobStore)
        assert workspace.tests.blobs.directory == tmp_path / "tests"
        assert workspace.collection_extension == ".survey"
