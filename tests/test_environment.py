"""Test environment lookup and .env merging."""

from envi.environment import get_environ, load_env_file, lookup


class TestLookup:
    def test_bare_name(self):
        assert lookup({"FOO": "1"}, "FOO") == ("FOO", "1")

    def test_absent(self):
        assert lookup({}, "FOO") == ("FOO", None)

    def test_prefixed_preferred(self):
        environ = {"APP_FOO": "prefixed", "FOO": "bare"}
        assert lookup(environ, "FOO", "APP_") == ("APP_FOO", "prefixed")

    def test_prefix_falls_back_to_bare(self):
        assert lookup({"FOO": "bare"}, "FOO", "APP_") == ("FOO", "bare")

    def test_prefix_absent_reports_bare_name(self):
        assert lookup({}, "FOO", "APP_") == ("FOO", None)

    def test_empty_prefixed_value_still_counts(self):
        assert lookup({"APP_FOO": "", "FOO": "bare"}, "FOO", "APP_") == ("APP_FOO", "")


class TestGetEnviron:
    def test_default_is_process_environ(self):
        import os

        assert get_environ() is os.environ

    def test_passes_through_store(self):
        store = {}
        assert get_environ(store) is store


class TestLoadEnvFile:
    def test_loads_entries(self, tmp_path):
        # Arrange
        env_file = tmp_path / ".env"
        env_file.write_text("FOO=bar\n# comment\nNUM=12\nQUOTED=\"a b\"\n")
        environ = {}

        # Act
        added = load_env_file(env_file, environ)

        # Assert
        assert added == 3
        assert environ == {"FOO": "bar", "NUM": "12", "QUOTED": "a b"}

    def test_existing_variables_win(self, tmp_path):
        # Arrange
        env_file = tmp_path / ".env"
        env_file.write_text("FOO=from-file\nBAR=from-file\n")
        environ = {"FOO": "from-env"}

        # Act
        load_env_file(env_file, environ)

        # Assert
        assert environ == {"FOO": "from-env", "BAR": "from-file"}

    def test_missing_file(self, tmp_path):
        environ = {}
        assert load_env_file(tmp_path / "nope.env", environ) == 0
        assert environ == {}

    def test_skips_keys_without_value(self, tmp_path):
        # Arrange
        env_file = tmp_path / ".env"
        env_file.write_text("BARE_KEY\nFOO=1\n")
        environ = {}

        # Act
        load_env_file(env_file, environ)

        # Assert
        assert environ == {"FOO": "1"}

    def test_finds_dotenv_in_cwd(self, tmp_path, monkeypatch):
        # Arrange
        (tmp_path / ".env").write_text("FROM_CWD=yes\n")
        monkeypatch.chdir(tmp_path)
        environ = {}

        # Act
        load_env_file(environ=environ)

        # Assert
        assert environ == {"FROM_CWD": "yes"}

    def test_no_dotenv_found(self, isolated_cwd):
        environ = {}
        assert load_env_file(environ=environ) == 0
        assert environ == {}
