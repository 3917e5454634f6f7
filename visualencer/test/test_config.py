import pytest

from visualencer.config import CompilerOptions, load_options


ENV_KEYS = ("VISUALENCER_WRAP", "VISUALENCER_SEPARATE_ENTRIES", "VISUALENCER_LOG_LEVEL")


class TestLoadOptions:

    def test_defaults(self):
        assert load_options(environ={}) == CompilerOptions(wrap=True, separate_entries=True, log_level="WARNING")

    def test_environment_overrides(self):
        options = load_options(environ={
            "VISUALENCER_WRAP": "0",
            "VISUALENCER_SEPARATE_ENTRIES": "no",
            "VISUALENCER_LOG_LEVEL": " debug ",
        })
        assert options == CompilerOptions(wrap=False, separate_entries=False, log_level="DEBUG")

    def test_unrecognised_flag_keeps_default(self):
        assert load_options(environ={"VISUALENCER_WRAP": "maybe"}).wrap is True

    @pytest.fixture
    def clean_env(self, monkeypatch):
        """Remove the option variables, restoring whatever the .env load adds."""
        for key in ENV_KEYS:
            monkeypatch.setenv(key, "")
            monkeypatch.delenv(key)
        return monkeypatch

    def test_reads_env_file(self, tmp_path, clean_env):
        env_file = tmp_path / ".env"
        env_file.write_text("VISUALENCER_WRAP=false\nVISUALENCER_LOG_LEVEL=info\n", encoding="utf-8")
        options = load_options(env_file)
        assert options.wrap is False
        assert options.separate_entries is True
        assert options.log_level == "INFO"

    def test_process_environment_wins_over_env_file(self, tmp_path, clean_env):
        env_file = tmp_path / ".env"
        env_file.write_text("VISUALENCER_WRAP=false\n", encoding="utf-8")
        clean_env.setenv("VISUALENCER_WRAP", "true")
        assert load_options(env_file).wrap is True
