"""
Test command-line options, validation and configuration defaults.
"""

import pytest
import yaml

from mediasort import __version__
from mediasort.config import Config


class TestValidation:

    def test_more_than_one_mode_is_rejected(self, cli_runner, source_dir, target_dir):
        result = cli_runner(source_dir, "--target", target_dir, "--dry-run", "--copy")

        assert result.exit_code == 2
        assert "not allowed with argument" in result.error

    def test_missing_target(self, cli_runner, source_dir, test_config_path):
        result = cli_runner(source_dir, config_path=test_config_path)

        assert result.exit_code == 1
        assert "No target folder supplied." in result.output

    def test_nonexistent_target(self, cli_runner, source_dir, tmp_path, create_test_files):
        source, = create_test_files(source_dir, [{"name": "IMG_20230701.jpg"}])

        result = cli_runner(source_dir, "--target", tmp_path / "nowhere")

        assert result.exit_code == 1
        assert "Target folder does not exist" in result.output
        assert source.exists()

    def test_nonexistent_source(self, cli_runner, tmp_path, target_dir):
        result = cli_runner(tmp_path / "nowhere", "-t", target_dir)

        assert result.exit_code == 1
        assert "Source directory does not exist" in result.output

    def test_unknown_conflict_mode(self, cli_runner, source_dir, target_dir):
        result = cli_runner(source_dir, "-t", target_dir, "-k", "newest")

        assert result.exit_code == 2
        assert "invalid choice" in result.error

    def test_unknown_timezone(self, cli_runner, source_dir, target_dir):
        result = cli_runner(source_dir, "-t", target_dir, "--tz", "Mars/Olympus_Mons")

        assert result.exit_code == 1
        assert "Unknown timezone" in result.output

    def test_version(self, cli_runner):
        result = cli_runner("--version")

        assert result.exit_code == 0
        assert result.output.strip() == __version__


class TestRuns:

    def test_move_is_default(self, cli_runner, source_dir, target_dir, create_test_files,
                             test_config_path):
        source, = create_test_files(source_dir, [{"name": "IMG_20230715_120000.jpg"}])

        result = cli_runner(source_dir, "-t", target_dir, config_path=test_config_path)

        assert result.exit_code == 0
        assert not source.exists()
        assert (target_dir / "2023" / "7" / source.name).exists()
        assert "Processing Plan" in result.output

    def test_copy(self, cli_runner, source_dir, target_dir, create_test_files, test_config_path):
        source, = create_test_files(source_dir, [{"name": "IMG_20230715_120000.jpg"}])

        result = cli_runner(source_dir, "--copy", "-t", target_dir, config_path=test_config_path)

        assert result.exit_code == 0
        assert source.exists()
        assert (target_dir / "2023" / "7" / source.name).exists()

    def test_dry_run(self, cli_runner, source_dir, target_dir, create_test_files,
                     test_config_path, tree_snapshot):
        create_test_files(source_dir, [{"name": "IMG_20230715_120000.jpg"}, {"name": "clip.mov"}])
        before = tree_snapshot(source_dir, target_dir)

        result = cli_runner(source_dir, "-d", "-s", "-t", target_dir, config_path=test_config_path)

        assert result.exit_code == 0
        assert tree_snapshot(source_dir, target_dir) == before
        assert list(target_dir.iterdir()) == []

    def test_file_creation_fallback_flag(self, cli_runner, source_dir, target_dir,
                                         create_test_files, test_config_path):
        from datetime import datetime
        source, = create_test_files(source_dir, [{"name": "holiday.jpg",
                                                  "mtime": datetime(2018, 6, 1, 12, 0)}])

        result = cli_runner(source_dir, "-s", "-t", target_dir, config_path=test_config_path)

        assert result.exit_code == 0
        assert (target_dir / "2018" / "6" / "holiday.jpg").exists()

    def test_closed_input_stops_cleanly(self, cli_runner, source_dir, target_dir,
                                        create_test_files, test_config_path, monkeypatch):
        from mediasort.prompts import ConsolePrompter

        def closed_stdin(self):
            raise EOFError

        monkeypatch.setattr(ConsolePrompter, "read", closed_stdin)
        source, = create_test_files(source_dir, [{"name": "holiday.jpg"}])

        result = cli_runner(source_dir, "-t", target_dir, config_path=test_config_path)

        assert result.exit_code == 1
        assert "Input closed" in result.output
        assert source.exists()

    def test_conflict_mode_both(self, cli_runner, source_dir, target_dir, create_test_files,
                                test_config_path):
        create_test_files(source_dir, [{"name": "IMG_20230715.jpg", "content": b"new"}])
        create_test_files(target_dir, [{"name": "2023/7/IMG_20230715.jpg", "content": b"older"}])

        result = cli_runner(source_dir, "-k", "both", "-t", target_dir,
                            config_path=test_config_path)

        assert result.exit_code == 0
        assert (target_dir / "2023" / "7" / "IMG_20230715_new.jpg").read_bytes() == b"new"


class TestConfiguration:

    def write_config(self, path, data):
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(yaml.safe_dump(data))

    def test_missing_config_gives_defaults(self, test_config_path):
        config = Config(config_path=test_config_path)

        assert config.get_target() is None
        assert config.get_conflict_mode() == "choose"
        assert config.get_timezone() is None
        assert not config.get_file_creation_fallback()
        assert not config.get_delete_skipped_duplicates()
        assert not config.get_include_unsupported()

    def test_invalid_config_is_ignored(self, test_config_path):
        test_config_path.parent.mkdir(parents=True)
        test_config_path.write_text("- just\n- a list\n")

        assert Config(config_path=test_config_path).data == {}

    def test_config_supplies_defaults(self, cli_runner, source_dir, target_dir,
                                      create_test_files, test_config_path):
        self.write_config(test_config_path, {
            "target": str(target_dir),
            "conflict_mode": "target",
            "delete_skipped_duplicates": True,
        })
        source, = create_test_files(source_dir, [{"name": "IMG_20230715.jpg", "content": b"new"}])
        existing, = create_test_files(target_dir, [{"name": "2023/7/IMG_20230715.jpg",
                                                    "content": b"older"}])

        result = cli_runner(source_dir, config_path=test_config_path)

        assert result.exit_code == 0
        assert existing.read_bytes() == b"older"
        assert not source.exists()

    def test_flags_override_config(self, cli_runner, source_dir, target_dir, create_test_files,
                                   test_config_path):
        self.write_config(test_config_path, {"target": str(target_dir), "conflict_mode": "target"})
        create_test_files(source_dir, [{"name": "IMG_20230715.jpg", "content": b"new"}])
        existing, = create_test_files(target_dir, [{"name": "2023/7/IMG_20230715.jpg",
                                                    "content": b"older"}])

        result = cli_runner(source_dir, "-k", "source", config_path=test_config_path)

        assert result.exit_code == 0
        assert existing.read_bytes() == b"new"

    def test_invalid_conflict_mode_in_config(self, cli_runner, source_dir, target_dir,
                                             test_config_path):
        self.write_config(test_config_path, {"conflict_mode": "newest"})

        result = cli_runner(source_dir, "-t", target_dir, config_path=test_config_path)

        assert result.exit_code == 1
        assert "Unknown conflict mode" in result.output
