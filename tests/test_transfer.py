"""Tests for non-clobbering copy/move."""

import errno
from unittest.mock import patch

import pytest

from dcim_extractor.errors import TransferFailed
from dcim_extractor.transfer import TransferExecutor


@pytest.fixture
def source_file(tmp_path):
    src = tmp_path / 'IMG_0001.JPG'
    src.write_bytes(b'original photo')
    return src


class TestCopy:

    def test_copy_keeps_source(self, make_run_config, source_file, target_dir):
        executor = TransferExecutor(make_run_config())
        dst = target_dir / 'IMG_0001.JPG'

        record = executor.transfer(str(source_file), str(dst))

        assert record.performed
        assert record.mode == 'cp'
        assert dst.read_bytes() == b'original photo'
        assert source_file.exists()

    def test_copy_refuses_existing_destination(self, make_run_config, source_file, target_dir):
        dst = target_dir / 'IMG_0001.JPG'
        dst.write_bytes(b'already here')
        executor = TransferExecutor(make_run_config())

        with pytest.raises(TransferFailed, match='not replacing') as exc_info:
            executor.transfer(str(source_file), str(dst))

        assert dst.read_bytes() == b'already here'
        assert exc_info.value.destination == str(dst)
        assert executor.operations == []

    def test_missing_source_leaves_no_partial_file(self, make_run_config, tmp_path, target_dir):
        executor = TransferExecutor(make_run_config())
        dst = target_dir / 'gone.JPG'

        with pytest.raises(TransferFailed):
            executor.transfer(str(tmp_path / 'gone.JPG'), str(dst))

        assert not dst.exists()

    def test_failed_copy_removes_partial_file(self, make_run_config, source_file, target_dir):
        executor = TransferExecutor(make_run_config())
        dst = target_dir / 'IMG_0001.JPG'

        with patch('dcim_extractor.transfer.shutil.copyfileobj',
                   side_effect=OSError(errno.ENOSPC, 'No space left on device')):
            with pytest.raises(TransferFailed, match='No space left') as exc_info:
                executor.transfer(str(source_file), str(dst))

        assert not dst.exists()
        assert 'No space left' in exc_info.value.output


class TestMove:

    def test_move_removes_source(self, make_run_config, source_file, target_dir):
        executor = TransferExecutor(make_run_config(delete=True))
        dst = target_dir / 'IMG_0001.JPG'

        record = executor.transfer(str(source_file), str(dst))

        assert record.mode == 'mv'
        assert dst.read_bytes() == b'original photo'
        assert not source_file.exists()

    def test_move_refuses_existing_destination(self, make_run_config, source_file, target_dir):
        dst = target_dir / 'IMG_0001.JPG'
        dst.write_bytes(b'already here')
        executor = TransferExecutor(make_run_config(delete=True))

        with pytest.raises(TransferFailed):
            executor.transfer(str(source_file), str(dst))

        assert source_file.exists()
        assert dst.read_bytes() == b'already here'

    def test_move_across_devices_falls_back_to_copy(self, make_run_config, source_file, target_dir):
        executor = TransferExecutor(make_run_config(delete=True))
        dst = target_dir / 'IMG_0001.JPG'

        with patch('dcim_extractor.transfer.os.link',
                   side_effect=OSError(errno.EXDEV, 'Invalid cross-device link')):
            executor.transfer(str(source_file), str(dst))

        assert dst.read_bytes() == b'original photo'
        assert not source_file.exists()


class TestDryRun:

    def test_dry_run_reports_without_touching_files(self, make_run_config, source_file, target_dir):
        reported = []
        executor = TransferExecutor(make_run_config(dry_run=True), reporter=reported.append)
        dst = target_dir / 'IMG_0001.JPG'

        record = executor.transfer(str(source_file), str(dst))

        assert not record.performed
        assert reported == [f"cp --no-clobber {source_file} {dst}"]
        assert not dst.exists()
        assert source_file.exists()
        assert str(dst) in executor.destinations

    def test_dry_run_move_uses_mv_keyword(self, make_run_config, source_file, target_dir):
        reported = []
        executor = TransferExecutor(make_run_config(delete=True, dry_run=True), reporter=reported.append)

        executor.transfer(str(source_file), str(target_dir / 'IMG_0001.JPG'))

        assert reported[0].startswith('mv --no-clobber ')
        assert source_file.exists()

    def test_dry_run_does_not_fail_on_existing_destination(self, make_run_config, source_file, target_dir):
        dst = target_dir / 'IMG_0001.JPG'
        dst.write_bytes(b'already here')
        executor = TransferExecutor(make_run_config(dry_run=True), reporter=lambda line: None)

        executor.transfer(str(source_file), str(dst))

        assert dst.read_bytes() == b'already here'
        assert len(executor.operations) == 1
