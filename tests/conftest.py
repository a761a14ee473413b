"""Shared fixtures for DCIM extraction tests."""

import pytest
import yaml

from dcim_extractor.config import Config, RunConfig


@pytest.fixture
def mount_root(tmp_path):
    """Empty device mount with the DCIM and mutations roots in place."""
    root = tmp_path / 'mount'
    (root / 'DCIM').mkdir(parents=True)
    (root / 'PhotoData' / 'Mutations' / 'DCIM').mkdir(parents=True)
    return root


@pytest.fixture
def target_dir(tmp_path):
    target = tmp_path / 'target'
    target.mkdir()
    return target


@pytest.fixture
def create_mount_files(mount_root):
    """Factory fixture: create files under the mount with given content."""

    def _create(*relative_paths, content=b'media-content'):
        created = []
        for relative_path in relative_paths:
            full_path = mount_root / relative_path
            full_path.parent.mkdir(parents=True, exist_ok=True)
            full_path.write_bytes(content)
            created.append(full_path)
        return created[0] if len(created) == 1 else created

    return _create


@pytest.fixture
def create_render(mount_root):
    """Factory fixture: create an edited render for an asset folder."""

    def _create(media_dir, asset, ext='jpg', content=b'rendered'):
        folder = mount_root / 'PhotoData' / 'Mutations' / 'DCIM' / media_dir / asset
        render = folder / 'Adjustments' / f'FullSizeRender.{ext}'
        render.parent.mkdir(parents=True, exist_ok=True)
        render.write_bytes(content)
        return render

    return _create


@pytest.fixture
def make_run_config(mount_root, target_dir):
    """Factory fixture: a validated RunConfig for the temp mount and target."""

    def _make(delete=False, dry_run=False, target=None):
        return RunConfig(
            mount=str(mount_root),
            target=str(target or target_dir),
            delete=delete,
            dry_run=dry_run,
        ).validated()

    return _make


@pytest.fixture
def sample_config(tmp_path):
    """Create a Config backed by a temp config file."""
    config_data = {
        'extraction': {
            'default_target': str(tmp_path / 'photos' / '{date}-phone'),
            'dry_run': False,
            'delete': False,
            'media_dir_suffix': 'APPLE',
            'render_extensions': ['jpg', 'mov'],
        },
        'safety': {
            'min_free_space_gb': 0,
        },
        'logging': {
            'level': 'DEBUG',
        },
    }

    config_path = tmp_path / 'config.yml'
    with open(config_path, 'w') as f:
        yaml.dump(config_data, f)

    return Config(str(config_path))
