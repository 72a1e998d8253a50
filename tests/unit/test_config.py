"""Tests for configuration handling."""

import pytest
from sprig.core.config import Config, split_key
from sprig.core.hash import DEFAULT_COMMIT_ID_LENGTH


@pytest.fixture
def config(tmp_path):
    return Config(tmp_path / 'config')


def test_repo_overrides_global(config, monkeypatch):
    monkeypatch.delenv('SPRIG_USER_NAME')
    config.set('user', 'name', 'Global', global_config=True)
    config.set('user', 'name', 'Local')
    assert Config(config.repo_config_path).get('user', 'name') == 'Local'


def test_environment_overrides_files(config, monkeypatch):
    config.set('core', 'commitidlength', '8')
    monkeypatch.setenv('SPRIG_CORE_COMMITIDLENGTH', '12')
    assert config.commit_id_length == 12


def test_defaults(config):
    assert config.commit_id_length == DEFAULT_COMMIT_ID_LENGTH
    assert config.hash_algorithm == 'sha1'
    assert config.get('missing', 'key', 'fallback') == 'fallback'


def test_get_int_rejects_garbage(config):
    config.set('core', 'commitidlength', 'six')
    with pytest.raises(ValueError):
        Config(config.repo_config_path).commit_id_length


def test_author(config, monkeypatch):
    assert config.get_author() == 'Test User <test@example.com>'
    monkeypatch.delenv('SPRIG_USER_EMAIL')
    assert config.get_author() == 'Test User'


def test_list_all(config):
    config.set('user', 'name', 'Global', global_config=True)
    config.set('core', 'commitidlength', '40')
    values = Config(config.repo_config_path).list_all()
    assert values['user']['name'] == 'Global'
    assert values['core']['commitidlength'] == '40'


def test_set_without_repository():
    with pytest.raises(ValueError):
        Config().set('user', 'name', 'x')


def test_split_key():
    assert split_key('user.name') == ('user', 'name')
    with pytest.raises(ValueError):
        split_key('name')
