"""Tests for environment-driven configuration loading."""

import pytest

from coversort.config import coerce_scalar, deep_merge, load_config, load_typed_config


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    monkeypatch.delenv('CSORT_ENABLE_DOTENV', raising=False)
    for key in ('CSORT__PROFILING__WORKERS', 'CSORT__SORTING__REFERENCE_L',
                'CSORT__SPOTIFY__CLIENT_TOKEN', 'CSORT__PROFILING__SKIP_UNDECODABLE'):
        monkeypatch.delenv(key, raising=False)


def test_defaults():
    cfg = load_config()
    assert cfg['profiling']['workers'] == 4
    assert cfg['spotify']['cover_index'] == 1
    assert cfg['sorting']['reference_l'] == 100.0


def test_env_override(monkeypatch):
    monkeypatch.setenv('CSORT__PROFILING__WORKERS', '8')
    monkeypatch.setenv('CSORT__PROFILING__SKIP_UNDECODABLE', 'true')
    monkeypatch.setenv('CSORT__SORTING__REFERENCE_L', '10000')
    monkeypatch.setenv('CSORT__SPOTIFY__CLIENT_TOKEN', 'abc')
    cfg = load_config()
    assert cfg['profiling']['workers'] == 8
    assert cfg['profiling']['skip_undecodable'] is True
    assert cfg['sorting']['reference_l'] == 10000
    assert cfg['spotify']['client_token'] == 'abc'


def test_overrides_win(monkeypatch):
    monkeypatch.setenv('CSORT__PROFILING__WORKERS', '8')
    cfg = load_config({'profiling': {'workers': 2}})
    assert cfg['profiling']['workers'] == 2
    assert cfg['profiling']['skip_undecodable'] is False


def test_dotenv_loaded_when_enabled(monkeypatch, tmp_path):
    (tmp_path / '.env').write_text('CSORT__PROFILING__WORKERS=3  # inline comment\nOTHER=1\n', encoding='utf-8')
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv('CSORT_ENABLE_DOTENV', '1')
    assert load_config()['profiling']['workers'] == 3


def test_dotenv_skipped_under_pytest(monkeypatch, tmp_path):
    (tmp_path / '.env').write_text('CSORT__PROFILING__WORKERS=3\n', encoding='utf-8')
    monkeypatch.chdir(tmp_path)
    assert load_config()['profiling']['workers'] == 4


def test_typed_config(monkeypatch):
    monkeypatch.setenv('CSORT__PROFILING__WORKERS', '1')
    cfg = load_typed_config()
    assert cfg.profiling.workers == 1


def test_deep_merge_does_not_mutate():
    a = {'x': {'y': 1, 'z': 2}}
    merged = deep_merge(a, {'x': {'y': 5}})
    assert merged == {'x': {'y': 5, 'z': 2}}
    assert a == {'x': {'y': 1, 'z': 2}}


@pytest.mark.parametrize("raw, expected", [
    ('true', True), ('No', False), ('12', 12), ('-3', -3), ('1.5', 1.5),
    ('[1, 2]', [1, 2]), ('{"a": 1}', {'a': 1}), ('WebPlayer', 'WebPlayer'),
])
def test_coerce_scalar(raw, expected):
    assert coerce_scalar(raw) == expected
