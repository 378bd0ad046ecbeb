import pytest

from schemautils.schemaformat import build_string, detect_format


@pytest.mark.parametrize('text', [
    '2021-09-15',
    '2021-09-15T12:34:56',
    '2021-09-15T12:34:56Z',
    '2021-09-15T12:34:56.789Z',
    '2021-09-15T12:34:56+08:00',
    '2021-09-15T12:34:56.123-05:30',
])
def test_date_time(text):
    assert detect_format(text) == 'date-time'


@pytest.mark.parametrize('text', [
    '2021-9-15',
    '2021-09-15 12:34:56',
    '2021-09-15T12:34',
    '2021-09-15\n',
])
def test_not_date_time(text):
    assert detect_format(text) != 'date-time'


def test_email():
    assert detect_format('john.doe+tag@example.com') == 'email'
    assert detect_format('test@example') is None
    assert detect_format('te st@example.com') is None


def test_uri():
    assert detect_format('https://example.com') == 'uri'
    assert detect_format('http://example.com/path?q=1#top') == 'uri'
    assert detect_format('ftp://files.example.com/a.txt') == 'uri'
    assert detect_format('mailto:someone@example.com') is None
    assert detect_format('https://') is None
    assert detect_format('https://exa mple.com') is None


def test_uuid():
    assert detect_format('123e4567-e89b-12d3-a456-426614174000') == 'uuid'
    assert detect_format('123E4567-E89B-42D3-A456-426614174000') == 'uuid'
    # 版本位为 0, 变体位为 c
    assert detect_format('123e4567-e89b-02d3-a456-426614174000') is None
    assert detect_format('123e4567-e89b-12d3-c456-426614174000') is None


def test_plain_string():
    assert detect_format('just a string') is None
    assert detect_format('') is None


def test_build_string():
    assert build_string('https://example.com') == {'type': 'string', 'format': 'uri'}
    assert build_string('https://example.com', detect=False) == {'type': 'string'}
    assert build_string('hello') == {'type': 'string'}
