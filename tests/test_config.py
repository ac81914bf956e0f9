import pytest

from jobs_monitor.config import ConfigManager, UsageError


def build(**options):
    return ConfigManager().build(**options)


def test_defaults():
    config = build(directories=['/tmp/jobs'])

    assert config.directories == ('/tmp/jobs',)
    assert config.warning == 26
    assert config.critical == 52
    assert config.time_unit == 'hours'
    assert config.multiplier == 3600
    assert config.unit_abbreviation == 'h'
    assert config.warning_seconds == 26 * 3600
    assert config.critical_seconds == 52 * 3600
    assert config.verbose is False
    assert config.content_pattern is None
    assert config.excluded_names == frozenset()


def test_full_options():
    config = build(directories=['/a', '/b'], warning='5', critical='10', time_unit='minutes',
                   verbose=True, pattern='^OK', excludes=['.lock', 'tmp'])

    assert config.directories == ('/a', '/b')
    assert config.warning_seconds == 300
    assert config.critical_seconds == 600
    assert config.content_pattern.search('OK done')
    assert config.excluded_names == frozenset({'.lock', 'tmp'})


@pytest.mark.parametrize('options,message', [
    (dict(), "No directory provided."),
    (dict(directories=['/a'], warning='-1'), "Warning time must be a non-negative integer."),
    (dict(directories=['/a'], warning='1.5'), "Warning time must be a non-negative integer."),
    (dict(directories=['/a'], critical='abc'), "Critical time must be a non-negative integer."),
    (dict(directories=['/a'], time_unit='weeks'),
     "Time unit must be one of seconds, minutes, hours, days."),
    (dict(directories=['/a'], warning='10', critical='5'),
     "Critical time must be greater than warning time."),
    (dict(directories=['/a'], warning='5', critical='5'),
     "Critical time must be greater than warning time."),
])
def test_validation_errors(options, message):
    with pytest.raises(UsageError) as excinfo:
        build(**options)

    assert str(excinfo.value) == message


def test_directory_checked_before_thresholds():
    with pytest.raises(UsageError, match="No directory provided."):
        build(warning='x', critical='y', time_unit='weeks')


def test_invalid_pattern():
    with pytest.raises(UsageError, match="Invalid pattern"):
        build(directories=['/a'], pattern='(')


def test_zero_warning_is_valid():
    assert build(directories=['/a'], warning='0', critical='1').warning == 0
