import logging
import textwrap

import pytest

from container_lib.bootstrap import Config, configure_container, create_engine, use_engine
from container_lib.components import (
    ConfigError,
    KernelEngine,
    Lifecycle,
    ObjectContainer,
    RegistrationTypeMismatchError,
    get_container,
    has_container,
)
from container_lib.config import import_ref, load_settings, parse_settings
from tests.helpers import SHARED_LOGGER, Clock, ConsoleLogger, FileLogger, Logger


def _write(tmp_path, text):
    p = tmp_path / 'container.yml'
    p.write_text(textwrap.dedent(text), encoding='utf-8')
    return p


def test_load_settings_defaults_without_path():
    s = load_settings(None)
    assert s.engine == 'kernel'
    assert s.components == []
    assert s.log_level is None


def test_load_settings_missing_file(tmp_path):
    with pytest.raises(ConfigError):
        load_settings(tmp_path / 'nope.yml')


def test_load_settings_invalid_yaml(tmp_path):
    p = _write(tmp_path, "components: [unclosed\n")
    with pytest.raises(ConfigError):
        load_settings(p)


def test_parse_settings_rejects_non_mapping():
    with pytest.raises(ConfigError):
        parse_settings(['a'])


def test_parse_settings_rejects_two_providers():
    with pytest.raises(ConfigError):
        parse_settings({'components': [{
            'service': 'tests.helpers:Logger',
            'implementation': 'tests.helpers:ConsoleLogger',
            'instance': 'tests.helpers:SHARED_LOGGER',
        }]})


def test_parse_settings_lifecycle():
    s = parse_settings({'components': [{'service': 'tests.helpers:ConsoleLogger', 'lifecycle': 'transient'}]})
    assert s.components[0].lifecycle is Lifecycle.TRANSIENT


def test_import_ref_forms():
    assert import_ref('tests.helpers:Logger') is Logger
    assert import_ref('tests.helpers.FileLogger') is FileLogger
    with pytest.raises(ConfigError):
        import_ref('Logger')
    with pytest.raises(ConfigError):
        import_ref('tests.no_such_module:Thing')
    with pytest.raises(ConfigError):
        import_ref('tests.helpers:NoSuchThing')


def test_configure_container_from_yaml(tmp_path):
    p = _write(tmp_path, """
        log_level: DEBUG
        engine: kernel
        components:
          - service: tests.helpers:Logger
            implementation: tests.helpers:ConsoleLogger
          - service: tests.helpers:Logger
            implementation: tests.helpers:FileLogger
            name: file
            lifecycle: transient
          - service: tests.helpers:Logger
            instance: tests.helpers:SHARED_LOGGER
            name: shared
          - service: tests.helpers:Clock
            implementation: tests.helpers:FixedClock
          - service: tests.helpers:Greeter
            lifecycle: transient
          - service: tests.helpers:Logger
            factory: tests.helpers:make_console_logger
            name: made
    """)
    c = configure_container(Config(config_path=p))
    assert get_container() is c
    assert isinstance(c.resolve(Logger), ConsoleLogger)
    assert c.resolve(Logger) is c.resolve(Logger)
    a = c.resolve_named('file', Logger)
    assert isinstance(a, FileLogger) and a is not c.resolve_named('file', Logger)
    assert c.resolve_named('shared', Logger) is SHARED_LOGGER
    assert c.resolve(Clock).now() == 42.0
    assert isinstance(c.resolve_named('made', Logger), ConsoleLogger)
    from tests.helpers import Greeter
    assert c.resolve(Greeter).logger is c.resolve(Logger)


def test_configure_container_without_install():
    c = configure_container(Config(install=False))
    assert isinstance(c, ObjectContainer)
    assert has_container() is False


def test_configure_container_rejects_bad_component(tmp_path):
    p = _write(tmp_path, """
        components:
          - service: tests.helpers:Clock
            implementation: tests.helpers:NotALogger
    """)
    with pytest.raises(RegistrationTypeMismatchError):
        configure_container(Config(config_path=p))
    assert has_container() is False


def test_unknown_engine(tmp_path):
    with pytest.raises(ConfigError):
        create_engine('windsor')
    with pytest.raises(ConfigError):
        configure_container(Config(engine='windsor'))


def test_use_engine_installs_container():
    engine = KernelEngine()
    c = use_engine(engine)
    assert c.engine is engine
    assert get_container() is c


def test_configure_logging_from_yaml(tmp_path):
    p = _write(tmp_path, "log_level: DEBUG\n")
    root = logging.getLogger()
    saved_level, saved_handlers = root.level, root.handlers[:]
    try:
        configure_container(Config(config_path=p, configure_logs=True, install=False))
        assert root.level == logging.DEBUG
    finally:
        for h in root.handlers[:]:
            root.removeHandler(h)
        for h in saved_handlers:
            root.addHandler(h)
        root.setLevel(saved_level)
