from fastapi import Depends, FastAPI, Request
from starlette.testclient import TestClient

from container_lib.components import Lifecycle, ObjectContainer
from container_lib.services import provide, resolve_optional_service, resolve_service
from tests.helpers import ConsoleLogger, Exploding, FileLogger, Logger, register_service_on_client


def _make_app(container=None):
    app = FastAPI()
    if container is not None:
        app.state.container = container

    @app.get('/log')
    def log(logger: Logger = Depends(provide(Logger))):
        logger.log('hit')
        return {'type': type(logger).__name__, 'id': id(logger)}

    @app.get('/file')
    def file_log(logger: Logger = Depends(provide(Logger, 'file'))):
        return {'type': type(logger).__name__}

    @app.get('/optional')
    def optional(logger=Depends(provide(Logger, optional=True))):
        return {'present': logger is not None}

    @app.get('/exploding')
    def exploding(request: Request):
        resolve_service(request, Exploding)
        return {}

    @app.get('/manual')
    def manual(request: Request):
        inst = resolve_optional_service(request, Logger, 'file')
        return {'present': inst is not None}

    return app


def test_resolves_singleton_across_requests():
    c = ObjectContainer()
    c.register_type(Logger, ConsoleLogger)
    client = TestClient(_make_app(c))
    r1 = client.get('/log')
    r2 = client.get('/log')
    assert r1.status_code == 200
    assert r1.json()['type'] == 'ConsoleLogger'
    assert r1.json()['id'] == r2.json()['id']
    assert c.resolve(Logger).lines == ['hit', 'hit']


def test_named_dependency():
    c = ObjectContainer()
    c.register_type(Logger, FileLogger, service_name='file', lifecycle=Lifecycle.TRANSIENT)
    client = TestClient(_make_app(c))
    r = client.get('/file')
    assert r.status_code == 200
    assert r.json() == {'type': 'FileLogger'}
    assert client.get('/manual').json() == {'present': True}


def test_missing_service_is_500():
    client = TestClient(_make_app(ObjectContainer()))
    r = client.get('/log')
    assert r.status_code == 500
    assert 'not configured' in r.json()['detail']
    assert client.get('/optional').json() == {'present': False}
    assert client.get('/manual').json() == {'present': False}


def test_missing_container_is_500():
    client = TestClient(_make_app())
    r = client.get('/log')
    assert r.status_code == 500
    assert r.json()['detail'] == 'Service container not configured'
    assert client.get('/optional').json() == {'present': False}


def test_construction_failure_is_500():
    c = ObjectContainer()
    c.register_type(Exploding)
    client = TestClient(_make_app(c))
    r = client.get('/exploding')
    assert r.status_code == 500
    assert 'could not be created' in r.json()['detail']


def test_register_service_on_client_helper():
    client = TestClient(_make_app())
    fake = ConsoleLogger()
    register_service_on_client(client, Logger, fake)
    r = client.get('/log')
    assert r.status_code == 200
    assert fake.lines == ['hit']
