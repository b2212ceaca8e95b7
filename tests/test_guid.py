import re
import threading

from services.crm import guid
from services.crm.guid import GuidGenerator, RequestContext, get_uuid

GUID_PATTERN = re.compile(r"^[0-9A-F]{8}-[0-9A-F]{4}-[0-9A-F]{4}-[0-9A-F]{4}-[0-9A-F]{12}$")


def test_guid_shape():
    value = GuidGenerator().generate()
    assert len(value) == 36
    assert GUID_PATTERN.match(value)


def test_consecutive_guids_differ():
    generator = GuidGenerator()
    first = generator.generate()
    second = generator.generate()
    assert first != second
    assert generator.previous == second


def test_many_guids_are_unique():
    generator = GuidGenerator()
    values = {generator.generate("incident") for _ in range(2000)}
    assert len(values) == 2000


def test_generators_with_same_context_differ():
    context = RequestContext(request_time=0, user_agent="test", remote_addr="127.0.0.1", remote_port="443")
    assert GuidGenerator(context).generate() != GuidGenerator(context).generate()


def test_concurrent_generation_is_unique():
    generator = GuidGenerator()
    results = []
    lock = threading.Lock()

    def worker():
        values = [generator.generate() for _ in range(200)]
        with lock:
            results.extend(values)

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert len(results) == 1600
    assert len(set(results)) == 1600
    assert all(GUID_PATTERN.match(value) for value in results)


def test_get_uuid_uses_default_generator():
    first = get_uuid()
    second = get_uuid("namespace")
    assert first != second
    assert guid.get_generator().previous == second
    assert GUID_PATTERN.match(second)


def test_request_context_fingerprint():
    context = RequestContext(request_time=1700000000, user_agent="sdk", remote_addr="10.0.0.1", remote_port="8080")
    assert context.fingerprint() == "1700000000sdk10.0.0.18080"


def test_request_context_from_environment_uses_call_time(monkeypatch):
    context = RequestContext.from_environment()
    assert context.request_time is None

    monkeypatch.setattr(guid.time, "time", lambda: 1700000000.5)
    assert context.fingerprint().startswith("1700000000")
    monkeypatch.setattr(guid.time, "time", lambda: 1700000300.0)
    assert context.fingerprint().startswith("1700000300")
    assert context.user_agent == guid.CRM_USER_AGENT
