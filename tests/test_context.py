import uuid

import pytest

from reqlog import context
from reqlog.context import LogFieldKey
from reqlog.models import AuthorizedInfo, SystemInfo


@pytest.mark.parametrize(
    "value, member",
    [
        ("http_request", LogFieldKey.HTTP_REQUEST),
        ("system", LogFieldKey.SYSTEM),
        ("authorized", LogFieldKey.AUTHORIZED),
    ],
)
def test_log_field_key_strings(value, member):
    key = LogFieldKey(value)
    assert key is member
    assert str(key) == value


def test_system_info_round_trip():
    environ = {}
    info = SystemInfo.for_environment("dev")
    context.set_system_info(environ, info)
    assert context.get_system_info(environ) == info


def test_authorized_info_round_trip_and_overwrite():
    environ = {}
    context.set_authorized_info(environ, AuthorizedInfo.initial())
    updated = AuthorizedInfo(tenant_id="tenant_123", member_id="member_456", role="general")
    context.set_authorized_info(environ, updated)
    assert context.get_authorized_info(environ) == updated


def test_missing_values_are_none():
    environ = {}
    assert context.get_system_info(environ) is None
    assert context.get_authorized_info(environ) is None
    assert context.get_request_id(environ) is None
    assert context.get_status_code(environ) is None


def test_request_id_is_uuid_and_stored():
    environ = {}
    request_id = context.set_request_id(environ)
    assert str(uuid.UUID(request_id)) == request_id
    assert context.get_request_id(environ) == request_id


def test_request_ids_are_unique():
    ids = {context.set_request_id({}) for _ in range(50)}
    assert len(ids) == 50


def test_status_code_round_trip():
    environ = {}
    context.set_status_code(environ, 404)
    assert context.get_status_code(environ) == 404


def test_wrong_types_are_ignored():
    environ = {
        "reqlog.system_info": "nope",
        "reqlog.authorized_info": {"role": "general"},
        "reqlog.request_id": 5,
        "reqlog.status_code": "200",
    }
    assert context.get_system_info(environ) is None
    assert context.get_authorized_info(environ) is None
    assert context.get_request_id(environ) is None
    assert context.get_status_code(environ) is None